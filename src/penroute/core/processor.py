"""Parallel processing orchestration for the cell routing pipeline.

This module coordinates the full workflow: sample Voronoi sites under a
radial density, partition the unit square, keep reasonably sized cells,
then sample and order points inside every cell using worker processes.

Key components:
- process_cell: Top-level picklable function for parallel execution
- CellRouteProcessor: Main orchestrator class
- CellRouteResult: Cells and their routes, index-aligned
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from penroute.config import PageConfig, PenrouteSettings, RouteConfig, RouteMode, SamplingConfig
from penroute.core.density import ConstantDensity, PolygonMaskedDensity, RadialDensity
from penroute.core.sampling import DensityField, rng_from_seed, sample_candidates, spawn_rngs
from penroute.core.spiral import route_spiral
from penroute.core.strokes import max_distance_predicate, split_route_when
from penroute.core.tour import AnnealingTourSolver, tsp_route
from penroute.core.voronoi import sample_square_voronoi_polys
from penroute.domain import (
    Polygon,
    Rect,
    Route,
    RouteSet,
    drop_degenerate,
    freeze_route,
    route_from_dicts,
    route_to_dicts,
)
from penroute.exceptions import CellProcessingError
from penroute.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_cell(
    cell_index: int,
    polygon_dict: dict[str, Any],
    density: DensityField,
    rng: np.random.Generator,
    sampling_dict: dict[str, Any],
    route_dict: dict[str, Any],
    page_dict: dict[str, Any],
) -> dict[str, Any]:
    """Sample and order the points of a single cell.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Deserializes the cell, samples it and returns the route.

    Args:
        cell_index: Position of the cell in the kept-cell list
        polygon_dict: Serialized cell (from Polygon.to_dict())
        density: Picklable density field evaluated in normalized coordinates
        rng: Generator reserved for this cell
        sampling_dict: Serialized sampling configuration
        route_dict: Serialized route configuration
        page_dict: Serialized page configuration

    Returns:
        Dictionary containing either:
        - Success: {"cell_index": int, "route": list, "points": int, "duration_ms": float}
        - Error: {"error": str, "cell_index": int, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        polygon = Polygon.from_dict(polygon_dict)
        sampling = SamplingConfig(**sampling_dict)
        route_config = RouteConfig(**route_dict)
        page = PageConfig(**page_dict)

        masked = PolygonMaskedDensity(polygon, density, sampling.cell_density_factor)
        local = sample_candidates(masked, sampling.cell_grid_dim, sampling.max_cell_samples, rng)

        page_rect = Rect(0.0, 0.0, page.width, page.height)
        points = [page_rect.project(masked.to_world(p)) for p in local]

        route: Route
        if len(points) < route_config.min_cell_points:
            route = ()
        elif route_config.mode == RouteMode.SPIRAL:
            route = route_spiral(points)
        elif route_config.mode == RouteMode.TSP:
            solver = AnnealingTourSolver(seed=cell_index)
            route = tsp_route(points, route_config.tsp_time_budget, solver)
        else:
            route = freeze_route(points)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "cell_index": cell_index,
            "route": route_to_dicts(route),
            "points": len(points),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # Capture full traceback for debugging
        duration_ms = (time.time() - start_time) * 1000
        tb = traceback.format_exc()
        return {
            "error": str(e),
            "cell_index": cell_index,
            "traceback": tb,
            "duration_ms": duration_ms,
        }


@dataclass
class CellRouteResult:
    """Kept cells and their routes.

    ``routes[i]`` belongs to ``polygons[i]``; cells that produced no route
    hold an empty tuple so the alignment is never broken.

    Attributes:
        polygons: Kept Voronoi cells in normalized coordinates
        routes: One route per cell, in page coordinates
        stats: Processing statistics
    """

    polygons: list[Polygon]
    routes: list[Route]
    stats: ProcessingStats = field(default_factory=ProcessingStats)

    def drawable(self) -> RouteSet:
        """Routes with at least two points, in cell order."""
        return drop_degenerate(self.routes)

    def strokes(self, connect_distance: float) -> RouteSet:
        """Split every route where consecutive points are too far apart."""
        should_connect = max_distance_predicate(connect_distance)
        strokes: RouteSet = []
        for route in self.routes:
            strokes.extend(split_route_when(route, should_connect))
        return strokes

    def raise_for_errors(self) -> None:
        """Raise for the first cell that failed, if any.

        Raises:
            CellProcessingError: If at least one cell failed
        """
        if self.stats.errors:
            cell_index, reason = self.stats.errors[0]
            raise CellProcessingError(cell_index, reason)


class CellRouteProcessor:
    """Orchestrates parallel per-cell route generation.

    Manages the complete workflow:
    1. Sample Voronoi sites under a radial density
    2. Partition the unit square and drop oversized cells
    3. Sample and order points inside each cell in worker processes
    4. Merge results back in cell order and update statistics

    Example:
        settings = PenrouteSettings()
        processor = CellRouteProcessor(settings)
        result = processor.process(density=RadialDensity(), seed=10)
    """

    def __init__(self, config: PenrouteSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Penroute settings
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )

    def partition(self, rng: np.random.Generator) -> tuple[int, list[Polygon], list[Polygon]]:
        """Sample sites and compute the kept cells.

        Returns:
            Tuple of (site count, all cells, kept cells)
        """
        sampling = self.config.sampling
        voronoi = self.config.voronoi

        site_density = RadialDensity(
            center=voronoi.center,
            scale=voronoi.density_scale,
            bias=voronoi.density_bias,
        )
        sites = sample_candidates(
            site_density,
            sampling.voronoi_grid_dim,
            sampling.voronoi_samples,
            rng,
        )
        polygons = sample_square_voronoi_polys(sites, voronoi.pad)

        # drop cells whose bounding square is too large
        kept = [
            poly
            for poly in polygons
            if not poly.is_empty() and poly.bounding_square_edge() < voronoi.poly_threshold
        ]
        return len(sites), polygons, kept

    def process(
        self,
        density: DensityField | None = None,
        seed: int | float = 0,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> CellRouteResult:
        """Build one route per kept cell.

        Args:
            density: Picklable density field over normalized coordinates
                (defaults to a constant density of 1)
            seed: Seed for site sampling and per-cell generators
            max_workers: Maximum worker processes (None = config value;
                1 runs every cell in this process)
            progress_callback: Optional callback(completed, total, cell_index, success)
                for progress updates

        Returns:
            CellRouteResult with index-aligned cells and routes

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        processing_logger = ProcessingLogger(self.logger)
        stats = processing_logger.stats
        stats.start_time = time.time()

        if density is None:
            density = ConstantDensity(1.0)

        # Use config default if max_workers not specified
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting cell processing",
            seed=seed,
            mode=self.config.route.mode.value,
            max_workers=max_workers,
        )

        rng = rng_from_seed(seed)
        site_count, polygons, kept = self.partition(rng)
        processing_logger.log_partition(sites=site_count, cells=len(polygons), kept=len(kept))

        cell_rngs = spawn_rngs(seed, len(kept))
        routes: list[Route] = [() for _ in kept]
        if kept:
            self._process_cells(
                polygons=kept,
                density=density,
                cell_rngs=cell_rngs,
                routes=routes,
                max_workers=max_workers,
                processing_logger=processing_logger,
                progress_callback=progress_callback,
            )
        else:
            self.logger.info("No cells to process")

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            cells=len(kept),
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            routes=stats.routes_built,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return CellRouteResult(polygons=kept, routes=routes, stats=stats)

    def _process_cells(
        self,
        polygons: list[Polygon],
        density: DensityField,
        cell_rngs: list[np.random.Generator],
        routes: list[Route],
        max_workers: int | None,
        processing_logger: ProcessingLogger,
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> None:
        """Process cells, in worker processes unless ``max_workers`` is 1.

        Results are written into ``routes`` at their cell index, so the
        output order does not depend on completion order.
        """
        # Serialize configuration for workers
        sampling_dict = self.config.sampling.model_dump()
        route_dict = self.config.route.model_dump()
        page_dict = self.config.page.model_dump()

        tasks = [
            (idx, poly.to_dict(), density, cell_rngs[idx], sampling_dict, route_dict, page_dict)
            for idx, poly in enumerate(polygons)
        ]
        total = len(tasks)

        self.logger.info("Starting cell sampling", cell_count=total, max_workers=max_workers)

        if max_workers == 1:
            for completed, task in enumerate(tasks, start=1):
                processing_logger.log_cell_start(task[0])
                success = self._collect(task[0], process_cell(*task), routes, processing_logger)
                if progress_callback is not None:
                    progress_callback(completed, total, task[0], success)
            return

        completed = 0
        pending_futures: dict[Future, int] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            # Submit all tasks
            for task in tasks:
                processing_logger.log_cell_start(task[0])
                pending_futures[executor.submit(process_cell, *task)] = task[0]

            try:
                # Collect results as they complete
                for future in as_completed(list(pending_futures)):
                    cell_index = pending_futures.pop(future)
                    success = False

                    try:
                        success = self._collect(cell_index, future.result(), routes, processing_logger)
                    except Exception as e:
                        # Executor-level error
                        processing_logger.log_cell_error(
                            cell_index=cell_index,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    # Update progress
                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, cell_index, success)

            except KeyboardInterrupt:
                # Cancel pending futures
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                processing_logger.stats.was_cancelled = True
                processing_logger.stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise

    def _collect(
        self,
        cell_index: int,
        result: dict[str, Any],
        routes: list[Route],
        processing_logger: ProcessingLogger,
    ) -> bool:
        if "error" in result:
            processing_logger.log_cell_error(
                cell_index=cell_index,
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
            )
            return False

        route = route_from_dicts(result["route"])
        routes[cell_index] = route
        processing_logger.log_cell_complete(
            cell_index=cell_index,
            points=len(route),
            duration_ms=result.get("duration_ms", 0.0),
        )
        if not route:
            processing_logger.log_cell_skipped(
                cell_index,
                f"{result.get('points', 0)} points sampled, "
                f"{self.config.route.min_cell_points} required",
            )
        return True
