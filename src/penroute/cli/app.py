"""CLI application entry point for penroute.

This module provides the main CLI interface using Typer.
"""

import json
import os
from pathlib import Path
from typing import Annotated

import typer

from penroute import __version__
from penroute.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_cell_table,
    print_error,
    print_header,
    print_partition,
    print_processing_info,
    print_run_info,
    print_step,
    print_success,
)
from penroute.config import (
    LoggingConfig,
    PageConfig,
    PenrouteSettings,
    ProcessingConfig,
    RouteConfig,
    RouteMode,
)
from penroute.core import CellRouteProcessor, ConstantDensity, RadialDensity, rng_from_seed
from penroute.core.sampling import DensityField
from penroute.domain import RouteSet, route_to_dicts
from penroute.exceptions import PenrouteError

DENSITIES = ("constant", "radial")

# Create the Typer app
app = typer.Typer(
    name="penroute",
    help="Generate pen-plotter routes from Voronoi cells sampled under a density field.",
    add_completion=False,
    no_args_is_help=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Penroute[/bold blue] v{__version__}")
        raise typer.Exit()


def _make_density(name: str) -> DensityField:
    if name == "radial":
        return RadialDensity()
    return ConstantDensity(1.0)


@app.command()
def generate(
    seed: Annotated[
        float,
        typer.Option(
            "--seed",
            "-s",
            help="Seed for site and cell sampling",
        ),
    ] = 0.0,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Point ordering inside each cell (raw|spiral|tsp)",
        ),
    ] = "raw",
    density: Annotated[
        str,
        typer.Option(
            "--density",
            "-d",
            help="Density field sampled inside cells (constant|radial)",
        ),
    ] = "constant",
    width: Annotated[
        float,
        typer.Option("--width", help="Page width in mm", min=1.0),
    ] = 210.0,
    height: Annotated[
        float,
        typer.Option("--height", help="Page height in mm", min=1.0),
    ] = 297.0,
    connect_distance: Annotated[
        float,
        typer.Option(
            "--connect-distance",
            help="Lift the pen between points further apart than this (mm)",
            min=0.001,
        ),
    ] = 20.0,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write strokes as JSON to this path",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1 = no pool)",
            min=1,
        ),
    ] = None,
    list_cells: Annotated[
        bool,
        typer.Option(
            "--list-cells",
            help="Compute the Voronoi partition, list kept cells and exit",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Generate one route per Voronoi cell and print a summary.

    Sites are sampled with a radial density centered on the page, the unit
    square is partitioned into Voronoi cells and each reasonably small cell
    is filled with points ordered into a route, in page millimeters.

    Example:
        penroute --seed 10 --mode spiral -o routes.json
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    try:
        route_mode = RouteMode(mode.lower())
    except ValueError:
        print_error(
            f"Invalid mode: {mode}",
            details="Valid values: raw, spiral, tsp",
        )
        raise typer.Exit(code=1)

    if density.lower() not in DENSITIES:
        print_error(
            f"Invalid density: {density}",
            details=f"Valid values: {', '.join(DENSITIES)}",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = PenrouteSettings(
        page=PageConfig(width=width, height=height),
        route=RouteConfig(mode=route_mode, connect_distance=connect_distance),
        processing=ProcessingConfig(max_workers=workers),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    try:
        processor = CellRouteProcessor(settings)

        if list_cells:
            _handle_list_cells(processor, seed, quiet, verbose)
            raise typer.Exit(code=0)

        if not quiet:
            print_run_info(seed, route_mode.value, width, height)
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Processing cells")
            print_processing_info(actual_workers, is_auto=(workers is None))

        cell_density = _make_density(density.lower())

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task("Processing cells", total=None)

                    def update_progress(completed: int, total: int, *_: object) -> None:
                        progress.update(task_id, completed=completed, total=total)

                    result = processor.process(
                        density=cell_density,
                        seed=seed,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                result = processor.process(density=cell_density, seed=seed, max_workers=workers)
        except KeyboardInterrupt:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary()
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        strokes = result.strokes(settings.route.connect_distance)
        if output is not None:
            _write_strokes(output, strokes)

        stats = result.stats
        if not quiet:
            print_partition(stats.sites_sampled, stats.cells_total, stats.cells_kept)
            print_success(
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                routes=len(result.drawable()),
                strokes=len(strokes),
                points=stats.points_sampled,
                errors=stats.error_count,
                output_path=str(output) if output is not None else None,
                avg_time_ms=stats.avg_cell_time_ms,
                min_time_ms=stats.min_cell_time_ms,
                max_time_ms=stats.max_cell_time_ms,
            )

        if stats.error_count > 0:
            raise typer.Exit(code=1)

    except PenrouteError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write routes: {e}")
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_list_cells(
    processor: CellRouteProcessor, seed: float, quiet: bool, verbose: bool
) -> None:
    """Handle --list-cells mode.

    Args:
        processor: Configured processor
        seed: Seed for site sampling
        quiet: Suppress output
        verbose: Show the cell table
    """
    if not quiet:
        print_step("Partitioning")

    sites, polygons, kept = processor.partition(rng_from_seed(seed))

    if not quiet:
        print_partition(sites, len(polygons), len(kept))
        if verbose and kept:
            print_cell_table(kept)
    else:
        console.print(f"{len(kept)}")


def _write_strokes(path: Path, strokes: RouteSet) -> None:
    """Write strokes as a JSON list of point lists.

    Args:
        path: Destination file
        strokes: Strokes in page coordinates
    """
    payload = {
        "version": __version__,
        "strokes": [route_to_dicts(stroke) for stroke in strokes],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
