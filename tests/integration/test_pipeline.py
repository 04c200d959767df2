"""End-to-end tests for the cell routing pipeline."""

import pytest

from penroute.config import (
    CollisionDiscipline,
    PenrouteSettings,
    ProcessingConfig,
    RouteConfig,
    RouteMode,
    SamplingConfig,
)
from penroute.core import (
    CellRouteProcessor,
    RadialDensity,
    collide_routes,
    group_by_proximity,
    rng_from_seed,
    route_spiral,
    sample_candidates,
    sample_square_voronoi_polys,
)
from penroute.domain import Rect


def small_settings(mode: RouteMode = RouteMode.RAW, workers: int = 1) -> PenrouteSettings:
    return PenrouteSettings(
        sampling=SamplingConfig(
            voronoi_grid_dim=50,
            voronoi_samples=40,
            cell_grid_dim=20,
            max_cell_samples=40,
            cell_density_factor=0.5,
        ),
        route=RouteConfig(mode=mode, tsp_time_budget=0.01),
        processing=ProcessingConfig(max_workers=workers),
    )


class TestPipeline:
    """Full runs of the cell processor."""

    @pytest.mark.parametrize("mode", list(RouteMode))
    def test_routes_on_page(self, mode: RouteMode) -> None:
        """Every route point lies on the page."""
        settings = small_settings(mode)
        result = CellRouteProcessor(settings).process(RadialDensity(), seed=10)

        page = Rect(0.0, 0.0, settings.page.width, settings.page.height)
        assert result.stats.error_count == 0
        assert len(result.drawable()) > 0
        for route in result.routes:
            assert all(page.contains(p) for p in route)

    def test_ordering_modes_share_points(self) -> None:
        """Ordering changes the order inside a cell, never the points."""
        raw = CellRouteProcessor(small_settings(RouteMode.RAW)).process(seed=2)
        spiral = CellRouteProcessor(small_settings(RouteMode.SPIRAL)).process(seed=2)

        assert len(raw.routes) == len(spiral.routes)
        for a, b in zip(raw.routes, spiral.routes):
            assert sorted(p.to_tuple() for p in a) == sorted(p.to_tuple() for p in b)

    def test_process_pool_matches_inline(self) -> None:
        """Worker processes give the same routes, in the same order, as inline runs."""
        inline = CellRouteProcessor(small_settings(workers=1)).process(RadialDensity(), seed=7)
        pooled = CellRouteProcessor(small_settings(workers=2)).process(RadialDensity(), seed=7)

        assert pooled.stats.error_count == 0
        assert pooled.routes == inline.routes
        assert [p.points for p in pooled.polygons] == [p.points for p in inline.polygons]

    def test_strokes_respect_connect_distance(self) -> None:
        settings = small_settings(RouteMode.SPIRAL)
        result = CellRouteProcessor(settings).process(seed=1)

        for stroke in result.strokes(settings.route.connect_distance):
            assert len(stroke) >= 2
            for a, b in zip(stroke, stroke[1:]):
                assert ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5 < settings.route.connect_distance


class TestComposition:
    """Building blocks used together the way drawing scripts combine them."""

    def test_spiral_per_group_then_collide(self) -> None:
        """Grouped points become spirals, then mutual collisions are resolved."""
        points = sample_candidates(RadialDensity(), 40, 120, rng_from_seed(5))
        groups = group_by_proximity(points, 0.05)
        spirals = [route_spiral(group) for group in groups]

        for discipline in CollisionDiscipline:
            routes = collide_routes(spirals, discipline)
            assert all(len(r) >= 2 for r in routes)
            assert len(routes) <= len(spirals)

    def test_partition_of_sampled_sites(self) -> None:
        sites = sample_candidates(RadialDensity(), 60, 50, rng_from_seed(11))
        polys = sample_square_voronoi_polys(sites, 0.02)
        assert len(polys) == len(sites)
        assert sum(p.area() for p in polys) == pytest.approx(1.0, abs=1e-9)
