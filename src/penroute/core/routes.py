"""Incremental route construction with collision resolution.

A caller supplies one origin per route and a step function::

    step(current, step_index, route_index) -> (next_point, is_terminal) | None

``step_index`` starts at 1 for the first point after the origin. Returning
None means the route has no more points. The caller owns everything about
where routes go; this module only decides where they must stop.

Three disciplines are available:
- plain: routes are built independently, no collision checks
- sequential: routes are built one after the other; a route stops at the
  first segment crossing any route built before it
- parallel: all routes advance one step index at a time; a route stops at
  the first segment crossing the current state of any other route

When several crossings are found for one segment, the one nearest to the
current point along the x axis wins. This is an approximation of the
nearest crossing that is exact for horizontal segments.

The builder enforces no step limit: a step function that never returns
None and never flags a terminal point loops forever.
"""

import math
import time
from collections.abc import Callable, Iterable, Sequence

import structlog

from penroute.config import CollisionDiscipline
from penroute.core.geometry import segment_intersection
from penroute.domain import Point, RouteSet, drop_degenerate
from penroute.exceptions import InvalidInputError

StepResult = tuple[Point, bool] | None
StepFunction = Callable[[Point, int, int], StepResult]


def find_best_collision_1d(origin: Point, candidates: Iterable[Point]) -> Point | None:
    """Pick the candidate closest to ``origin`` by horizontal distance.

    Ties keep the first candidate.
    """
    best_dx = math.inf
    best: Point | None = None
    for q in candidates:
        dx = abs(q.x - origin.x)
        if dx < best_dx:
            best = q
            best_dx = dx
    return best


def collide_route_segment(route: Sequence[Point], start: Point, end: Point) -> Point | None:
    """Find where segment (start, end) first crosses ``route``.

    Args:
        route: Polyline to test against
        start: Current point of the route being built
        end: Proposed next point

    Returns:
        Nearest crossing (see ``find_best_collision_1d``) or None
    """
    # TODO: bucket route segments in a grid index once routes get long
    hits = []
    for a, b in zip(route, route[1:]):
        hit = segment_intersection(start, end, a, b)
        if hit is not None:
            hits.append(hit)
    return find_best_collision_1d(start, hits)


def _check_origins(origins: Sequence[Point]) -> None:
    for j, origin in enumerate(origins):
        if not origin.is_finite():
            raise InvalidInputError(f"Route {j} has a non-finite origin: {origin}")


def _nearest_collision(
    routes: Sequence[Sequence[Point]],
    skip: int | None,
    start: Point,
    end: Point,
) -> Point | None:
    hits = []
    for k, other in enumerate(routes):
        if k == skip:
            continue
        hit = collide_route_segment(other, start, end)
        if hit is not None:
            hits.append(hit)
    return find_best_collision_1d(start, hits)


def build_routes(origins: Sequence[Point], step: StepFunction) -> RouteSet:
    """Build every route independently, without collision checks."""
    _check_origins(origins)
    routes: list[list[Point]] = []
    for j, origin in enumerate(origins):
        route = [origin]
        current = origin
        i = 1
        while (proposal := step(current, i, j)) is not None:
            nxt, ends = proposal
            route.append(nxt)
            if ends:
                break
            i += 1
            current = nxt
        routes.append(route)
    return drop_degenerate(routes)


def build_routes_with_collision_seq(origins: Sequence[Point], step: StepFunction) -> RouteSet:
    """Build routes in order, each one stopping at routes built before it.

    Earlier routes have priority: a route is never cut by a later one.
    """
    _check_origins(origins)
    built: list[list[Point]] = []
    for j, origin in enumerate(origins):
        route = [origin]
        current = origin
        i = 1
        while (proposal := step(current, i, j)) is not None:
            nxt, ends = proposal
            collision = _nearest_collision(built, None, current, nxt)
            if collision is not None:
                route.append(collision)
                break
            route.append(nxt)
            if ends:
                break
            i += 1
            current = nxt
        built.append(route)
    return drop_degenerate(built)


def build_routes_with_collision_par(origins: Sequence[Point], step: StepFunction) -> RouteSet:
    """Grow all routes in lock-step, each one stopping at any other route.

    At step index i every unfinished route proposes its next point, in
    route order, and is checked against the routes as they stand at that
    moment. No route has priority by position in the input.
    """
    _check_origins(origins)
    routes: list[list[Point]] = [[origin] for origin in origins]
    finished = [False] * len(routes)

    i = 1
    while True:
        progressed = False
        for j, route in enumerate(routes):
            if finished[j]:
                continue
            current = route[-1]
            proposal = step(current, i, j)
            if proposal is None:
                finished[j] = True
                continue
            nxt, ends = proposal
            collision = _nearest_collision(routes, j, current, nxt)
            if collision is not None:
                route.append(collision)
                finished[j] = True
            elif ends:
                route.append(nxt)
                finished[j] = True
            else:
                route.append(nxt)
                progressed = True
        if not progressed:
            break
        i += 1

    return drop_degenerate(routes)


_BUILDERS: dict[CollisionDiscipline, Callable[[Sequence[Point], StepFunction], RouteSet]] = {
    CollisionDiscipline.PLAIN: build_routes,
    CollisionDiscipline.SEQUENTIAL: build_routes_with_collision_seq,
    CollisionDiscipline.PARALLEL: build_routes_with_collision_par,
}


def _replay_step(routes: Sequence[Sequence[Point]]) -> StepFunction:
    def step(_current: Point, i: int, j: int) -> StepResult:
        route = routes[j]
        if i >= len(route):
            return None
        return route[i], i == len(route) - 1

    return step


class RouteBuilder:
    """Builds routes from origins and a step function under one discipline.

    Example:
        builder = RouteBuilder(CollisionDiscipline.PARALLEL)
        routes = builder.build(origins, step)
    """

    def __init__(
        self,
        discipline: CollisionDiscipline = CollisionDiscipline.SEQUENTIAL,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.discipline = CollisionDiscipline(discipline)
        self.logger = logger if logger is not None else structlog.get_logger("penroute.routes")

    def build(self, origins: Sequence[Point], step: StepFunction) -> RouteSet:
        """Build one route per origin and drop degenerate results.

        Args:
            origins: First point of each route
            step: Caller-owned step function

        Returns:
            Routes of length >= 2, in origin order

        Raises:
            InvalidInputError: If an origin has NaN or infinite coordinates
        """
        start_time = time.time()
        routes = _BUILDERS[self.discipline](origins, step)
        self.logger.debug(
            "Routes built",
            discipline=self.discipline.value,
            origins=len(origins),
            routes=len(routes),
            points=sum(len(r) for r in routes),
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )
        return routes

    def collide(self, routes: Sequence[Sequence[Point]]) -> RouteSet:
        """Truncate precomputed routes where they cross each other.

        Each route is replayed point by point through the step protocol, so
        the same discipline decides which route stops first.
        """
        candidates = [r for r in routes if r]
        origins = [r[0] for r in candidates]
        return self.build(origins, _replay_step(candidates))


def collide_routes(
    routes: Sequence[Sequence[Point]],
    discipline: CollisionDiscipline = CollisionDiscipline.SEQUENTIAL,
) -> RouteSet:
    """Truncate precomputed routes at their mutual collisions."""
    return RouteBuilder(discipline).collide(routes)
