"""Route post-processing before rendering.

A renderer draws a route as one continuous stroke unless told to lift the
pen. ``split_route_when`` turns one route into the strokes that are actually
drawn, given a predicate deciding which consecutive points may be joined.
"""

from collections.abc import Callable, Sequence

from penroute.core.geometry import euclidean_distance, round_point
from penroute.domain import Point, Route, RouteSet, drop_degenerate, freeze_route

ConnectPredicate = Callable[[Point, Point], bool]


def max_distance_predicate(max_distance: float) -> ConnectPredicate:
    """Join consecutive points only when closer than ``max_distance``."""

    def should_connect(a: Point, b: Point) -> bool:
        return euclidean_distance(a, b) < max_distance

    return should_connect


def split_route_when(route: Sequence[Point], should_connect: ConnectPredicate) -> RouteSet:
    """Split a route wherever the pen must be lifted.

    Args:
        route: Points in drawing order
        should_connect: Decides whether the segment between two consecutive
            points is drawn

    Returns:
        Drawn strokes in order; single points left between two lifts are
        dropped
    """
    strokes: list[list[Point]] = []
    current: list[Point] = []
    for p in route:
        if current and not should_connect(current[-1], p):
            strokes.append(current)
            current = []
        current.append(p)
    if current:
        strokes.append(current)
    return drop_degenerate(strokes)


def round_route(route: Sequence[Point], precision: float) -> Route:
    return freeze_route(round_point(p, precision) for p in route)


def route_length(route: Sequence[Point]) -> float:
    return sum(euclidean_distance(a, b) for a, b in zip(route, route[1:]))
