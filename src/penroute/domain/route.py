"""Route types.

A Route is an ordered, immutable sequence of points whose order is the
drawing order. Producers build routes as lists and freeze them with
``freeze_route`` once no more points will be added.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from penroute.domain.point import Point

Route = tuple[Point, ...]
RouteSet = list[Route]


def freeze_route(points: Iterable[Point]) -> Route:
    """Turn a point sequence under construction into an immutable route."""
    return tuple(points)


def is_degenerate(route: Sequence[Point]) -> bool:
    """A route with one point or less draws nothing."""
    return len(route) <= 1


def drop_degenerate(routes: Iterable[Sequence[Point]]) -> RouteSet:
    """Freeze routes and drop every route of length <= 1, keeping order."""
    return [freeze_route(r) for r in routes if not is_degenerate(r)]


def route_to_dicts(route: Sequence[Point]) -> list[dict[str, Any]]:
    """Serialize a route for IPC."""
    return [p.to_dict() for p in route]


def route_from_dicts(data: Iterable[dict[str, Any]]) -> Route:
    """Deserialize a route produced by ``route_to_dicts``."""
    return tuple(Point.from_dict(p) for p in data)
