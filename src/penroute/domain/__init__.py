"""Domain models for penroute.

This module contains the geometric value types shared by every component.
All models are designed to be:

- Immutable where possible (using frozen dataclasses and tuples)
- Serializable for inter-process communication (parallel processing)
- Independent of shapely/numpy implementation details

Key classes:
- Point: A 2D point
- Rect: An axis-aligned rectangle (drawing boundaries)
- Polygon: A closed exterior ring (Voronoi cell)
- Route: An ordered tuple of points, drawn in order
"""

from penroute.domain.point import Point, Rect
from penroute.domain.polygon import Polygon
from penroute.domain.route import (
    Route,
    RouteSet,
    drop_degenerate,
    freeze_route,
    is_degenerate,
    route_from_dicts,
    route_to_dicts,
)

__all__: list[str] = [
    # Core types
    "Point",
    "Rect",
    "Polygon",
    "Route",
    "RouteSet",
    # Route helpers
    "drop_degenerate",
    "freeze_route",
    "is_degenerate",
    "route_from_dicts",
    "route_to_dicts",
]
