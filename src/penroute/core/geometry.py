"""Geometric operations for route construction and collision checks.

This module provides core mathematical utilities for:
- Segment/segment intersection (cross-product parametrization)
- Point-in-polygon testing (ray casting algorithm)
- Clipping a segment against rectangular boundaries
- Bounding rectangles and small vector helpers

All functions are pure, stateless, and designed for use in parallel processing.
None of them raise on degenerate input: zero-length or parallel segments
simply do not intersect.
"""

import math
from collections.abc import Sequence

from penroute.domain import Point, Rect
from penroute.exceptions import EmptyPolygonError


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def segment_intersection(p1: Point, p2: Point, q1: Point, q2: Point) -> Point | None:
    """Find the intersection point of two finite line segments.

    With r = p2 - p1 and s = q2 - q1, the segments are parallel when
    r x s is exactly zero. Parallel segments never intersect, collinear
    overlapping ones included. Otherwise the parameters t (along p) and
    u (along q) are solved and the intersection exists only when both
    lie in the closed interval [0, 1].

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        q1: First endpoint of segment 2
        q2: Second endpoint of segment 2

    Returns:
        Point at intersection if segments intersect, None otherwise

    Examples:
        >>> segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        Point(x=1.0, y=1.0)
        >>> segment_intersection(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)) is None
        True
    """
    rx, ry = p2.x - p1.x, p2.y - p1.y
    sx, sy = q2.x - q1.x, q2.y - q1.y

    r_cross_s = _cross(rx, ry, sx, sy)
    if r_cross_s == 0.0:
        return None

    qpx, qpy = q1.x - p1.x, q1.y - p1.y
    t = _cross(qpx, qpy, sx / r_cross_s, sy / r_cross_s)
    u = _cross(qpx, qpy, rx / r_cross_s, ry / r_cross_s)

    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return Point(p1.x + t * rx, p1.y + t * ry)

    return None


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Points exactly on the boundary follow a half-open convention: an edge
    counts only when the point is strictly left of it, and a vertex counts
    only for the edge going upward from it. For an axis-aligned rectangle
    this makes the left and bottom edges inside and the right and top edges
    outside, so adjacent cells never both claim a shared edge.

    Args:
        point: The point to test
        polygon: Points forming the polygon ring (closing point optional)

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1, 1), square)
        True
        >>> point_in_polygon(Point(3, 3), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def strictly_in_boundaries(p: Point, boundaries: Rect) -> bool:
    return boundaries.contains_strictly(p)


def out_of_boundaries(p: Point, boundaries: Rect) -> bool:
    return not boundaries.contains(p)


def clip_to_boundaries(p1: Point, p2: Point, boundaries: Rect) -> Point | None:
    """Find where a segment leaves (or touches) rectangular boundaries.

    Args:
        p1: Segment start
        p2: Segment end
        boundaries: Drawing area

    Returns:
        None when both endpoints are strictly inside. Otherwise the first
        unique intersection with the bottom, left, right then top edge, or
        None if the segment crosses no edge.
    """
    if strictly_in_boundaries(p1, boundaries) and strictly_in_boundaries(p2, boundaries):
        return None

    for edge_start, edge_end in boundaries.edges():
        hit = segment_intersection(p1, p2, edge_start, edge_end)
        if hit is not None:
            return hit

    return None


def bounding_rect(points: Sequence[Point]) -> Rect:
    """Calculate the bounding rectangle of a point set.

    Raises:
        EmptyPolygonError: If there are no points
    """
    if not points:
        raise EmptyPolygonError("point set")

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return Rect(min(xs), min(ys), max(xs), max(ys))


def euclidean_distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def follow_angle(origin: Point, angle: float, amp: float) -> Point:
    """Move ``amp`` units from ``origin`` in direction ``angle`` (radians)."""
    return Point(origin.x + amp * math.cos(angle), origin.y + amp * math.sin(angle))


def round_point(p: Point, precision: float) -> Point:
    """Snap a point to a grid of the given precision."""
    return Point(
        round(p.x / precision) * precision,
        round(p.y / precision) * precision,
    )
