"""Spiral ordering of an unordered point set.

Starting from the lowest point, the tour repeatedly turns towards the
remaining point that needs the smallest rotation from the current heading,
always rotating in the same direction. The result sweeps around the set in
a spiral instead of minimizing length, at O(n^2) cost.
"""

import math
from collections.abc import Sequence

import numpy as np

from penroute.core.sampling import sample_polygon
from penroute.domain import Point, Polygon, Route, freeze_route
from penroute.exceptions import InvalidInputError

TAU = 2.0 * math.pi


def route_spiral(points: Sequence[Point]) -> Route:
    """Order points as a spiral sweep.

    Args:
        points: Points to visit; duplicates are each visited once

    Returns:
        A permutation of ``points``

    Raises:
        InvalidInputError: If a point has non-finite coordinates
    """
    if not points:
        return ()
    if not all(p.is_finite() for p in points):
        raise InvalidInputError("Spiral route points must be finite")

    remaining = list(points)
    start = min(range(len(remaining)), key=lambda k: remaining[k].y)
    current = remaining.pop(start)
    result = [current]
    heading = 0.0

    while remaining:
        best_idx = 0
        best_turn = math.inf
        best_angle = 0.0
        for k, q in enumerate(remaining):
            angle = math.atan2(current.y - q.y, current.x - q.x)
            turn = (TAU + angle - heading) % TAU
            if turn < best_turn:
                best_idx, best_turn, best_angle = k, turn, angle
        heading = best_angle
        current = remaining.pop(best_idx)
        result.append(current)

    return freeze_route(result)


def spiral_fill_polygon(polygon: Polygon, samples: int, rng: np.random.Generator) -> Route:
    """Sample points inside ``polygon`` and order them as a spiral."""
    return route_spiral(sample_polygon(polygon, samples, rng))
