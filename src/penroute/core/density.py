"""Density field building blocks.

A density field maps a normalized point to a keep probability in [0, 1].
The classes here are plain picklable callables so they can be sent to
worker processes; lambdas and closures cannot.
"""

import math

from penroute.core.sampling import DensityField
from penroute.domain import Point, Polygon


def smoothstep(a: float, b: float, x: float) -> float:
    """Hermite interpolation of ``x`` between edges ``a`` and ``b``, clamped to [0, 1]."""
    k = min(max((x - a) / (b - a), 0.0), 1.0)
    return k * k * (3.0 - 2.0 * k)


def grayscale(rgb: tuple[float, float, float]) -> float:
    r, g, b = rgb
    return 0.299 * r + 0.587 * g + 0.114 * b


def rgb_to_cmyk(rgb: tuple[float, float, float]) -> tuple[float, float, float, float]:
    """Convert an RGB colour in 0..1 to CMYK.

    Pure black maps to (0, 0, 0, 1).
    """
    r, g, b = rgb
    k = 1.0 - max(r, g, b)
    if k >= 1.0:
        return (0.0, 0.0, 0.0, 1.0)
    c = (1.0 - r - k) / (1.0 - k)
    m = (1.0 - g - k) / (1.0 - k)
    y = (1.0 - b - k) / (1.0 - k)
    return (c, m, y, k)


def preserve_ratio_inside(p: Point, width: float, height: float) -> Point:
    """Remap a normalized point so a width x height image covers the unit square."""
    m = min(width, height)
    return Point(0.5 + (p.x - 0.5) * width / m, 0.5 + (p.y - 0.5) * height / m)


def preserve_ratio_outside(p: Point, width: float, height: float) -> Point:
    """Remap a normalized point so a width x height image fits inside the unit square."""
    m = max(width, height)
    return Point(0.5 + (p.x - 0.5) * width / m, 0.5 + (p.y - 0.5) * height / m)


class ConstantDensity:
    """Same keep probability everywhere."""

    def __init__(self, value: float) -> None:
        self.value = value

    def __call__(self, p: Point) -> float:
        return self.value


class RadialDensity:
    """Density ``bias - scale * distance(p, center)``, clamped to [0, 1]."""

    def __init__(
        self,
        center: tuple[float, float] = (0.5, 0.5),
        scale: float = 1.5,
        bias: float = 1.0,
    ) -> None:
        self.center = Point(*center)
        self.scale = scale
        self.bias = bias

    def __call__(self, p: Point) -> float:
        d = math.hypot(p.x - self.center.x, p.y - self.center.y)
        return min(max(self.bias - self.scale * d, 0.0), 1.0)


class PolygonMaskedDensity:
    """Restrict a density to the inside of a polygon.

    The density is evaluated in the polygon's local frame: a normalized
    point (0..1) is mapped onto the polygon's bounding rectangle first, so a
    sampling lattice covers the cell at full resolution. Outside the
    polygon the density is 0; inside it is ``factor * base(mapped point)``.
    """

    def __init__(self, polygon: Polygon, base: DensityField, factor: float = 1.0) -> None:
        self.polygon = polygon
        self.bounds = polygon.bounding_rect()
        self.base = base
        self.factor = factor

    def to_world(self, p: Point) -> Point:
        return self.bounds.project(p)

    def __call__(self, p: Point) -> float:
        world = self.to_world(p)
        if not self.polygon.contains_point(world):
            return 0.0
        return self.factor * self.base(world)
