"""Core geometric value types.

This module defines the value types every other module passes around:
- Point: An immutable 2D point
- Rect: An axis-aligned rectangle used as drawing boundaries
"""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Coordinates are either
    normalized (0..1) or page millimeters depending on the caller.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def is_finite(self) -> bool:
        """Check that neither coordinate is NaN or infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class Rect:
    """An axis-aligned rectangle.

    Attributes:
        min_x: Left edge
        min_y: Bottom edge (top edge in page coordinates)
        max_x: Right edge
        max_y: Top edge (bottom edge in page coordinates)
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, p: Point) -> bool:
        """Closed containment test (edges count as inside)."""
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def contains_strictly(self, p: Point) -> bool:
        """Open containment test (edges count as outside)."""
        return self.min_x < p.x < self.max_x and self.min_y < p.y < self.max_y

    def project(self, p: Point) -> Point:
        """Map a normalized point (0..1) into this rectangle."""
        return Point(
            p.x * self.width + self.min_x,
            p.y * self.height + self.min_y,
        )

    def normalize(self, p: Point) -> Point:
        """Map a point of this rectangle back to normalized (0..1) space."""
        return Point(
            (p.x - self.min_x) / self.width,
            (p.y - self.min_y) / self.height,
        )

    def edges(self) -> list[tuple[Point, Point]]:
        """Return the four edges in bottom, left, right, top order."""
        bottom_left = Point(self.min_x, self.min_y)
        bottom_right = Point(self.max_x, self.min_y)
        top_left = Point(self.min_x, self.max_y)
        top_right = Point(self.max_x, self.max_y)
        return [
            (bottom_left, bottom_right),
            (bottom_left, top_left),
            (bottom_right, top_right),
            (top_left, top_right),
        ]

    def to_route(self) -> tuple[Point, ...]:
        """Closed outline of the rectangle, starting and ending at (min_x, min_y)."""
        return (
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
            Point(self.min_x, self.min_y),
        )

    @classmethod
    def unit(cls) -> "Rect":
        """The unit square [0, 1] x [0, 1]."""
        return cls(0.0, 0.0, 1.0, 1.0)
