"""Polygon type produced by the Voronoi partitioner."""

from dataclasses import dataclass, field
from typing import Any

import shapely.geometry

from penroute.domain.point import Point, Rect
from penroute.exceptions import EmptyPolygonError


@dataclass
class Polygon:
    """A closed polygon (exterior ring only, no holes).

    The ring is stored without repeating the first point at the end; the
    closing edge from the last point back to the first is implicit.

    Attributes:
        points: Vertices of the exterior ring
    """

    points: list[Point]
    _cached_rect: Rect | None = field(default=None, repr=False, init=False)

    def __post_init__(self) -> None:
        if len(self.points) > 1 and self.points[0] == self.points[-1]:
            self.points = self.points[:-1]

    def is_empty(self) -> bool:
        return not self.points

    def bounding_rect(self) -> Rect:
        """Calculate the bounding rectangle.

        Result is cached for efficiency.

        Returns:
            Axis-aligned bounding rectangle

        Raises:
            EmptyPolygonError: If the polygon has no vertices
        """
        if self._cached_rect is not None:
            return self._cached_rect

        if not self.points:
            raise EmptyPolygonError()

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        self._cached_rect = Rect(min(xs), min(ys), max(xs), max(ys))
        return self._cached_rect

    def bounding_square_edge(self) -> float:
        """Side length of the smallest square enclosing the bounding rectangle."""
        rect = self.bounding_rect()
        return max(rect.width, rect.height)

    def area(self) -> float:
        """Unsigned area using the shoelace formula."""
        n = len(self.points)
        if n < 3:
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        return abs(area) / 2.0

    def contains_point(self, point: Point) -> bool:
        """Check if point is inside the polygon (half-open boundary convention)."""
        from penroute.core.geometry import point_in_polygon

        return point_in_polygon(point, self.points)

    def to_shapely(self) -> shapely.geometry.Polygon:
        return shapely.geometry.Polygon([p.to_tuple() for p in self.points])

    @classmethod
    def from_shapely(cls, geom: shapely.geometry.Polygon) -> "Polygon":
        # shapely repeats the first coordinate at the end of the ring
        return cls(points=[Point(x, y) for x, y in geom.exterior.coords[:-1]])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the polygon
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a polygon

        Returns:
            Polygon instance
        """
        return cls(points=[Point.from_dict(p) for p in data["points"]])
