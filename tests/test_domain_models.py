"""Tests for domain models to verify they work correctly."""

import pytest
import shapely.geometry

from penroute.domain import (
    Point,
    Polygon,
    Rect,
    drop_degenerate,
    freeze_route,
    is_degenerate,
    route_from_dicts,
    route_to_dicts,
)
from penroute.exceptions import EmptyPolygonError


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        p = Point(100.0, 200.0)
        assert p.to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(0.25, 0.75)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_point_hashable(self) -> None:
        """Equal points collapse in a set."""
        assert len({Point(1.0, 2.0), Point(1.0, 2.0), Point(2.0, 1.0)}) == 2

    def test_point_is_finite(self) -> None:
        """NaN and infinite coordinates are detected."""
        assert Point(0.0, 1.0).is_finite()
        assert not Point(float("nan"), 1.0).is_finite()
        assert not Point(0.0, float("inf")).is_finite()


class TestRect:
    """Tests for Rect class."""

    def test_rect_dimensions(self) -> None:
        """Test width and height."""
        rect = Rect(10.0, 20.0, 110.0, 70.0)
        assert rect.width == 100.0
        assert rect.height == 50.0

    def test_contains_is_closed(self) -> None:
        """Edges count as inside for contains()."""
        rect = Rect(0.0, 0.0, 10.0, 10.0)
        assert rect.contains(Point(0.0, 5.0))
        assert rect.contains(Point(10.0, 10.0))
        assert not rect.contains(Point(10.5, 5.0))

    def test_contains_strictly_is_open(self) -> None:
        """Edges count as outside for contains_strictly()."""
        rect = Rect(0.0, 0.0, 10.0, 10.0)
        assert rect.contains_strictly(Point(5.0, 5.0))
        assert not rect.contains_strictly(Point(0.0, 5.0))
        assert not rect.contains_strictly(Point(5.0, 10.0))

    def test_project_and_normalize(self) -> None:
        """project() maps the unit square onto the rectangle and normalize() undoes it."""
        page = Rect(0.0, 0.0, 210.0, 297.0)
        p = page.project(Point(0.5, 0.5))
        assert p == Point(105.0, 148.5)
        assert page.normalize(p) == Point(0.5, 0.5)

    def test_project_with_offset(self) -> None:
        """Test projection into a rectangle that does not start at the origin."""
        rect = Rect(0.25, 0.5, 0.75, 1.0)
        assert rect.project(Point(0.0, 0.0)) == Point(0.25, 0.5)
        assert rect.project(Point(1.0, 1.0)) == Point(0.75, 1.0)

    def test_edges_order(self) -> None:
        """Edges come back as bottom, left, right, top."""
        bottom, left, right, top = Rect(0.0, 0.0, 2.0, 1.0).edges()
        assert bottom == (Point(0.0, 0.0), Point(2.0, 0.0))
        assert left == (Point(0.0, 0.0), Point(0.0, 1.0))
        assert right == (Point(2.0, 0.0), Point(2.0, 1.0))
        assert top == (Point(0.0, 1.0), Point(2.0, 1.0))

    def test_to_route_is_closed(self) -> None:
        """The outline route starts and ends at the same corner."""
        route = Rect(0.0, 0.0, 1.0, 1.0).to_route()
        assert len(route) == 5
        assert route[0] == route[-1] == Point(0.0, 0.0)

    def test_unit(self) -> None:
        assert Rect.unit() == Rect(0.0, 0.0, 1.0, 1.0)


class TestPolygon:
    """Tests for Polygon class."""

    @pytest.fixture
    def square(self) -> Polygon:
        return Polygon(points=[Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)])

    def test_closing_point_is_dropped(self) -> None:
        """A repeated first point at the end of the ring is removed."""
        poly = Polygon(points=[Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 0)])
        assert poly.points == [Point(0, 0), Point(1, 0), Point(1, 1)]

    def test_bounding_rect(self) -> None:
        """Test bounding rectangle calculation."""
        poly = Polygon(points=[Point(0.1, 0.2), Point(0.5, 0.3), Point(0.3, 0.9)])
        assert poly.bounding_rect() == Rect(0.1, 0.2, 0.5, 0.9)

    def test_bounding_rect_empty_raises(self) -> None:
        """An empty polygon has no bounding rectangle."""
        with pytest.raises(EmptyPolygonError):
            Polygon(points=[]).bounding_rect()

    def test_bounding_square_edge(self) -> None:
        """The largest side of the bounding rectangle."""
        poly = Polygon(points=[Point(0.0, 0.0), Point(0.4, 0.0), Point(0.4, 0.1)])
        assert poly.bounding_square_edge() == pytest.approx(0.4)

    def test_area(self, square: Polygon) -> None:
        """Area is unsigned whatever the winding."""
        assert square.area() == pytest.approx(4.0)
        reversed_square = Polygon(points=list(reversed(square.points)))
        assert reversed_square.area() == pytest.approx(4.0)

    def test_area_degenerate(self) -> None:
        assert Polygon(points=[Point(0, 0), Point(1, 1)]).area() == 0.0

    def test_contains_point(self, square: Polygon) -> None:
        """Interior points are inside, exterior points are not."""
        assert square.contains_point(Point(1, 1))
        assert not square.contains_point(Point(3, 1))

    def test_shapely_round_trip(self, square: Polygon) -> None:
        """Converting through shapely keeps the ring without a closing point."""
        geom = square.to_shapely()
        assert isinstance(geom, shapely.geometry.Polygon)
        assert geom.area == pytest.approx(4.0)
        assert Polygon.from_shapely(geom).points == square.points

    def test_polygon_serialization(self, square: Polygon) -> None:
        """Test polygon serialization and deserialization."""
        restored = Polygon.from_dict(square.to_dict())
        assert restored.points == square.points


class TestRouteHelpers:
    """Tests for route helper functions."""

    def test_freeze_route(self) -> None:
        route = freeze_route([Point(0, 0), Point(1, 1)])
        assert route == (Point(0, 0), Point(1, 1))
        assert isinstance(route, tuple)

    def test_is_degenerate(self) -> None:
        """Routes with at most one point draw nothing."""
        assert is_degenerate(())
        assert is_degenerate((Point(0, 0),))
        assert not is_degenerate((Point(0, 0), Point(1, 0)))

    def test_drop_degenerate_keeps_order(self) -> None:
        """Degenerate routes are removed and the rest keep their order."""
        a = [Point(0, 0), Point(1, 0)]
        b = [Point(5, 5)]
        c = [Point(2, 2), Point(3, 3), Point(4, 4)]
        assert drop_degenerate([a, b, [], c]) == [tuple(a), tuple(c)]

    def test_route_serialization(self) -> None:
        """Test route serialization and deserialization."""
        route = (Point(0.0, 0.5), Point(1.0, 1.5))
        assert route_from_dicts(route_to_dicts(route)) == route
