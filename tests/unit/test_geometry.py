"""Tests for geometric operations."""

import math

import pytest

from penroute.core.geometry import (
    bounding_rect,
    clip_to_boundaries,
    euclidean_distance,
    follow_angle,
    out_of_boundaries,
    point_in_polygon,
    round_point,
    segment_intersection,
    strictly_in_boundaries,
)
from penroute.domain import Point, Rect
from penroute.exceptions import EmptyPolygonError

UNIT_SQUARE = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]


class TestSegmentIntersection:
    """Tests for segment_intersection."""

    def test_crossing_segments(self) -> None:
        """Diagonals of a square cross in its center."""
        hit = segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
        assert hit == Point(1.0, 1.0)

    def test_parallel_segments(self) -> None:
        """Parallel segments never intersect."""
        assert segment_intersection(Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)) is None

    def test_collinear_overlapping_segments(self) -> None:
        """Collinear segments count as parallel, even when they overlap."""
        assert segment_intersection(Point(0, 0), Point(2, 0), Point(1, 0), Point(3, 0)) is None

    def test_shared_endpoint(self) -> None:
        """Touching at an endpoint counts as an intersection."""
        hit = segment_intersection(Point(0, 0), Point(1, 1), Point(1, 1), Point(2, 0))
        assert hit is not None
        assert hit.x == pytest.approx(1.0)
        assert hit.y == pytest.approx(1.0)

    def test_lines_cross_outside_segments(self) -> None:
        """Lines that cross beyond the segment ends do not intersect."""
        assert segment_intersection(Point(0, 0), Point(1, 1), Point(3, 0), Point(2, 1)) is None

    def test_zero_length_segment(self) -> None:
        """A degenerate segment does not raise."""
        assert segment_intersection(Point(1, 1), Point(1, 1), Point(0, 0), Point(2, 2)) is None

    def test_t_junction(self) -> None:
        """A segment ending on the interior of another intersects it there."""
        hit = segment_intersection(Point(0.5, 0), Point(0.5, 1), Point(0, 1), Point(1, 1))
        assert hit == Point(0.5, 1.0)


class TestPointInPolygon:
    """Tests for point_in_polygon with the half-open boundary convention."""

    def test_inside(self) -> None:
        assert point_in_polygon(Point(0.5, 0.5), UNIT_SQUARE)

    def test_outside(self) -> None:
        assert not point_in_polygon(Point(1.5, 0.5), UNIT_SQUARE)
        assert not point_in_polygon(Point(-0.5, 0.5), UNIT_SQUARE)

    def test_left_and_bottom_edges_inside(self) -> None:
        """Points on the left and bottom edges belong to the rectangle."""
        assert point_in_polygon(Point(0.0, 0.5), UNIT_SQUARE)
        assert point_in_polygon(Point(0.5, 0.0), UNIT_SQUARE)
        assert point_in_polygon(Point(0.0, 0.0), UNIT_SQUARE)

    def test_right_and_top_edges_outside(self) -> None:
        """Points on the right and top edges belong to the neighbour."""
        assert not point_in_polygon(Point(1.0, 0.5), UNIT_SQUARE)
        assert not point_in_polygon(Point(0.5, 1.0), UNIT_SQUARE)
        assert not point_in_polygon(Point(1.0, 1.0), UNIT_SQUARE)

    def test_shared_edge_claimed_once(self) -> None:
        """A point on an edge shared by two adjacent squares is in exactly one."""
        right_square = [Point(1, 0), Point(2, 0), Point(2, 1), Point(1, 1)]
        p = Point(1.0, 0.25)
        assert point_in_polygon(p, UNIT_SQUARE) != point_in_polygon(p, right_square)

    def test_concave_polygon(self) -> None:
        """The notch of an L shape is outside."""
        l_shape = [
            Point(0, 0),
            Point(2, 0),
            Point(2, 1),
            Point(1, 1),
            Point(1, 2),
            Point(0, 2),
        ]
        assert point_in_polygon(Point(0.5, 1.5), l_shape)
        assert not point_in_polygon(Point(1.5, 1.5), l_shape)

    def test_degenerate_polygon(self) -> None:
        """Fewer than three vertices contain nothing."""
        assert not point_in_polygon(Point(0, 0), [Point(0, 0), Point(1, 1)])


class TestBoundaries:
    """Tests for boundary predicates and clipping."""

    @pytest.fixture
    def boundaries(self) -> Rect:
        return Rect(0.0, 0.0, 10.0, 10.0)

    def test_boundary_predicates(self, boundaries: Rect) -> None:
        """A point on the edge is neither strictly inside nor out of boundaries."""
        edge = Point(10.0, 5.0)
        assert not strictly_in_boundaries(edge, boundaries)
        assert not out_of_boundaries(edge, boundaries)
        assert out_of_boundaries(Point(10.1, 5.0), boundaries)

    def test_clip_both_inside(self, boundaries: Rect) -> None:
        """Segments strictly inside are not clipped."""
        assert clip_to_boundaries(Point(1, 1), Point(9, 9), boundaries) is None

    def test_clip_leaving_right(self, boundaries: Rect) -> None:
        """A segment leaving through the right edge is clipped there."""
        hit = clip_to_boundaries(Point(9.5, 5.0), Point(10.5, 5.0), boundaries)
        assert hit == Point(10.0, 5.0)

    def test_clip_leaving_bottom(self, boundaries: Rect) -> None:
        hit = clip_to_boundaries(Point(5.0, 0.5), Point(5.0, -0.5), boundaries)
        assert hit == Point(5.0, 0.0)

    def test_clip_ending_on_edge(self, boundaries: Rect) -> None:
        """Touching the edge counts as leaving."""
        hit = clip_to_boundaries(Point(9.5, 5.0), Point(10.0, 5.0), boundaries)
        assert hit == Point(10.0, 5.0)

    def test_clip_corner_uses_edge_order(self, boundaries: Rect) -> None:
        """Through a corner, the bottom edge is tested before the left edge."""
        hit = clip_to_boundaries(Point(1.0, 1.0), Point(-1.0, -1.0), boundaries)
        assert hit == Point(0.0, 0.0)

    def test_clip_outside_without_crossing(self, boundaries: Rect) -> None:
        """A segment entirely outside crosses no edge."""
        assert clip_to_boundaries(Point(20, 20), Point(30, 30), boundaries) is None


class TestHelpers:
    """Tests for small geometric helpers."""

    def test_bounding_rect(self) -> None:
        rect = bounding_rect([Point(1, 5), Point(-2, 3), Point(4, -1)])
        assert rect == Rect(-2, -1, 4, 5)

    def test_bounding_rect_empty(self) -> None:
        """An empty point set raises instead of returning infinities."""
        with pytest.raises(EmptyPolygonError):
            bounding_rect([])

    def test_euclidean_distance(self) -> None:
        assert euclidean_distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)

    def test_follow_angle(self) -> None:
        """Moving along 90 degrees goes straight up."""
        p = follow_angle(Point(1.0, 1.0), math.pi / 2, 2.0)
        assert p.x == pytest.approx(1.0)
        assert p.y == pytest.approx(3.0)

    def test_round_point(self) -> None:
        p = round_point(Point(0.26, 0.74), 0.5)
        assert p == Point(0.5, 0.5)
