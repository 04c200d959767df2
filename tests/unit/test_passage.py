"""Tests for the passage counter."""

import pytest

from penroute.core.passage import PassageCounter
from penroute.domain import Point
from penroute.exceptions import InvalidInputError


@pytest.fixture
def passage() -> PassageCounter:
    return PassageCounter(granularity=2.0, width=10.0, height=10.0)


class TestPassageCounter:
    """Tests for PassageCounter."""

    def test_shape(self, passage: PassageCounter) -> None:
        assert passage.shape == (5, 5)

    def test_shape_rounds_up(self) -> None:
        """A partial cell at the far edge still gets a counter."""
        assert PassageCounter(2.0, 210.0, 297.0).shape == (105, 149)

    def test_count_is_monotonic(self, passage: PassageCounter) -> None:
        """Repeated counts in one cell return 1, 2, 3."""
        p = Point(1.0, 1.0)
        assert [passage.count(p) for _ in range(3)] == [1, 2, 3]

    def test_same_cell(self, passage: PassageCounter) -> None:
        """Points of the same cell share a counter."""
        passage.count(Point(0.1, 0.1))
        assert passage.count(Point(1.9, 1.5)) == 2

    def test_different_cells(self, passage: PassageCounter) -> None:
        passage.count(Point(1.0, 1.0))
        assert passage.count(Point(3.0, 1.0)) == 1
        assert passage.count(Point(1.0, 3.0)) == 1

    def test_get_does_not_increment(self, passage: PassageCounter) -> None:
        p = Point(5.0, 5.0)
        assert passage.get(p) == 0
        passage.count(p)
        assert passage.get(p) == 1
        assert passage.get(p) == 1

    def test_out_of_area_points_clamp(self, passage: PassageCounter) -> None:
        """Points outside the area are counted in the nearest border cell."""
        passage.count(Point(-3.0, -3.0))
        assert passage.get(Point(0.5, 0.5)) == 1
        passage.count(Point(100.0, 100.0))
        assert passage.get(Point(9.5, 9.5)) == 1

    def test_far_edge(self, passage: PassageCounter) -> None:
        """The far edge belongs to the last cell."""
        passage.count(Point(10.0, 10.0))
        assert passage.get(Point(9.0, 9.0)) == 1

    def test_total_and_reset(self, passage: PassageCounter) -> None:
        for x in (1.0, 3.0, 5.0):
            passage.count(Point(x, 1.0))
        assert passage.total() == 3
        passage.reset()
        assert passage.total() == 0

    def test_non_finite_point(self, passage: PassageCounter) -> None:
        with pytest.raises(InvalidInputError):
            passage.count(Point(float("nan"), 1.0))

    @pytest.mark.parametrize(
        ("granularity", "width", "height"),
        [(0.0, 10.0, 10.0), (1.0, -1.0, 10.0), (1.0, 10.0, float("inf"))],
    )
    def test_invalid_dimensions(self, granularity: float, width: float, height: float) -> None:
        with pytest.raises(InvalidInputError):
            PassageCounter(granularity, width, height)
