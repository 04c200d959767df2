"""Passage counter limiting how often routes cross the same area.

The drawing area is divided into square cells of ``granularity`` size and
every cell holds an integer counter. Step functions call ``count`` for each
point they emit and stop once a cell is too crowded.

The counter is the only mutable state shared between routes of a drawing
pass. It is not thread-safe: one owner writes to it per pass.
"""

import math

import numpy as np

from penroute.domain import Point
from penroute.exceptions import InvalidInputError


class PassageCounter:
    """Coarse 2D grid of passage counts.

    Example:
        passage = PassageCounter(granularity=2.0, width=210.0, height=297.0)
        if passage.count(p) > 3:
            ...  # stop the route here
    """

    def __init__(self, granularity: float, width: float, height: float) -> None:
        """Initialize an all-zero counter grid.

        Args:
            granularity: Cell size, in the same unit as width and height
            width: Width of the counted area
            height: Height of the counted area

        Raises:
            InvalidInputError: If any dimension is not a positive finite number
        """
        for name, value in (("granularity", granularity), ("width", width), ("height", height)):
            if not math.isfinite(value) or value <= 0:
                raise InvalidInputError(f"Passage counter {name} must be positive, got {value}")

        self.granularity = granularity
        self.width = width
        self.height = height
        self._columns = math.ceil(width / granularity)
        self._rows = math.ceil(height / granularity)
        self._counters = np.zeros((self._rows, self._columns), dtype=np.int64)

    @property
    def shape(self) -> tuple[int, int]:
        """Grid size as (columns, rows)."""
        return (self._columns, self._rows)

    def _index(self, p: Point) -> tuple[int, int]:
        if not p.is_finite():
            raise InvalidInputError(f"Cannot count a non-finite point: {p}")

        col = min(max(math.floor(p.x / self.granularity), 0), self._columns - 1)
        row = min(max(math.floor(p.y / self.granularity), 0), self._rows - 1)
        return row, col

    def count(self, p: Point) -> int:
        """Increment the counter of the cell containing ``p`` and return it."""
        idx = self._index(p)
        self._counters[idx] += 1
        return int(self._counters[idx])

    def get(self, p: Point) -> int:
        """Read the counter of the cell containing ``p``."""
        return int(self._counters[self._index(p)])

    def total(self) -> int:
        """Sum of all counters."""
        return int(self._counters.sum())

    def reset(self) -> None:
        self._counters.fill(0)
