"""Tour solver contract and a default simulated-annealing solver.

Anything with a ``solve(points, time_budget) -> list[int]`` method can order
points for ``tsp_route``; the returned list must be a permutation of the
point indices. ``AnnealingTourSolver`` is the default: a nearest-neighbour
tour improved by random 2-opt reversals accepted under a cooling
temperature until the wall-clock budget runs out.
"""

import math
import time
from collections.abc import Sequence
from typing import Protocol

import numpy as np

from penroute.core.sampling import sample_polygon
from penroute.domain import Point, Polygon, Route, freeze_route
from penroute.exceptions import TourError


class TourSolver(Protocol):
    """Orders points into an approximately shortest tour."""

    def solve(self, points: Sequence[Point], time_budget: float) -> list[int]: ...


class AnnealingTourSolver:
    """Simulated annealing over 2-opt moves on an open tour.

    Picklable, so it can be shipped to worker processes.
    """

    def __init__(
        self,
        seed: int = 0,
        initial_temperature: float = 1.0,
        cooling_rate: float = 0.999,
        check_every: int = 64,
    ) -> None:
        self.seed = seed
        self.initial_temperature = initial_temperature
        self.cooling_rate = cooling_rate
        self.check_every = check_every

    def solve(self, points: Sequence[Point], time_budget: float) -> list[int]:
        """Return a visiting order for ``points`` within ``time_budget`` seconds."""
        n = len(points)
        if n < 4:
            return list(range(n))

        deadline = time.monotonic() + time_budget
        rng = np.random.default_rng(self.seed)
        coords = np.array([p.to_tuple() for p in points], dtype=float)
        dist = np.linalg.norm(coords[:, None, :] - coords[None, :, :], axis=-1)

        order = self._nearest_neighbor(dist)
        best = order.copy()
        best_len = current_len = self._length(dist, order)
        # temperature is relative to the mean edge of the starting tour
        temperature = self.initial_temperature * current_len / (n - 1)

        iteration = 0
        while True:
            iteration += 1
            if iteration % self.check_every == 0 and time.monotonic() >= deadline:
                break

            i, k = sorted(int(v) for v in rng.choice(n, size=2, replace=False))

            # reversing order[i..k] only changes the edges around the slice
            a, b = order[i - 1] if i > 0 else -1, order[i]
            c, d = order[k], order[k + 1] if k + 1 < n else -1
            delta = 0.0
            if a >= 0:
                delta += dist[a, c] - dist[a, b]
            if d >= 0:
                delta += dist[b, d] - dist[c, d]

            if delta < 0 or (temperature > 0 and rng.random() < math.exp(-delta / temperature)):
                order[i : k + 1] = order[i : k + 1][::-1].copy()
                current_len += delta
                if current_len < best_len - 1e-12:
                    best_len = current_len
                    best = order.copy()

            temperature *= self.cooling_rate

        return [int(i) for i in best]

    @staticmethod
    def _nearest_neighbor(dist: np.ndarray) -> np.ndarray:
        n = dist.shape[0]
        visited = np.zeros(n, dtype=bool)
        order = np.empty(n, dtype=np.int64)
        current = 0
        for step in range(n):
            order[step] = current
            visited[current] = True
            if step == n - 1:
                break
            candidates = np.where(visited, np.inf, dist[current])
            current = int(np.argmin(candidates))
        return order

    @staticmethod
    def _length(dist: np.ndarray, order: np.ndarray) -> float:
        return float(dist[order[:-1], order[1:]].sum())


def tsp_route(
    points: Sequence[Point],
    time_budget: float,
    solver: TourSolver | None = None,
) -> Route:
    """Order points with a tour solver.

    Args:
        points: Points to visit
        time_budget: Seconds handed to the solver
        solver: Tour solver (defaults to ``AnnealingTourSolver()``)

    Returns:
        Points in tour order

    Raises:
        TourError: If the solver's order is not a permutation of the indices
    """
    if not points:
        return ()

    solver = solver if solver is not None else AnnealingTourSolver()
    order = list(solver.solve(points, time_budget))

    if sorted(order) != list(range(len(points))):
        raise TourError(f"expected a permutation of {len(points)} indices, got {len(order)} entries")

    return freeze_route(points[i] for i in order)


def tsp_fill_polygon(
    polygon: Polygon,
    samples: int,
    rng: np.random.Generator,
    time_budget: float,
    solver: TourSolver | None = None,
) -> Route:
    """Sample points inside ``polygon`` and order them with a tour solver."""
    return tsp_route(sample_polygon(polygon, samples, rng), time_budget, solver)
