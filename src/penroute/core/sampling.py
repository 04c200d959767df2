"""Density-driven point sampling.

Candidates are taken from a regular ``dim x dim`` lattice over [0, 1)^2.
Each lattice point is kept with the probability given by a density field,
the survivors are shuffled and the list is truncated. All randomness comes
from an explicit ``numpy.random.Generator`` so that identical seeds always
give identical, identically ordered results, also when cells are sampled in
separate worker processes.
"""

import struct
from collections.abc import Callable

import numpy as np

from penroute.domain import Point, Polygon
from penroute.exceptions import InvalidInputError

DensityField = Callable[[Point], float]

# Draws discarded after seeding so nearby seeds do not start out correlated
_WARMUP_DRAWS = 50


def _seed_entropy(seed: int | float) -> int:
    # 16-byte seed: big-endian double followed by zero bytes
    buf = struct.pack(">d", float(seed)) + bytes(8)
    return int.from_bytes(buf, "big")


def rng_from_seed(seed: int | float) -> np.random.Generator:
    """Create a deterministic generator from an integer or float seed.

    Args:
        seed: Caller-chosen seed

    Returns:
        Generator that produces the same sequence for the same seed
    """
    rng = np.random.default_rng(_seed_entropy(seed))
    rng.random(_WARMUP_DRAWS)
    return rng


def spawn_rngs(seed: int | float, count: int) -> list[np.random.Generator]:
    """Create ``count`` independent generators derived from one seed.

    Used to give every Voronoi cell its own stream so that cells sampled in
    parallel do not repeat each other's patterns.
    """
    sequence = np.random.SeedSequence(_seed_entropy(seed))
    return [np.random.default_rng(child) for child in sequence.spawn(count)]


def _validate_grid(dim: int, max_samples: int) -> None:
    if dim <= 0:
        raise InvalidInputError(f"Sampling grid dimension must be positive, got {dim}")
    if max_samples < 0:
        raise InvalidInputError(f"max_samples must not be negative, got {max_samples}")


def _lattice(dim: int) -> list[Point]:
    return [Point(x / dim, y / dim) for x in range(dim) for y in range(dim)]


def _shuffle_truncate(
    candidates: list[Point], max_samples: int, rng: np.random.Generator
) -> list[Point]:
    order = rng.permutation(len(candidates))
    return [candidates[i] for i in order[:max_samples]]


def sample_candidates(
    density: DensityField,
    dim: int,
    max_samples: int,
    rng: np.random.Generator,
) -> list[Point]:
    """Rejection-sample lattice points under a density field.

    One uniform draw is consumed per lattice point whatever the density, so
    the random stream stays aligned with the lattice.

    Args:
        density: Maps a normalized point to a keep probability in [0, 1]
        dim: Lattice resolution per axis
        max_samples: Maximum number of points returned
        rng: Random generator (consumed)

    Returns:
        Shuffled kept points, at most ``max_samples`` of them

    Raises:
        InvalidInputError: If ``dim`` is not positive or ``max_samples`` is negative
    """
    _validate_grid(dim, max_samples)

    lattice = _lattice(dim)
    draws = rng.random(len(lattice))
    candidates = [p for p, draw in zip(lattice, draws) if density(p) > draw]
    return _shuffle_truncate(candidates, max_samples, rng)


def sample_candidates_where(
    predicate: Callable[[Point], bool],
    dim: int,
    max_samples: int,
    rng: np.random.Generator,
) -> list[Point]:
    """Keep every lattice point matching ``predicate``, shuffled and truncated."""
    _validate_grid(dim, max_samples)

    candidates = [p for p in _lattice(dim) if predicate(p)]
    return _shuffle_truncate(candidates, max_samples, rng)


def sample_polygon(
    polygon: Polygon,
    samples: int,
    rng: np.random.Generator,
    resolution: int = 32,
) -> list[Point]:
    """Sample lattice points of a polygon's bounding rectangle lying inside it.

    Raises:
        EmptyPolygonError: If the polygon has no vertices
    """
    _validate_grid(resolution, samples)

    bounds = polygon.bounding_rect()
    candidates = []
    for x in range(resolution):
        for y in range(resolution):
            p = Point(
                bounds.min_x + x * bounds.width / resolution,
                bounds.min_y + y * bounds.height / resolution,
            )
            if polygon.contains_point(p):
                candidates.append(p)

    return _shuffle_truncate(candidates, samples, rng)
