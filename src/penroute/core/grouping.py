"""Grouping of candidate points into clusters.

- group_by_proximity: greedy single-pass grouping by a distance threshold
- group_with_kmeans: k-means clustering into a fixed number of groups
"""

from collections.abc import Sequence

import numpy as np
from scipy.cluster.vq import kmeans2
from scipy.spatial import cKDTree

from penroute.domain import Point


def group_by_proximity(points: Sequence[Point], threshold: float) -> list[list[Point]]:
    """Group points that are closer than ``threshold`` to a group member.

    Points are taken in order. Each one joins the oldest group that already
    holds a point strictly closer than ``threshold``; if there is none it
    starts a new group. Groups are not merged afterwards, so the result
    depends on input order.

    Args:
        points: Points to group
        threshold: Distance below which two points are neighbours

    Returns:
        Groups in creation order, points in input order within each group
    """
    if not points:
        return []

    tree = cKDTree(np.array([p.to_tuple() for p in points], dtype=float))
    group_of: list[int] = []
    groups: list[list[Point]] = []

    for i, p in enumerate(points):
        neighbours = tree.query_ball_point(p.to_tuple(), r=threshold)
        joined = [
            group_of[j]
            for j in neighbours
            if j < i and np.hypot(points[j].x - p.x, points[j].y - p.y) < threshold
        ]
        if joined:
            group = min(joined)
            groups[group].append(p)
        else:
            group = len(groups)
            groups.append([p])
        group_of.append(group)

    return groups


def group_with_kmeans(
    points: Sequence[Point],
    n: int,
    rng: np.random.Generator,
) -> list[list[Point]]:
    """Cluster points into ``n`` groups with k-means.

    Returns:
        ``n`` groups in cluster order; a cluster left without points gives
        an empty group
    """
    if not points or n <= 0:
        return []

    data = np.array([p.to_tuple() for p in points], dtype=float)
    _, labels = kmeans2(data, min(n, len(points)), minit="++", seed=rng)

    groups: list[list[Point]] = [[] for _ in range(n)]
    for p, label in zip(points, labels):
        groups[int(label)].append(p)
    return groups
