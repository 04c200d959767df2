"""Core algorithms for penroute.

This module contains the core algorithms for:

- Geometry operations (segment intersection, point-in-polygon, clipping)
- Density-driven sampling and the Voronoi partition of the unit square
- Route construction with collision disciplines and a passage counter
- Point ordering (spiral tour, tour solver) and stroke splitting

Pure modules hold no state between calls; randomness is always passed in as
a ``numpy.random.Generator``.

Key functions:
- segment_intersection: Intersection point of two closed segments
- point_in_polygon: Half-open ray casting test
- sample_candidates: Rejection-sample lattice points under a density
- sample_square_voronoi_polys: Voronoi cells inside the unit square
- build_routes_with_collision_seq / _par: Collision-aware route building
- route_spiral: Nearest-angular-neighbour ordering
- tsp_route: Ordering through a tour solver

Key classes:
- PassageCounter: Per-cell crossing counts
- RouteBuilder: Route builder bound to a collision discipline
- AnnealingTourSolver: Default simulated-annealing tour solver
- CellRouteProcessor: Parallel per-cell route pipeline
"""

from penroute.core.density import (
    ConstantDensity,
    PolygonMaskedDensity,
    RadialDensity,
    grayscale,
    preserve_ratio_inside,
    preserve_ratio_outside,
    rgb_to_cmyk,
    smoothstep,
)
from penroute.core.flow import AngleField, FlowStepper, build_flow_routes
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
from penroute.core.grouping import group_by_proximity, group_with_kmeans
from penroute.core.passage import PassageCounter
from penroute.core.processor import CellRouteProcessor, CellRouteResult, process_cell
from penroute.core.routes import (
    RouteBuilder,
    StepFunction,
    StepResult,
    build_routes,
    build_routes_with_collision_par,
    build_routes_with_collision_seq,
    collide_route_segment,
    collide_routes,
    find_best_collision_1d,
)
from penroute.core.sampling import (
    DensityField,
    rng_from_seed,
    sample_candidates,
    sample_candidates_where,
    sample_polygon,
    spawn_rngs,
)
from penroute.core.spiral import route_spiral, spiral_fill_polygon
from penroute.core.strokes import (
    ConnectPredicate,
    max_distance_predicate,
    round_route,
    route_length,
    split_route_when,
)
from penroute.core.tour import AnnealingTourSolver, TourSolver, tsp_fill_polygon, tsp_route
from penroute.core.voronoi import sample_square_voronoi_polys, voronoi_cells

__all__ = [
    # Type aliases
    "AngleField",
    "ConnectPredicate",
    "DensityField",
    "StepFunction",
    "StepResult",
    # Classes
    "AnnealingTourSolver",
    "CellRouteProcessor",
    "CellRouteResult",
    "ConstantDensity",
    "FlowStepper",
    "PassageCounter",
    "PolygonMaskedDensity",
    "RadialDensity",
    "RouteBuilder",
    "TourSolver",
    # Geometry functions
    "bounding_rect",
    "clip_to_boundaries",
    "euclidean_distance",
    "follow_angle",
    "out_of_boundaries",
    "point_in_polygon",
    "round_point",
    "segment_intersection",
    "strictly_in_boundaries",
    # Sampling and partition
    "rng_from_seed",
    "sample_candidates",
    "sample_candidates_where",
    "sample_polygon",
    "sample_square_voronoi_polys",
    "spawn_rngs",
    "voronoi_cells",
    # Routes
    "build_flow_routes",
    "build_routes",
    "build_routes_with_collision_par",
    "build_routes_with_collision_seq",
    "collide_route_segment",
    "collide_routes",
    "find_best_collision_1d",
    "max_distance_predicate",
    "process_cell",
    "round_route",
    "route_length",
    "route_spiral",
    "spiral_fill_polygon",
    "split_route_when",
    "tsp_fill_polygon",
    "tsp_route",
    # Grouping and density helpers
    "grayscale",
    "group_by_proximity",
    "group_with_kmeans",
    "preserve_ratio_inside",
    "preserve_ratio_outside",
    "rgb_to_cmyk",
    "smoothstep",
]
