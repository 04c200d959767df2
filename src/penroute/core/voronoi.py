"""Voronoi partition of the unit square.

Sites are mapped into the padded square [pad, 1 - pad]^2 and the Voronoi
diagram computed by GEOS (through shapely) is clipped to the unit square, so
the returned cells tile [0, 1]^2 exactly. Cells come back in input order:
each unique site is matched with the cell that contains it.
"""

from collections.abc import Sequence

from shapely.errors import GEOSException
from shapely.geometry import MultiPoint, box
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.ops import voronoi_diagram
from shapely.strtree import STRtree

from penroute.domain import Point, Polygon
from penroute.exceptions import GeometryError, InvalidInputError


# GEOS fails on sites closer than ~1e-12, so mapped sites are snapped to this
# many decimals; sites that snap together share a cell.
SITE_SNAP_DIGITS = 9


def _map_sites(points: Sequence[Point], pad: float) -> list[Point]:
    if not 0.0 <= pad < 0.5:
        raise InvalidInputError(f"Voronoi pad must be in [0, 0.5), got {pad}")

    scale = 1.0 - 2.0 * pad
    sites = []
    for p in points:
        if not p.is_finite():
            raise InvalidInputError(f"Voronoi site has non-finite coordinates: {p}")
        sites.append(
            Point(
                round(pad + scale * p.x, SITE_SNAP_DIGITS),
                round(pad + scale * p.y, SITE_SNAP_DIGITS),
            )
        )
    return sites


def voronoi_cells(points: Sequence[Point], pad: float) -> list[tuple[Point | None, Polygon]]:
    """Compute Voronoi cells clipped to the unit square.

    Args:
        points: Sites in normalized coordinates
        pad: Margin applied when mapping sites into the unit square

    Returns:
        (mapped site, cell) pairs in input order. Duplicate sites, and sites
        equal after snapping to ``SITE_SNAP_DIGITS`` decimals, share one cell
        and appear once. Cells GEOS produced without a matching site come
        last with a ``None`` site.

    Raises:
        InvalidInputError: If ``pad`` is out of range or a site is not finite
        GeometryError: If GEOS cannot build the diagram
    """
    sites = _map_sites(points, pad)
    unique_sites = list(dict.fromkeys(sites))

    if not unique_sites:
        return []

    unit = box(0.0, 0.0, 1.0, 1.0)
    if len(unique_sites) == 1:
        return [(unique_sites[0], Polygon.from_shapely(unit))]

    try:
        diagram = voronoi_diagram(
            MultiPoint([s.to_tuple() for s in unique_sites]),
            envelope=unit,
        )
    except (ValueError, GEOSException) as e:
        raise GeometryError(f"Voronoi diagram failed for {len(unique_sites)} sites: {e}") from e

    clipped: list[ShapelyPolygon] = []
    for cell in diagram.geoms:
        part = cell.intersection(unit)
        if isinstance(part, ShapelyPolygon) and not part.is_empty:
            clipped.append(part)

    tree = STRtree(clipped)
    used: set[int] = set()
    result: list[tuple[Point | None, Polygon]] = []

    for site in unique_sites:
        shapely_site = ShapelyPoint(site.x, site.y)
        for idx in sorted(int(i) for i in tree.query(shapely_site, predicate="intersects")):
            if idx not in used:
                used.add(idx)
                result.append((site, Polygon.from_shapely(clipped[idx])))
                break

    for idx, cell in enumerate(clipped):
        if idx not in used:
            result.append((None, Polygon.from_shapely(cell)))

    return result


def sample_square_voronoi_polys(points: Sequence[Point], pad: float) -> list[Polygon]:
    """Partition the unit square into one Voronoi cell per site.

    Callers are expected to filter out cells they consider too small or too
    large, for instance with ``Polygon.bounding_square_edge()``.

    Args:
        points: Sites in normalized coordinates
        pad: Margin applied when mapping sites into the unit square

    Returns:
        Cells in site order; their union is the unit square
    """
    return [polygon for _, polygon in voronoi_cells(points, pad)]
