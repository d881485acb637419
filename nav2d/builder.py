"""Navigation mesh construction.

Runs in two phases: the cell list is built first (triangulating input
polygons when requested), then an R-tree over the cell bounds drives the
portal search, so neighbor detection costs one index query per cell instead
of a comparison against every other cell.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import MalformedInputError
from .geometry import EPS, Edge, Polygon, Vector, as_vector, cross
from .options import NavMeshOptions
from .spatial import SpatialIndex
from .triangulation import flatten, triangulate

LOGGER = logging.getLogger(__name__)

Adjacency = Tuple[Mapping[int, Edge], ...]
"""Per cell: neighbor cell index -> portal oriented as seen from that cell."""

__all__ = [
    "Adjacency",
    "BuildStats",
    "BuiltMesh",
    "build",
    "build_cells",
    "build_index",
    "build_adjacency",
    "shared_portal",
    "orient_portal",
]


@dataclass(slots=True)
class BuildStats:
    """Counters collected while building a mesh."""

    polygons: int = 0
    cells: int = 0
    candidate_pairs: int = 0
    """Cell pairs whose bounds intersect and were tested for a shared edge."""
    portals: int = 0
    duration_ms: float = 0.0


@dataclass(slots=True)
class BuiltMesh:
    cells: List[Polygon]
    index: SpatialIndex
    adjacency: Adjacency
    stats: BuildStats = field(default_factory=BuildStats)


def _normalize_polygons(polygons: Iterable[Any]) -> List[List[Vector]]:
    shapes: List[List[Vector]] = []
    try:
        items = list(polygons)
    except TypeError as exc:
        raise MalformedInputError(f"Polygons must be an iterable of point lists, got {polygons!r}") from exc
    for n, points in enumerate(items):
        try:
            shape = [as_vector(p) for p in points]
        except TypeError as exc:
            raise MalformedInputError(f"Polygon {n} is not a sequence of points: {points!r}") from exc
        except MalformedInputError as exc:
            raise MalformedInputError(f"Polygon {n}: {exc}") from exc
        if len(shape) < 3:
            raise MalformedInputError(f"Polygon {n} needs at least 3 points, got {len(shape)}")
        shapes.append(shape)
    return shapes


def build_cells(polygons: Iterable[Any], options: NavMeshOptions) -> Tuple[List[Polygon], int]:
    """Return the mesh cells and the number of input polygons.

    With ``options.triangulate`` every input polygon is split into triangles;
    otherwise each polygon is taken as one cell and must already be convex.
    """

    shapes = _normalize_polygons(polygons)
    if not options.triangulate:
        return [Polygon(shape) for shape in shapes], len(shapes)

    triangulator = options.triangulator or triangulate
    cells: List[Polygon] = []
    for n, shape in enumerate(shapes):
        triangles = triangulator(flatten(shape))
        for tri in triangles:
            try:
                cells.append(Polygon([shape[i] for i in tri]))
            except IndexError as exc:
                raise MalformedInputError(
                    f"Triangulation of polygon {n} returned out-of-range indices {tri!r}"
                ) from exc
        LOGGER.debug("Polygon %d: %d vertices -> %d triangles", n, len(shape), len(triangles))
    return cells, len(shapes)


def build_index(cells: List[Polygon]) -> SpatialIndex:
    """Index every cell's bounding box, with the cell index as payload."""

    index: SpatialIndex = SpatialIndex()
    for i, cell in enumerate(cells):
        index.insert(cell.bounds, i)
    return index


def _positive_overlap(touching: Optional[Edge], edge: Edge) -> Optional[Edge]:
    if touching is None:
        return None
    shared = touching.overlap(edge)
    if shared is None or shared.length() <= EPS:
        return None
    return shared


def shared_portal(a: Polygon, b: Polygon) -> Optional[Edge]:
    """Return the boundary segment shared by two cells, if it has positive length.

    Cells meeting at a single vertex share no portal.
    """

    for edge in b.edges():
        portal = _positive_overlap(a.touches(edge), edge)
        if portal is not None:
            return portal
    # An edge of ``a`` may lie strictly inside an edge of ``b``.
    for edge in a.edges():
        portal = _positive_overlap(b.touches(edge), edge)
        if portal is not None:
            return portal
    return None


def orient_portal(portal: Edge, centroid: Vector) -> Edge:
    """Return ``portal`` as ``Edge(left, right)`` viewed from ``centroid``."""

    if cross(portal.p1.sub(centroid), portal.p2.sub(centroid)) < 0:
        return Edge(portal.p1, portal.p2)
    return Edge(portal.p2, portal.p1)


def build_adjacency(cells: List[Polygon], index: SpatialIndex) -> Tuple[Adjacency, BuildStats]:
    """Find portals between every pair of cells with intersecting bounds."""

    stats = BuildStats(cells=len(cells))
    neighbors: List[Dict[int, Edge]] = [{} for _ in cells]
    for i, cell in enumerate(cells):
        for j in index.query(cell.bounds):
            if j <= i:
                continue
            stats.candidate_pairs += 1
            other = cells[j]
            portal = shared_portal(cell, other)
            if portal is None:
                continue
            neighbors[i][j] = orient_portal(portal, cell.centroid)
            neighbors[j][i] = orient_portal(portal, other.centroid)
            stats.portals += 1
    adjacency: Adjacency = tuple(MappingProxyType(n) for n in neighbors)
    return adjacency, stats


def build(polygons: Iterable[Any], options: NavMeshOptions) -> BuiltMesh:
    """Build cells, their spatial index and the portal graph."""

    t0_ns = time.perf_counter_ns()
    cells, polygon_count = build_cells(polygons, options)
    index = build_index(cells)
    adjacency, stats = build_adjacency(cells, index)
    stats.polygons = polygon_count
    stats.duration_ms = (time.perf_counter_ns() - t0_ns) / 1_000_000

    LOGGER.info(
        "navmesh built: polygons=%d cells=%d candidate_pairs=%d portals=%d duration_ms=%.2f",
        stats.polygons,
        stats.cells,
        stats.candidate_pairs,
        stats.portals,
        stats.duration_ms,
    )
    return BuiltMesh(cells=cells, index=index, adjacency=adjacency, stats=stats)
