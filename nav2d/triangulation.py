"""Triangulation of simple polygons given as flat coordinate lists.

The mesh builder only depends on the call signature
``triangulate(flat_coords) -> [(i, j, k), ...]`` where indices refer to
vertices (coordinate pairs) of the input; any callable with that shape can be
supplied through :class:`~nav2d.options.NavMeshOptions`.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import shapely
from shapely.geometry import Polygon as ShapelyPolygon

from .errors import MalformedInputError
from .geometry import EPS

LOGGER = logging.getLogger(__name__)

Triangle = Tuple[int, int, int]

__all__ = ["Triangle", "triangulate", "flatten"]


def flatten(points: Sequence[Tuple[float, float]]) -> List[float]:
    """Return ``[x0, y0, x1, y1, ...]`` for a sequence of points."""

    flat: List[float] = []
    for x, y in points:
        flat.extend((x, y))
    return flat


def triangulate(flat_coords: Sequence[float]) -> List[Triangle]:
    """Decompose a simple polygon into triangles.

    Uses the constrained Delaunay triangulation from GEOS, which keeps every
    triangle inside the polygon and introduces no new vertices.
    """

    if len(flat_coords) % 2:
        raise MalformedInputError(f"Flat coordinate list has odd length {len(flat_coords)}")
    coords = [(float(flat_coords[i]), float(flat_coords[i + 1])) for i in range(0, len(flat_coords), 2)]
    if len(coords) < 3:
        raise MalformedInputError(f"Polygon needs at least 3 vertices, got {len(coords)}")

    poly = ShapelyPolygon(coords)
    if poly.area <= EPS:
        LOGGER.warning("Skipping degenerate polygon with zero area: %s", coords)
        return []

    lookup: Dict[Tuple[float, float], int] = {}
    for idx, xy in enumerate(coords):
        lookup.setdefault(xy, idx)

    triangles: List[Triangle] = []
    for tri in shapely.constrained_delaunay_triangles(poly).geoms:
        a, b, c = list(tri.exterior.coords)[:3]
        triangles.append((_index_of(a, lookup, coords), _index_of(b, lookup, coords), _index_of(c, lookup, coords)))
    return triangles


def _index_of(
    xy: Tuple[float, float],
    lookup: Dict[Tuple[float, float], int],
    coords: List[Tuple[float, float]],
) -> int:
    idx = lookup.get((xy[0], xy[1]))
    if idx is not None:
        return idx
    # GEOS may hand back coordinates that differ in the last ulp.
    x, y = xy
    return min(range(len(coords)), key=lambda i: (coords[i][0] - x) ** 2 + (coords[i][1] - y) ** 2)
