"""Planar navigation meshes with A* search and funnel path smoothing."""

from .errors import InvalidOperationError, MalformedInputError, Nav2dError
from .geometry import EPS, Edge, Point, Polygon, Vector, as_vector, clip, cross, dot, isclose
from .navmesh import NavMesh, Neighbor
from .options import NavMeshOptions
from .path import PathResult

__all__ = [
    "EPS",
    "Edge",
    "InvalidOperationError",
    "MalformedInputError",
    "Nav2dError",
    "NavMesh",
    "NavMeshOptions",
    "Neighbor",
    "PathResult",
    "Point",
    "Polygon",
    "Vector",
    "as_vector",
    "clip",
    "cross",
    "dot",
    "isclose",
]
