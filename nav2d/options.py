"""Configuration data model for navigation mesh construction and queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence

from .errors import MalformedInputError

if TYPE_CHECKING:
    from .geometry import Edge, Polygon
    from .triangulation import Triangle

DEFAULT_POINT_QUERY_SIZE = 0.01

CostFunc = Callable[["Polygon", "Polygon", "Edge"], float]
HeuristicFunc = Callable[["Polygon", "Polygon"], float]
Triangulator = Callable[[Sequence[float]], List["Triangle"]]


@dataclass(slots=True)
class NavMeshOptions:
    """Settings applied when a :class:`~nav2d.navmesh.NavMesh` is built.

    Callables left as ``None`` fall back to the defaults in
    :mod:`nav2d.cost` and :mod:`nav2d.triangulation`.
    """

    triangulate: bool = True
    """Split every input polygon into triangles before building cells."""

    point_query_size: float = DEFAULT_POINT_QUERY_SIZE
    """Side length of the box used to look up the cell under a point.

    Must stay well below the typical cell size.
    """

    cost_func: Optional[CostFunc] = None
    """``(cell_a, cell_b, portal) -> cost`` for stepping between adjacent cells."""

    heuristic_func: Optional[HeuristicFunc] = None
    """``(cell, goal_cell) -> estimate``; should never overestimate for optimal paths."""

    triangulator: Optional[Triangulator] = None
    """``flat_coords -> [(i, j, k), ...]`` used when ``triangulate`` is set."""

    def validate(self) -> "NavMeshOptions":
        """Raise :class:`MalformedInputError` for unusable settings."""

        size = self.point_query_size
        if isinstance(size, bool) or not isinstance(size, (int, float)) or not size > 0:
            raise MalformedInputError(f"point_query_size must be a positive number, got {size!r}")
        for name in ("cost_func", "heuristic_func", "triangulator"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise MalformedInputError(f"{name} must be callable, got {value!r}")
        return self

    def to_json_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable summary; callables are reported by presence."""

        return {
            "triangulate": self.triangulate,
            "point_query_size": self.point_query_size,
            "custom_cost": self.cost_func is not None,
            "custom_heuristic": self.heuristic_func is not None,
            "custom_triangulator": self.triangulator is not None,
        }
