"""Navigation mesh: built once from polygons, then queried for paths.

After construction nothing on the mesh is mutated; every query allocates its
own search and funnel state, so concurrent ``find_path`` calls on one mesh do
not interfere.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .astar import astar
from .builder import Adjacency, BuildStats, build
from .cost import CostModel
from .funnel import smooth_path
from .geometry import Edge, Polygon, Vector, as_vector
from .options import NavMeshOptions
from .path import PathResult
from .spatial import SpatialIndex, bounds_around

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Neighbor:
    """A cell adjacent to another one, with the portal oriented from the latter."""

    index: int
    polygon: Polygon
    portal: Edge


class NavMesh:
    """Planar navigation mesh over convex cells.

    ``polygons`` is an ordered sequence of polygons, each an ordered sequence
    of points (``(x, y)`` pairs, ``{"x": .., "y": ..}`` mappings or
    :class:`~nav2d.geometry.Vector`). Settings come from ``options`` and/or
    keyword overrides such as ``triangulate=False``.
    """

    def __init__(
        self,
        polygons: Iterable[Any],
        options: Optional[NavMeshOptions] = None,
        **overrides: Any,
    ) -> None:
        opts = options or NavMeshOptions()
        if overrides:
            try:
                opts = dataclasses.replace(opts, **overrides)
            except TypeError as exc:
                raise TypeError(f"Unknown NavMesh option(s): {sorted(overrides)}") from exc
        self.options = opts.validate()
        self._cost_model = CostModel.from_funcs(opts.cost_func, opts.heuristic_func)

        built = build(polygons, opts)
        self._cells: List[Polygon] = built.cells
        self._index: SpatialIndex = built.index
        self._adjacency: Adjacency = built.adjacency
        self.stats: BuildStats = built.stats

    @property
    def polygons(self) -> List[Polygon]:
        """The mesh cells, in construction order (a copy)."""

        return list(self._cells)

    @property
    def adjacency(self) -> Adjacency:
        """Per cell: neighbor index -> portal as ``Edge(left, right)`` seen from that cell."""

        return self._adjacency

    @property
    def point_query_size(self) -> float:
        return self.options.point_query_size

    def __len__(self) -> int:
        return len(self._cells)

    def neighbors(self, index: int) -> List[Neighbor]:
        """Return the cells adjacent to cell ``index``."""

        return [
            Neighbor(index=j, polygon=self._cells[j], portal=portal)
            for j, portal in self._adjacency[index].items()
        ]

    def portal(self, a: int, b: int) -> Optional[Edge]:
        """Return the portal from cell ``a`` into cell ``b`` (left, right), if adjacent."""

        return self._adjacency[a].get(b)

    def locate(self, point: Any) -> Optional[int]:
        """Return the index of the cell containing ``point``.

        When the point lies on a boundary shared by several cells, the lowest
        cell index wins.
        """

        point = as_vector(point)
        query = bounds_around(point.x, point.y, self.options.point_query_size)
        for idx in self._index.query(query):
            if self._cells[idx].contains(point):
                return idx
        return None

    def search(self, from_point: Any, to_point: Any) -> PathResult:
        """Compute a path and report how the search went.

        Unreachable queries are reported through ``PathResult.reason``; they
        never raise.
        """

        start = as_vector(from_point)
        goal = as_vector(to_point)
        t0_ns = time.perf_counter_ns()

        start_cell = self.locate(start)
        goal_cell = self.locate(goal)
        if start_cell is None or goal_cell is None:
            reason = "start-outside-mesh" if start_cell is None else "goal-outside-mesh"
            result = PathResult(path=None, cells=None, reason=reason, expanded=0, cost=0.0)
            self._log_metrics(start, goal, result, t0_ns)
            return result

        found = astar(start_cell, goal_cell, self._cells, self._adjacency, self._cost_model)
        if found.cells is None:
            result = PathResult(path=None, cells=None, reason="unreachable", expanded=found.expanded, cost=0.0)
        else:
            path = smooth_path(start, goal, found.cells, self._adjacency)
            result = PathResult(path=path, cells=found.cells, reason=None, expanded=found.expanded, cost=found.cost)
        self._log_metrics(start, goal, result, t0_ns)
        return result

    def find_path(self, from_point: Any, to_point: Any) -> Optional[List[Vector]]:
        """Return the taut path between two points, or ``None`` if there is none."""

        return self.search(from_point, to_point).path

    def _log_metrics(self, start: Vector, goal: Vector, result: PathResult, t0_ns: int) -> None:
        if not LOGGER.isEnabledFor(logging.DEBUG):
            return
        duration_us = (time.perf_counter_ns() - t0_ns) // 1_000
        LOGGER.debug(
            "find_path metrics: start=%s goal=%s reason=%s expanded=%d cells=%d path_len=%d cost=%.3f duration_us=%d",
            start.to_list(),
            goal.to_list(),
            result.reason,
            result.expanded,
            len(result.cells) if result.cells is not None else 0,
            len(result.path) if result.path is not None else 0,
            result.cost,
            duration_us,
        )
