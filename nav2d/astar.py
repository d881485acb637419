"""A* search over the cell graph.

Implements deterministic weighted A* using a binary heap with a stable
insertion counter as tie-breaker, and reconstructs the cell sequence from
recorded parent links.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from math import inf
from typing import Dict, List, Optional, Sequence, Tuple

from .builder import Adjacency
from .cost import CostModel
from .geometry import Polygon


@dataclass(slots=True)
class SearchResult:
    """Cells visited from start to goal, or ``None`` when they are disconnected."""

    cells: Optional[List[int]]
    expanded: int
    cost: float


def astar(
    start: int,
    goal: int,
    cells: Sequence[Polygon],
    adjacency: Adjacency,
    cost_model: CostModel,
) -> SearchResult:
    """Run A* from cell ``start`` to cell ``goal``.

    The search stops as soon as the goal is popped from the frontier, which
    yields an optimal route when the heuristic is admissible and consistent.
    """

    if start == goal:
        return SearchResult(cells=[start], expanded=0, cost=0.0)

    goal_cell = cells[goal]

    # Best-known cost to each cell.
    g_score: Dict[int, float] = {start: 0.0}

    # Parent mapping for reconstruction: child -> parent
    parent: Dict[int, int] = {}

    counter = itertools.count()
    # The start entry is alone in the heap, so its priority needs no estimate.
    open_heap: List[Tuple[float, int, float, int]] = [(0.0, next(counter), 0.0, start)]

    expanded = 0

    while open_heap:
        _, _, g, current = heapq.heappop(open_heap)
        # A cheaper route to current was pushed after this entry.
        if g != g_score[current]:
            continue

        if current == goal:
            return SearchResult(cells=_reconstruct(current, parent), expanded=expanded, cost=g)

        expanded += 1
        current_cell = cells[current]
        for neighbor, portal in adjacency[current].items():
            neighbor_cell = cells[neighbor]
            tentative_g = g + cost_model.step_cost(current_cell, neighbor_cell, portal)
            if tentative_g >= g_score.get(neighbor, inf):
                continue

            g_score[neighbor] = tentative_g
            parent[neighbor] = current
            nf = tentative_g + cost_model.heuristic(neighbor_cell, goal_cell)
            heapq.heappush(open_heap, (nf, next(counter), tentative_g, neighbor))

    # Frontier exhausted: start and goal are in different components.
    return SearchResult(cells=None, expanded=expanded, cost=0.0)


def _reconstruct(end: int, parent: Dict[int, int]) -> List[int]:
    path = [end]
    cur = end
    while cur in parent:
        cur = parent[cur]
        path.append(cur)
    path.reverse()
    return path
