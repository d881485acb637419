"""Cost and heuristic functions for the cell graph search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidOperationError
from .geometry import Edge, Polygon
from .options import CostFunc, HeuristicFunc


def centroid_cost(a: Polygon, b: Polygon, _portal: Optional[Edge] = None) -> float:
    """Default step cost: Euclidean distance between vertex centroids."""

    return a.centroid_distance(b)


def centroid_heuristic(cell: Polygon, goal: Polygon) -> float:
    """Default admissible-in-practice estimate: centroid distance to the goal cell."""

    return cell.centroid_distance(goal)


@dataclass(slots=True)
class CostModel:
    """Binds the configured cost and heuristic functions.

    Callers supplying their own heuristic are responsible for keeping it
    admissible; this is not checked.
    """

    cost_func: CostFunc = centroid_cost
    heuristic_func: HeuristicFunc = centroid_heuristic

    @classmethod
    def from_funcs(cls, cost_func: Optional[CostFunc], heuristic_func: Optional[HeuristicFunc]) -> "CostModel":
        return cls(
            cost_func=cost_func if cost_func is not None else centroid_cost,
            heuristic_func=heuristic_func if heuristic_func is not None else centroid_heuristic,
        )

    def step_cost(self, a: Polygon, b: Polygon, portal: Edge) -> float:
        """Return the cost of moving from ``a`` to ``b`` through ``portal``."""

        cost = self.cost_func(a, b, portal)
        if cost < 0:
            raise InvalidOperationError(f"Cost function returned a negative cost: {cost!r}")
        return cost

    def heuristic(self, cell: Polygon, goal: Polygon) -> float:
        """Return the remaining-cost estimate; always 0 for the goal itself."""

        if cell is goal:
            return 0.0
        estimate = self.heuristic_func(cell, goal)
        if estimate < 0:
            raise InvalidOperationError(f"Heuristic function returned a negative estimate: {estimate!r}")
        return estimate
