"""Result data model for path queries.

``PathResult`` is JSON-friendly through :meth:`PathResult.to_json_dict` so the
CLI and callers can serialize it without extra glue.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from .geometry import Vector

Reason = Literal["start-outside-mesh", "goal-outside-mesh", "unreachable"]
"""Why a query produced no path."""


@dataclass(slots=True)
class PathResult:
    """Outcome of a :meth:`~nav2d.navmesh.NavMesh.search` call."""

    path: Optional[List[Vector]]
    """Taut polyline from start to goal, or ``None`` if there is no path."""

    cells: Optional[List[int]]
    """Indices of the cells crossed, in order, or ``None``."""

    reason: Optional[Reason]
    """Set only when ``path`` is ``None``."""

    expanded: int
    """Number of cells expanded by the search."""

    cost: float
    """Summed step cost along ``cells`` (0 when no path)."""

    @property
    def found(self) -> bool:
        return self.path is not None

    def to_json_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""

        return {
            "path": [p.to_list() for p in self.path] if self.path is not None else None,
            "cells": list(self.cells) if self.cells is not None else None,
            "reason": self.reason,
            "expanded": self.expanded,
            "cost": self.cost,
        }
