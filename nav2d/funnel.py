"""Funnel algorithm ("string pulling") over a corridor of portals.

Each side of the funnel is kept as a chain of points starting at the apex,
the last point committed to the output path. Portals are ``(left, right)``
pairs as seen when walking the corridor from start to goal.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .builder import Adjacency
from .errors import InvalidOperationError
from .geometry import EPS, Vector, cross

Portal = Tuple[Vector, Vector]

LEFT = 1
RIGHT = -1

__all__ = ["Portal", "portals_for", "string_pull", "smooth_path"]


def _tri_area2(a: Vector, b: Vector, c: Vector) -> float:
    return cross(b.sub(a), c.sub(a))


def _outside(a: Vector, b: Vector, point: Vector, side: int) -> bool:
    """True when ``point`` lies strictly beyond line ``a -> b`` on ``side``."""

    return side * _tri_area2(a, b, point) > EPS


def portals_for(cells: Sequence[int], adjacency: Adjacency) -> List[Portal]:
    """Return the oriented portals crossed when walking ``cells`` in order."""

    portals: List[Portal] = []
    for a, b in zip(cells, cells[1:]):
        try:
            edge = adjacency[a][b]
        except (IndexError, KeyError) as exc:
            raise InvalidOperationError(f"Cells {a} and {b} are not adjacent") from exc
        portals.append((edge.p1, edge.p2))
    return portals


def _advance(path: List[Vector], chain: List[Vector], opposite: List[Vector], candidate: Vector, side: int) -> None:
    if candidate.equals(chain[-1]):
        return
    if candidate.equals(chain[0]):
        del chain[1:]
        return

    # Keep the chain up to the first segment the candidate does not bulge past.
    cut = len(chain) - 1
    for i in range(len(chain) - 1):
        if not _outside(chain[i], chain[i + 1], candidate, side):
            cut = i
            break
    del chain[cut + 1:]

    if cut == 0:
        # The side narrowed back to the apex; if the candidate now crosses the
        # opposite side, the apex walks along that side.
        while len(opposite) > 1 and _outside(opposite[0], opposite[1], candidate, -side):
            opposite.pop(0)
            path.append(opposite[0])
        chain[:] = [opposite[0]]
    chain.append(candidate)


def string_pull(start: Vector, goal: Vector, portals: Sequence[Portal]) -> List[Vector]:
    """Return the shortest polyline from ``start`` to ``goal`` through ``portals``."""

    if not portals:
        return [start, goal]

    path: List[Vector] = [start]
    left: List[Vector] = [start]
    right: List[Vector] = [start]
    # A zero-width portal at the goal closes the funnel.
    for left_point, right_point in list(portals) + [(goal, goal)]:
        _advance(path, left, right, left_point, LEFT)
        _advance(path, right, left, right_point, RIGHT)
    path.append(goal)
    return path


def smooth_path(start: Vector, goal: Vector, cells: Sequence[int], adjacency: Adjacency) -> List[Vector]:
    """Turn a cell sequence into a taut path from ``start`` to ``goal``."""

    if not cells:
        raise InvalidOperationError("Cannot smooth an empty cell sequence")
    if len(cells) == 1:
        return [start, goal]
    return string_pull(start, goal, portals_for(cells, adjacency))
