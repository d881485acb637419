"""R-tree spatial index over axis-aligned boxes."""

from __future__ import annotations

from typing import Dict, Generic, List, Tuple, TypeVar

from rtree import index as rtree_index

from .errors import MalformedInputError
from .geometry import Bounds

T = TypeVar("T")

__all__ = ["SpatialIndex", "bounds_around", "bounds_intersect"]


def bounds_around(x: float, y: float, size: float) -> Bounds:
    """Return the square of side ``size`` centred on ``(x, y)``."""

    half = size / 2.0
    return (x - half, y - half, x + half, y + half)


def bounds_intersect(a: Bounds, b: Bounds) -> bool:
    return a[0] <= b[2] and a[2] >= b[0] and a[1] <= b[3] and a[3] >= b[1]


class SpatialIndex(Generic[T]):
    """In-memory R-tree mapping boxes to payloads.

    Entry ids are dense and assigned in insertion order; :meth:`query`
    returns payloads sorted by entry id, so results do not depend on the
    tree's internal traversal order.
    """

    def __init__(self) -> None:
        p = rtree_index.Property()
        p.dimension = 2
        p.interleaved = True
        self._rt = rtree_index.Index(properties=p)
        self._payloads: List[T] = []
        self._bounds: Dict[int, Bounds] = {}

    def __len__(self) -> int:
        return len(self._payloads)

    def insert(self, bounds: Bounds, payload: T) -> int:
        """Store ``payload`` under ``bounds`` and return its entry id."""

        box = _checked(bounds)
        entry_id = len(self._payloads)
        self._payloads.append(payload)
        self._bounds[entry_id] = box
        self._rt.insert(entry_id, box)
        return entry_id

    def query(self, bounds: Bounds) -> List[T]:
        """Return payloads of all entries whose box intersects ``bounds``."""

        box = _checked(bounds)
        return [self._payloads[i] for i in sorted(self._rt.intersection(box))]

    def bounds_of(self, entry_id: int) -> Bounds:
        return self._bounds[entry_id]


def _checked(bounds: Bounds) -> Tuple[float, float, float, float]:
    try:
        min_x, min_y, max_x, max_y = (float(v) for v in bounds)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Bounds must be four numbers, got {bounds!r}") from exc
    if min_x > max_x or min_y > max_y:
        raise MalformedInputError(f"Bounds have min > max: {bounds!r}")
    return (min_x, min_y, max_x, max_y)
