"""Geometry kernel: vectors, edges and polygons with tolerant predicates.

All predicates compare against :data:`EPS` so that coordinates produced by
floating point arithmetic (triangulation, portal overlaps) still match the
input vertices they were derived from.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import InvalidOperationError, MalformedInputError

EPS = 1e-8

Bounds = Tuple[float, float, float, float]
"""Axis-aligned box expressed as ``(min_x, min_y, max_x, max_y)``."""

__all__ = [
    "EPS",
    "Bounds",
    "Vector",
    "Point",
    "Edge",
    "Polygon",
    "as_vector",
    "isclose",
    "clip",
    "dot",
    "cross",
]


def isclose(a: float, b: float, eps: float = EPS) -> bool:
    """Return ``True`` when ``a`` lies strictly within ``eps`` of ``b``."""

    return b - eps < a < b + eps


def clip(lo: float, hi: float, value: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""

    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def dot(a: "Vector", b: "Vector") -> float:
    return a.x * b.x + a.y * b.y


def cross(a: "Vector", b: "Vector") -> float:
    """Return the z component of the 2D cross product ``a × b``."""

    return a.x * b.y - a.y * b.x


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Vector:
    """Immutable 2D vector.

    ``==`` is exact structural equality (vectors are hashable); use
    :meth:`equals` for the tolerant comparison used by every predicate.
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        if not (_is_number(self.x) and _is_number(self.y)):
            raise MalformedInputError(
                f"Vector components must be numbers, got x={self.x!r} y={self.y!r}"
            )

    def add(self, other: Union["Vector", float]) -> "Vector":
        other = _operand(other)
        return Vector(self.x + other.x, self.y + other.y)

    def sub(self, other: Union["Vector", float]) -> "Vector":
        other = _operand(other)
        return Vector(self.x - other.x, self.y - other.y)

    def mul(self, other: Union["Vector", float]) -> "Vector":
        """Componentwise product; a scalar is broadcast to both components."""

        other = _operand(other)
        return Vector(self.x * other.x, self.y * other.y)

    def div(self, other: Union["Vector", float]) -> "Vector":
        """Componentwise quotient; a scalar is broadcast to both components."""

        other = _operand(other)
        return Vector(self.x / other.x, self.y / other.y)

    __add__ = add
    __sub__ = sub
    __mul__ = mul
    __truediv__ = div

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def dot(self, other: "Vector") -> float:
        return dot(self, other)

    def cross(self, other: "Vector") -> float:
        return cross(self, other)

    def equals(self, other: Any, eps: float = EPS) -> bool:
        """Approximate equality with another point-like value."""

        other = as_vector(other)
        return isclose(self.x, other.x, eps) and isclose(self.y, other.y, eps)

    def angle(self, other: "Vector") -> float:
        """Return the unsigned angle to ``other`` in ``[0, π]``."""

        norms = self.length() * other.length()
        if norms == 0:
            raise InvalidOperationError(f"Angle is undefined for zero-length vector: {self!r}, {other!r}")
        # Rounding can push the cosine slightly outside [-1, 1].
        return math.acos(clip(-1.0, 1.0, dot(self, other) / norms))

    def counterclockwise_angle(self, other: "Vector") -> float:
        """Return the angle swept counterclockwise from ``self`` to ``other`` in ``[0, 2π)``."""

        angle = self.angle(other)
        if cross(self, other) >= 0:
            return angle
        return 2 * math.pi - angle

    def to_list(self) -> List[float]:
        return [self.x, self.y]


Point = Vector
"""Alias kept for callers that think in points rather than vectors."""


def _operand(other: Any) -> Vector:
    if _is_number(other):
        return Vector(other, other)
    return as_vector(other)


def as_vector(point: Any) -> Vector:
    """Normalize a point-like value into a :class:`Vector`.

    Accepted forms: a ``Vector``, a two-element numeric sequence, a mapping
    with ``"x"``/``"y"`` keys, or any object exposing ``x``/``y`` attributes.
    """

    if isinstance(point, Vector):
        return point
    if isinstance(point, Mapping):
        if "x" in point and "y" in point:
            return Vector(point["x"], point["y"])
        raise MalformedInputError(f"Point mapping requires 'x' and 'y' keys, got {point!r}")
    if hasattr(point, "x") and hasattr(point, "y"):
        return Vector(point.x, point.y)
    if isinstance(point, (str, bytes)):
        raise MalformedInputError(f"Cannot interpret {point!r} as a point")
    try:
        values = list(point)
    except TypeError as exc:
        raise MalformedInputError(f"Cannot interpret {point!r} as a point") from exc
    if len(values) != 2:
        raise MalformedInputError(f"Point must have exactly two coordinates, got {point!r}")
    return Vector(values[0], values[1])


class Edge:
    """Directed segment from ``p1`` to ``p2``.

    Edges compare and hash by identity so that a polygon's boundary edges can
    be used as mapping keys; :meth:`equals` is the undirected geometric test.
    """

    __slots__ = ("p1", "p2")

    def __init__(self, p1: Any, p2: Any) -> None:
        self.p1 = as_vector(p1)
        self.p2 = as_vector(p2)

    def __repr__(self) -> str:
        return f"Edge({self.p1!r}, {self.p2!r})"

    def length(self) -> float:
        return self.direction().length()

    def direction(self) -> Vector:
        return self.p1.sub(self.p2)

    def midpoint(self) -> Vector:
        return self.p1.add(self.p2).div(2)

    def on_edge(self, point: Any) -> bool:
        """Return whether ``point`` lies on the segment (endpoints included)."""

        point = as_vector(point)
        direction = self.direction()
        squared = dot(direction, direction)
        if squared == 0:
            return self.p1.equals(point)
        point_vec = self.p1.sub(point)
        # Collinear with the supporting line and between p1 and p2.
        component = dot(direction, point_vec) / squared
        return isclose(cross(direction, point_vec), 0) and -EPS <= component <= 1 + EPS

    def parallel(self, other: "Edge") -> bool:
        return isclose(cross(self.direction(), other.direction()), 0)

    def collinear(self, other: "Edge") -> bool:
        """Return whether both edges lie on the same supporting line."""

        return self.parallel(other) and isclose(cross(self.direction(), other.p1.sub(self.p1)), 0)

    def overlap(self, other: "Edge") -> Optional["Edge"]:
        """Return the shared part of two collinear edges.

        ``None`` when they are disjoint, a zero-length edge when they only
        touch at one point. Raises :class:`InvalidOperationError` for edges
        that are not collinear.
        """

        if not self.collinear(other):
            raise InvalidOperationError(f"Overlap is only defined for collinear edges: {self!r}, {other!r}")

        shared = [p for p in (self.p1, self.p2) if other.on_edge(p)]
        shared += [p for p in (other.p1, other.p2) if self.on_edge(p)]

        unique: List[Vector] = []
        for point in shared:
            if not any(point.equals(seen) for seen in unique):
                unique.append(point)

        if not unique:
            return None
        if len(unique) == 1:
            return Edge(unique[0], unique[0])
        a, b = max(combinations(unique, 2), key=lambda pair: pair[0].sub(pair[1]).length())
        return Edge(a, b)

    def equals(self, other: "Edge") -> bool:
        """Undirected approximate equality."""

        return (self.p1.equals(other.p1) and self.p2.equals(other.p2)) or (
            self.p1.equals(other.p2) and self.p2.equals(other.p1)
        )


class Polygon:
    """Closed polygon; insertion order of ``points`` defines the winding.

    ``bounds`` and ``centroid`` are computed once. The centroid is the mean of
    the vertices, not the area centroid.
    """

    __slots__ = ("points", "bounds", "centroid", "_edges")

    def __init__(self, points: Iterable[Any]) -> None:
        try:
            normalized = tuple(as_vector(p) for p in points)
        except TypeError as exc:
            raise MalformedInputError(f"Polygon points must be iterable, got {points!r}") from exc
        if len(normalized) < 3:
            raise MalformedInputError(f"Polygon needs at least 3 points, got {len(normalized)}")

        self.points: Tuple[Vector, ...] = normalized
        xs = [p.x for p in normalized]
        ys = [p.y for p in normalized]
        self.bounds: Bounds = (min(xs), min(ys), max(xs), max(ys))
        self.centroid: Vector = Vector(sum(xs) / len(xs), sum(ys) / len(ys))
        self._edges: Tuple[Edge, ...] = tuple(
            Edge(normalized[i - 1], point) for i, point in enumerate(normalized)
        )

    def __repr__(self) -> str:
        return f"Polygon({[p.to_list() for p in self.points]!r})"

    def edges(self) -> Tuple[Edge, ...]:
        """Boundary edges; the first one wraps from the last point to the first."""

        return self._edges

    def centroid_distance(self, other: "Polygon") -> float:
        return self.centroid.sub(other.centroid).length()

    def bounds_size(self) -> Tuple[float, float, float, float]:
        """Return the bounding box as ``(x, y, width, height)``."""

        min_x, min_y, max_x, max_y = self.bounds
        return (min_x, min_y, max_x - min_x, max_y - min_y)

    def contains(self, point: Any) -> bool:
        """Ray casting test; points on the boundary count as contained."""

        point = as_vector(point)
        min_x, min_y, max_x, max_y = self.bounds
        if not (min_x - EPS <= point.x <= max_x + EPS and min_y - EPS <= point.y <= max_y + EPS):
            return False

        inside = False
        pts = self.points
        j = len(pts) - 1
        for i in range(len(pts)):
            xi, yi = pts[i].x, pts[i].y
            xj, yj = pts[j].x, pts[j].y
            if (yi > point.y) != (yj > point.y) and point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi:
                inside = not inside
            j = i
        return inside or self.on_edge(point) is not None

    def on_edge(self, point: Any) -> Optional[Edge]:
        """Return the first boundary edge containing ``point``, if any."""

        point = as_vector(point)
        for edge in self._edges:
            if edge.on_edge(point):
                return edge
        return None

    def touches(self, other_edge: Edge) -> Optional[Edge]:
        """Return a boundary edge collinear with ``other_edge`` that holds one of its endpoints."""

        for edge in self._edges:
            if edge.collinear(other_edge) and (edge.on_edge(other_edge.p1) or edge.on_edge(other_edge.p2)):
                return edge
        return None
