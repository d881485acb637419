"""Exception types raised by nav2d.

Unreachable queries are not errors: they produce a ``None`` path and a
reason string on :class:`~nav2d.path.PathResult` instead.
"""

from __future__ import annotations

__all__ = ["Nav2dError", "MalformedInputError", "InvalidOperationError"]


class Nav2dError(Exception):
    """Base class for all nav2d errors."""


class MalformedInputError(Nav2dError, ValueError):
    """Input geometry or configuration could not be accepted as given."""


class InvalidOperationError(Nav2dError, ValueError):
    """A geometric operation is undefined for its operands."""
