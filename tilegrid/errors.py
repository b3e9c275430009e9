"""Exceptions raised by tilegrid queries and path maps.

Every failure is synchronous and immediate: callers either pass valid
positions or handle one of the errors below. ``OutOfBoundsError`` also
subclasses ``IndexError`` and the argument errors subclass ``ValueError`` so
generic handlers keep working.
"""

from __future__ import annotations

from typing import Optional


class GridError(Exception):
    """Base class for all tilegrid errors."""


class OutOfBoundsError(GridError, IndexError):
    """Raised when a coordinate argument resolves outside the grid."""

    def __init__(self, *, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Position ({x}, {y}) is outside the {width}x{height} grid"
        )


class InvalidTargetError(GridError, ValueError):
    """Raised when a path map is requested for an empty or unwalkable target."""

    def __init__(self, *, x: int, y: int, reason: str = "target tile is not walkable") -> None:
        self.x = x
        self.y = y
        self.reason = reason
        super().__init__(f"Cannot build a path map toward ({x}, {y}): {reason}")


class InvalidTileError(GridError, ValueError):
    """Raised when a PathMap query receives a tile it cannot answer for."""

    def __init__(self, *, x: Optional[int], y: Optional[int], reason: str) -> None:
        self.x = x
        self.y = y
        self.reason = reason
        super().__init__(f"Invalid tile ({x}, {y}) for path map query: {reason}")


class UnreachableTileError(InvalidTileError):
    """Raised when a walkable tile was never reached by the path search."""

    def __init__(self, *, x: int, y: int) -> None:
        super().__init__(x=x, y=y, reason="tile cannot reach the target")
