"""Tile capability and the rectangular grid container.

Host applications own their tiles. The engine only needs four read-only
accessors, described by the ``Tile`` protocol, so any object exposing
``x``, ``y``, ``is_walkable`` and ``weight`` can be stored in a ``TileGrid``.
``GridTile`` is a ready-made implementation used by the loader, the examples
and the tests.

Coordinates are always ``(x, y)``: ``x`` is the column, ``y`` the row.
Rows are stored top to bottom, so ``rows[y][x]`` addresses a cell.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

from .errors import OutOfBoundsError

Coord = Tuple[int, int]


@runtime_checkable
class Tile(Protocol):
    """Capability every tile handle must expose."""

    @property
    def x(self) -> int: ...

    @property
    def y(self) -> int: ...

    @property
    def is_walkable(self) -> bool: ...

    @property
    def weight(self) -> float: ...


# Public operations accept either a tile handle or a raw (x, y) pair.
Point = Union[Tile, Coord]


def _coordinate(value: Union[int, float]) -> int:
    # 2.0 from JSON is fine; 0.9 must not silently become cell 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Coordinates must be integers, got {value!r}")
    return value


def point_coords(point: Point) -> Coord:
    """Return the ``(x, y)`` pair for a tile or coordinate argument."""

    # Lists show up when positions come straight from JSON payloads
    if isinstance(point, (tuple, list)):
        if len(point) != 2:
            raise ValueError(f"Expected an (x, y) pair, got {point!r}")
        return _coordinate(point[0]), _coordinate(point[1])
    return point.x, point.y


@dataclass(eq=False)
class GridTile:
    """Reference tile implementation.

    Tiles compare by identity, like the handles a game engine would pass in.
    ``weight`` is the cost multiplier for *entering* the tile and must be at
    least 1.
    """

    x: int
    y: int
    is_walkable: bool = True
    weight: float = 1.0
    kind: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.weight < 1:
            raise ValueError(
                f"Tile ({self.x}, {self.y}) has weight {self.weight}; weights must be >= 1"
            )

    @property
    def coords(self) -> Coord:
        return self.x, self.y


@dataclass
class TileGrid:
    """Fixed-size rectangular arrangement of optional tiles.

    The grid is owned and mutated by the caller. Path maps snapshot it at
    build time and are never notified of later edits.
    """

    rows: List[List[Optional[Tile]]]
    width: int = field(init=False)
    height: int = field(init=False)

    def __post_init__(self) -> None:
        self.rows = [list(row) for row in self.rows]
        self.height = len(self.rows)
        if self.height == 0:
            raise ValueError("A grid needs at least one row")
        self.width = len(self.rows[0])
        if self.width == 0:
            raise ValueError("A grid needs at least one column")

        for y, row in enumerate(self.rows):
            if len(row) != self.width:
                raise ValueError(
                    f"Row {y} has {len(row)} cells, expected {self.width}"
                )
            for x, tile in enumerate(row):
                if tile is not None and (tile.x, tile.y) != (x, y):
                    raise ValueError(
                        f"Tile reports ({tile.x}, {tile.y}) but is stored at ({x}, {y})"
                    )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[Tile]]]) -> "TileGrid":
        return cls(rows=[list(row) for row in rows])

    @classmethod
    def filled(
        cls,
        width: int,
        height: int,
        *,
        walkable: bool = True,
        weight: float = 1.0,
    ) -> "TileGrid":
        """Create a grid where every cell holds a fresh ``GridTile``."""

        return cls(
            rows=[
                [GridTile(x=x, y=y, is_walkable=walkable, weight=weight) for x in range(width)]
                for y in range(height)
            ]
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        """Return the tile at ``(x, y)``, or None when empty or out of bounds."""

        if not self.in_bounds(x, y):
            return None
        return self.rows[y][x]

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        """Return the cell content at ``(x, y)``; raises ``OutOfBoundsError``."""

        self.require_in_bounds(x, y)
        return self.rows[y][x]

    def require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x=x, y=y, width=self.width, height=self.height)

    def resolve(self, point: Point) -> Coord:
        """Convert a tile/coordinate argument to in-bounds ``(x, y)``."""

        x, y = point_coords(point)
        self.require_in_bounds(x, y)
        return x, y

    def is_walkable(self, x: int, y: int) -> bool:
        tile = self.get_tile(x, y)
        # Empty cells and off-grid positions block movement and sight
        return tile is not None and tile.is_walkable

    def set_tile(self, x: int, y: int, tile: Optional[Tile]) -> None:
        """Place (or clear, with None) the tile stored at ``(x, y)``."""

        self.require_in_bounds(x, y)
        if tile is not None and (tile.x, tile.y) != (x, y):
            raise ValueError(
                f"Tile reports ({tile.x}, {tile.y}) but is being stored at ({x}, {y})"
            )
        self.rows[y][x] = tile

    def iter_tiles(self) -> Iterator[Tile]:
        """Yield present tiles in row-major order."""

        for row in self.rows:
            for tile in row:
                if tile is not None:
                    yield tile

    def walkable_tiles(self) -> List[Tile]:
        return [tile for tile in self.iter_tiles() if tile.is_walkable]

    def describe(self) -> Dict[str, int]:
        """Return size and occupancy counts, handy for log lines."""

        present = 0
        walkable = 0
        for tile in self.iter_tiles():
            present += 1
            if tile.is_walkable:
                walkable += 1
        return {
            "width": self.width,
            "height": self.height,
            "tiles": present,
            "walkable": walkable,
        }
