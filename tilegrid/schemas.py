"""Pydantic schemas for tilegrid snapshots.

These models mirror ``GridTile``/``TileGrid`` and the finished ``PathMap``
so grids and path maps can be written to JSON, shipped to a renderer, or
compared in tests. The live objects stay plain Python; these are only the
serializable view.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .grid import GridTile, Tile, TileGrid


class GridTileState(BaseModel):
    """Serializable description of a single tile."""

    x: int = Field(..., ge=0, description="Column index")
    y: int = Field(..., ge=0, description="Row index")
    walkable: bool = True
    weight: float = Field(1.0, ge=1.0, description="Cost multiplier for entering the tile")
    kind: Optional[str] = Field(None, description="Free-form label (floor, wall, mud, ...)")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_tile(cls, tile: Tile) -> "GridTileState":
        return cls(
            x=tile.x,
            y=tile.y,
            walkable=bool(tile.is_walkable),
            weight=float(tile.weight),
            kind=getattr(tile, "kind", None),
            metadata=dict(getattr(tile, "metadata", None) or {}),
        )

    def to_tile(self) -> GridTile:
        return GridTile(
            x=self.x,
            y=self.y,
            is_walkable=self.walkable,
            weight=self.weight,
            kind=self.kind,
            metadata=dict(self.metadata),
        )


class TileGridState(BaseModel):
    """Sparse representation of a grid: cells not listed are empty."""

    name: Optional[str] = None
    description: Optional[str] = None
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    tiles: List[GridTileState] = Field(
        default_factory=list,
        description="Present tiles; any (x, y) not listed is an empty cell",
    )
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_grid(cls, grid: TileGrid, *, name: Optional[str] = None, description: Optional[str] = None) -> "TileGridState":
        return cls(
            name=name,
            description=description,
            width=grid.width,
            height=grid.height,
            tiles=[GridTileState.from_tile(tile) for tile in grid.iter_tiles()],
        )

    def to_grid(self) -> TileGrid:
        """Materialize a ``TileGrid`` of fresh ``GridTile`` objects.

        Raises:
            ValueError: a tile lies outside ``width``/``height`` or two
                tiles share a cell
        """

        rows: List[List[Optional[GridTile]]] = [[None] * self.width for _ in range(self.height)]
        for state in self.tiles:
            if state.x >= self.width or state.y >= self.height:
                raise ValueError(
                    f"Tile ({state.x}, {state.y}) lies outside the {self.width}x{self.height} grid"
                )
            if rows[state.y][state.x] is not None:
                raise ValueError(f"Duplicate tile at ({state.x}, {state.y})")
            rows[state.y][state.x] = state.to_tile()
        return TileGrid(rows=rows)


class PathNodeState(BaseModel):
    """One reached cell of a path map."""

    x: int
    y: int
    cost: float = Field(..., ge=0.0)
    next: Optional[Tuple[int, int]] = Field(
        None, description="Coordinates of the next hop; None for the target",
    )
    direction: Tuple[int, int] = (0, 0)
    is_target: bool = False


class PathMapState(BaseModel):
    """Serializable snapshot of a built path map (reached cells only)."""

    width: int
    height: int
    target: Tuple[int, int]
    allow_diagonals: bool
    diagonal_weight_ratio: float
    nodes: List[PathNodeState] = Field(default_factory=list)

    def cost_lookup(self) -> Dict[Tuple[int, int], float]:
        """Map each reached ``(x, y)`` to its cost."""

        return {(node.x, node.y): node.cost for node in self.nodes}
