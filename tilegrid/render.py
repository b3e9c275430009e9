"""ASCII views of grids, shapes and path maps for debugging and logs."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .grid import Point, Tile, TileGrid
from .pathmap import PathMap

_DEFAULT_SYMBOLS: Dict[str, str] = {
    "walkable": ".",
    "blocked": "#",
    "empty": " ",
    "highlight": "*",
    "target": "T",
}

_ARROWS: Dict[tuple, str] = {
    (0, 0): "T",
    (1, 0): "→",
    (-1, 0): "←",
    # y grows downward, so +1 points down the page
    (0, 1): "↓",
    (0, -1): "↑",
    (1, 1): "↘",
    (-1, 1): "↙",
    (1, -1): "↗",
    (-1, -1): "↖",
}


def render_grid(
    grid: TileGrid,
    *,
    highlight: Optional[Iterable[Tile]] = None,
    target: Optional[Point] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Render one character per cell, top row first.

    Tiles in ``highlight`` (e.g. the result of a geometry query) are drawn
    with the highlight symbol. ``target`` is drawn with the target symbol
    and wins over a highlight on the same cell.
    """

    mapping = {**_DEFAULT_SYMBOLS}
    if symbols:
        mapping.update(symbols)
    marked = {(tile.x, tile.y) for tile in highlight or ()}
    goal = grid.resolve(target) if target is not None else None

    lines: List[str] = []
    for y, row in enumerate(grid.rows):
        chars: List[str] = []
        for x, tile in enumerate(row):
            if (x, y) == goal:
                chars.append(mapping["target"])
            elif (x, y) in marked:
                chars.append(mapping["highlight"])
            elif tile is None:
                chars.append(mapping["empty"])
            elif tile.is_walkable:
                chars.append(mapping["walkable"])
            else:
                chars.append(mapping["blocked"])
        lines.append("".join(chars))
    return "\n".join(lines)


def render_costs(path_map: PathMap, grid: TileGrid, *, cell_width: int = 4) -> str:
    """Render each cell's cost to the target.

    Unreachable, blocked and empty cells show ``--``; the target shows ``T``.
    """

    target = (path_map.target.x, path_map.target.y)
    lines: List[str] = []
    for y in range(grid.height):
        cells: List[str] = []
        for x in range(grid.width):
            if (x, y) == target:
                text = "T"
            elif path_map.is_reachable((x, y)):
                text = f"{path_map.get_cost((x, y)):g}"
            else:
                text = "--"
            cells.append(text.rjust(cell_width))
        lines.append("".join(cells))
    return "\n".join(lines)


def render_directions(path_map: PathMap, grid: TileGrid) -> str:
    """Render an arrow per reachable cell pointing at its next hop."""

    lines: List[str] = []
    for y in range(grid.height):
        chars: List[str] = []
        for x in range(grid.width):
            if path_map.is_reachable((x, y)):
                chars.append(_ARROWS[path_map.get_next_direction((x, y))])
            elif grid.get_tile(x, y) is None:
                chars.append(" ")
            elif grid.is_walkable(x, y):
                # Walkable but cut off from the target
                chars.append("?")
            else:
                chars.append("#")
        lines.append("".join(chars))
    return "\n".join(lines)
