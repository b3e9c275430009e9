"""Shape and line queries over a tile grid.

Every function here is pure: it reads the grid as it is right now and
returns a fresh list of tiles without retaining any state. Results only
contain tiles that exist (empty cells are never returned) and follow a
deterministic scan order so callers and tests can rely on it.

Positions (``center``, ``start``, ``stop``) may be tiles or ``(x, y)``
pairs and must lie inside the grid, otherwise ``OutOfBoundsError`` is raised.
"""

from __future__ import annotations

import math
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .grid import Coord, Point, Tile, TileGrid

Size = Union[int, Sequence[int]]


# =============================
# Argument helpers
# =============================

def _normalize_size(size_x: Size, size_y: Optional[int]) -> Tuple[int, int]:
    """Accept ``(size_x, size_y)``, a single square size or a size pair."""

    if isinstance(size_x, (tuple, list)):
        if size_y is not None:
            raise ValueError("Pass either a (size_x, size_y) pair or two sizes, not both")
        if len(size_x) != 2:
            raise ValueError(f"Expected a (size_x, size_y) pair, got {size_x!r}")
        size_x, size_y = size_x
    if size_y is None:
        size_y = size_x
    size_x, size_y = int(size_x), int(size_y)
    if size_x < 0 or size_y < 0:
        raise ValueError(f"Rectangle half-sizes must be >= 0, got ({size_x}, {size_y})")
    return size_x, size_y


def _normalize_radius(radius: Union[int, float]) -> int:
    # Integral floats (e.g. from JSON) are fine; fractional radii are not
    if isinstance(radius, float) and radius.is_integer():
        radius = int(radius)
    if isinstance(radius, bool) or not isinstance(radius, int):
        raise ValueError(f"Radius must be a non-negative integer, got {radius!r}")
    if radius < 0:
        raise ValueError(f"Radius must be a non-negative integer, got {radius}")
    return radius


def _keep(tile: Optional[Tile], walkable_only: bool) -> bool:
    if tile is None:
        return False
    return tile.is_walkable or not walkable_only


# =============================
# Rectangles
# =============================

def _rectangle(grid: TileGrid, center: Point, size_x: Size, size_y: Optional[int], walkable_only: bool) -> List[Tile]:
    cx, cy = grid.resolve(center)
    sx, sy = _normalize_size(size_x, size_y)

    top = max(cy - sy, 0)
    bottom = min(cy + sy, grid.height - 1)
    left = max(cx - sx, 0)
    right = min(cx + sx, grid.width - 1)

    tiles: List[Tile] = []
    for y in range(top, bottom + 1):
        for x in range(left, right + 1):
            tile = grid.rows[y][x]
            if _keep(tile, walkable_only):
                tiles.append(tile)
    return tiles


def get_tiles_in_rectangle(grid: TileGrid, center: Point, size_x: Size, size_y: Optional[int] = None) -> List[Tile]:
    """Return tiles within ``size_x`` columns and ``size_y`` rows of ``center``.

    The rectangle spans ``[cx - size_x, cx + size_x]`` by
    ``[cy - size_y, cy + size_y]`` and is clipped to the grid. ``size_y``
    defaults to ``size_x``; a ``(size_x, size_y)`` pair is also accepted.
    """

    return _rectangle(grid, center, size_x, size_y, walkable_only=False)


def get_walkable_tiles_in_rectangle(grid: TileGrid, center: Point, size_x: Size, size_y: Optional[int] = None) -> List[Tile]:
    """Like ``get_tiles_in_rectangle`` but only walkable tiles."""

    return _rectangle(grid, center, size_x, size_y, walkable_only=True)


def _rectangle_outline(grid: TileGrid, center: Point, size_x: Size, size_y: Optional[int], walkable_only: bool) -> List[Tile]:
    cx, cy = grid.resolve(center)
    sx, sy = _normalize_size(size_x, size_y)

    # Border membership is tested against the unclamped rectangle, so a
    # rectangle hanging off the grid yields a partial ring, never a ring
    # redrawn along the grid edge.
    top, bottom = cy - sy, cy + sy
    left, right = cx - sx, cx + sx

    tiles: List[Tile] = []
    for y in range(max(top, 0), min(bottom, grid.height - 1) + 1):
        for x in range(max(left, 0), min(right, grid.width - 1) + 1):
            if y not in (top, bottom) and x not in (left, right):
                continue
            tile = grid.rows[y][x]
            if _keep(tile, walkable_only):
                tiles.append(tile)
    return tiles


def get_tiles_on_rectangle_outline(grid: TileGrid, center: Point, size_x: Size, size_y: Optional[int] = None) -> List[Tile]:
    """Return the border tiles of the rectangle around ``center``.

    Only cells on the top/bottom row or left/right column of the full
    (unclamped) rectangle are returned, restricted to those inside the grid.
    """

    return _rectangle_outline(grid, center, size_x, size_y, walkable_only=False)


def get_walkable_tiles_on_rectangle_outline(grid: TileGrid, center: Point, size_x: Size, size_y: Optional[int] = None) -> List[Tile]:
    return _rectangle_outline(grid, center, size_x, size_y, walkable_only=True)


# =============================
# Circles
# =============================

def get_tiles_in_radius(grid: TileGrid, center: Point, radius: int) -> List[Tile]:
    """Return tiles inside the disc of ``radius`` around ``center``.

    Rasterized row by row: for each row at vertical offset ``dy`` the half
    span is ``sqrt(radius**2 - dy**2)`` and the row keeps columns in
    ``[ceil(cx - span), floor(cx + span)]``, clipped to the grid.
    """

    cx, cy = grid.resolve(center)
    radius = _normalize_radius(radius)

    tiles: List[Tile] = []
    for y in range(max(cy - radius, 0), min(cy + radius, grid.height - 1) + 1):
        dy = y - cy
        span = math.sqrt(radius * radius - dy * dy)
        left = max(math.ceil(cx - span), 0)
        right = min(math.floor(cx + span), grid.width - 1)
        for x in range(left, right + 1):
            tile = grid.rows[y][x]
            if tile is not None:
                tiles.append(tile)
    return tiles


def get_walkable_tiles_in_radius(grid: TileGrid, center: Point, radius: int) -> List[Tile]:
    """Return walkable tiles whose squared distance to ``center`` is <= radius**2.

    This uses a squared-distance test instead of the row spans of
    ``get_tiles_in_radius``. With integer radii and integer coordinates both
    tests select exactly the same cells.
    """

    cx, cy = grid.resolve(center)
    radius = _normalize_radius(radius)
    limit = radius * radius

    tiles: List[Tile] = []
    for y in range(max(cy - radius, 0), min(cy + radius, grid.height - 1) + 1):
        for x in range(max(cx - radius, 0), min(cx + radius, grid.width - 1) + 1):
            dx, dy = x - cx, y - cy
            if dx * dx + dy * dy > limit:
                continue
            tile = grid.rows[y][x]
            if _keep(tile, walkable_only=True):
                tiles.append(tile)
    return tiles


def _radius_outline(grid: TileGrid, center: Point, radius: int, walkable_only: bool) -> List[Tile]:
    cx, cy = grid.resolve(center)
    radius = _normalize_radius(radius)

    seen: set[Coord] = set()
    tiles: List[Tile] = []
    # Walk one octant and mirror it eight ways
    for offset in range(math.floor(radius * math.sqrt(0.5)) + 1):
        d = math.isqrt(radius * radius - offset * offset)
        candidates = (
            (cx - d, cy + offset),
            (cx + d, cy + offset),
            (cx - d, cy - offset),
            (cx + d, cy - offset),
            (cx + offset, cy - d),
            (cx + offset, cy + d),
            (cx - offset, cy - d),
            (cx - offset, cy + d),
        )
        for coord in candidates:
            if coord in seen:
                continue
            seen.add(coord)
            tile = grid.get_tile(*coord)
            if _keep(tile, walkable_only):
                tiles.append(tile)
    return tiles


def get_tiles_on_radius_outline(grid: TileGrid, center: Point, radius: int) -> List[Tile]:
    """Return the tiles on the circle of ``radius`` around ``center``.

    For each offset ``r'`` from 0 to ``floor(radius * sqrt(0.5))`` the
    distance ``d = floor(sqrt(radius**2 - r'**2))`` gives eight symmetric
    points. Duplicates and off-grid points are dropped.
    """

    return _radius_outline(grid, center, radius, walkable_only=False)


def get_walkable_tiles_on_radius_outline(grid: TileGrid, center: Point, radius: int) -> List[Tile]:
    return _radius_outline(grid, center, radius, walkable_only=True)


# =============================
# Lines
# =============================

def _step_ratio(step: int, length: int) -> float:
    if length == 0:
        return math.inf
    return (0.5 + step) / length


def _walk_line(start: Coord, stop: Coord) -> Iterator[Coord]:
    """Yield every cell after ``start`` on the supercover line to ``stop``.

    Each iteration moves exactly one cell horizontally or vertically, picking
    the axis whose next cell boundary the ideal segment crosses first. Ties
    step vertically.
    """

    x, y = start
    dx, dy = stop[0] - x, stop[1] - y
    nx, ny = abs(dx), abs(dy)
    sign_x = 1 if dx > 0 else -1
    sign_y = 1 if dy > 0 else -1

    ix = iy = 0
    while ix < nx or iy < ny:
        if _step_ratio(ix, nx) < _step_ratio(iy, ny):
            x += sign_x
            ix += 1
        else:
            y += sign_y
            iy += 1
        yield x, y


def _too_far(coord: Coord, start: Coord, max_distance: float) -> bool:
    if max_distance <= 0:
        return False
    return math.hypot(coord[0] - start[0], coord[1] - start[1]) > max_distance


def _trace(grid: TileGrid, start: Point, stop: Point, max_distance: float, walkable_only: bool) -> List[Tile]:
    origin = grid.resolve(start)
    end = grid.resolve(stop)

    first = grid.rows[origin[1]][origin[0]]
    tiles: List[Tile] = [first] if first is not None else []
    for coord in _walk_line(origin, end):
        if _too_far(coord, origin, max_distance):
            break
        tile = grid.rows[coord[1]][coord[0]]
        if _keep(tile, walkable_only):
            tiles.append(tile)
    return tiles


def get_tiles_on_line(grid: TileGrid, start: Point, stop: Point, max_distance: float = 0) -> List[Tile]:
    """Return the tiles on the supercover line from ``start`` to ``stop``.

    ``start`` is always first. Tracing stops as soon as a cell lies further
    than ``max_distance`` (Euclidean, from ``start``) away; 0 means no limit.
    """

    return _trace(grid, start, stop, max_distance, walkable_only=False)


def get_walkable_tiles_on_line(grid: TileGrid, start: Point, stop: Point, max_distance: float = 0) -> List[Tile]:
    """Like ``get_tiles_on_line`` but skipping blocked cells.

    Blocked or empty cells are left out while tracing carries on past them,
    unlike ``get_line_of_sight`` which stops there.
    """

    return _trace(grid, start, stop, max_distance, walkable_only=True)


def get_line_of_sight(grid: TileGrid, start: Point, stop: Point, max_distance: float = 0) -> List[Tile]:
    """Return the visible prefix of the line from ``start`` to ``stop``.

    The sequence ends just before the first empty or non-walkable cell, or
    before the first cell beyond ``max_distance``. It is the full line,
    ``start`` and ``stop`` included, when nothing obstructs it.
    """

    origin = grid.resolve(start)
    end = grid.resolve(stop)

    first = grid.rows[origin[1]][origin[0]]
    tiles: List[Tile] = [first] if first is not None else []
    for coord in _walk_line(origin, end):
        tile = grid.rows[coord[1]][coord[0]]
        if tile is None or not tile.is_walkable or _too_far(coord, origin, max_distance):
            break
        tiles.append(tile)
    return tiles


def is_line_of_sight_clear(grid: TileGrid, start: Point, stop: Point, max_distance: float = 0) -> bool:
    """Return True when no empty or non-walkable cell blocks the line.

    The start cell itself is never tested. The line is only clear when
    ``stop`` is reached: a walk that runs past ``max_distance`` first is
    not.
    """

    origin = grid.resolve(start)
    end = grid.resolve(stop)

    for coord in _walk_line(origin, end):
        if not grid.is_walkable(*coord):
            return False
        if _too_far(coord, origin, max_distance):
            return False
    return True
