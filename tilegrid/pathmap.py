"""Single-target shortest-path maps.

``build_path_map`` runs a reverse Dijkstra search rooted at one target tile
and returns a ``PathMap``: a shortest-path tree answering "where do I step
next?", "how much does it cost from here?" and "what can be reached within a
budget?" for every tile of the grid.

Data flow:
1. Snapshot every grid cell into a ``Node`` (walkability + weight frozen)
2. Relax neighbors from the target outward with a binary heap
3. Wrap the finished nodes in an immutable ``PathMap``

The grid may change afterwards; the map does not follow. Build a new one
whenever walkability or weights change.
"""

from __future__ import annotations

import heapq
from typing import List, Optional, Sequence, Tuple

from .config import Config
from .errors import InvalidTargetError, InvalidTileError, UnreachableTileError
from .grid import Point, Tile, TileGrid, point_coords
from .logging_utils import log_deterministic, log_success, verbose_enabled
from .schemas import PathMapState, PathNodeState

Direction = Tuple[int, int]


class Node:
    """Per-cell search state.

    ``is_walkable`` and ``weight`` are copied from the tile when the node is
    created. The target is flagged with ``is_target`` and has no
    ``next_node``, which keeps the next-hop chain acyclic.
    """

    __slots__ = (
        "tile",
        "x",
        "y",
        "is_walkable",
        "weight",
        "next_node",
        "direction",
        "cost",
        "is_target",
    )

    def __init__(self, x: int, y: int, tile: Optional[Tile]) -> None:
        self.tile = tile
        self.x = x
        self.y = y
        self.is_walkable = tile is not None and bool(tile.is_walkable)
        self.weight = float(tile.weight) if tile is not None else 1.0
        if self.weight < 1:
            raise ValueError(f"Tile at ({x}, {y}) has weight {self.weight:g}, expected >= 1")
        self.next_node: Optional[Node] = None
        self.direction: Direction = (0, 0)
        # None until the search reaches this node
        self.cost: Optional[float] = None
        self.is_target = False

    @property
    def reached(self) -> bool:
        return self.cost is not None

    def __repr__(self) -> str:
        return f"Node(x={self.x}, y={self.y}, cost={self.cost}, is_target={self.is_target})"


def _sign(value: int) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _neighbors(
    nodes: Sequence[Node],
    width: int,
    height: int,
    x: int,
    y: int,
    allow_diagonals: bool,
) -> List[Tuple[Node, bool]]:
    """Return walkable neighbors of ``(x, y)`` paired with an is-diagonal flag.

    A diagonal neighbor only counts when both orthogonal cells flanking the
    diagonal step are walkable, so paths never cut a blocked corner.
    """

    def walkable_node(nx: int, ny: int) -> Optional[Node]:
        if 0 <= nx < width and 0 <= ny < height:
            node = nodes[ny * width + nx]
            if node.is_walkable:
                return node
        return None

    left = walkable_node(x - 1, y)
    below = walkable_node(x, y - 1)
    above = walkable_node(x, y + 1)
    right = walkable_node(x + 1, y)

    found = [(node, False) for node in (left, below, above, right) if node is not None]
    if not allow_diagonals:
        return found

    # (dx, dy, first flank, second flank)
    diagonals = (
        (-1, -1, left, below),
        (-1, 1, left, above),
        (1, 1, right, above),
        (1, -1, right, below),
    )
    for dx, dy, flank_a, flank_b in diagonals:
        if flank_a is None or flank_b is None:
            continue
        node = walkable_node(x + dx, y + dy)
        if node is not None:
            found.append((node, True))
    return found


def build_path_map(
    grid: TileGrid,
    target: Point,
    allow_diagonals: Optional[bool] = None,
    diagonal_weight_ratio: Optional[float] = None,
) -> "PathMap":
    """Compute the shortest-path tree of ``grid`` rooted at ``target``.

    Entering a tile costs its weight, multiplied by ``diagonal_weight_ratio``
    when the step is diagonal. Parameters left as None fall back to
    ``Config.DEFAULT_ALLOW_DIAGONALS`` and
    ``Config.DEFAULT_DIAGONAL_WEIGHT_RATIO``.

    The heap is ordered by ``(cost, y, x)`` and only strictly cheaper
    candidates replace a recorded cost, so equal-cost ties always resolve
    the same way: the predecessor expanded first (lowest cost, then
    smallest ``(y, x)``) wins.

    Raises:
        OutOfBoundsError: ``target`` lies outside the grid
        InvalidTargetError: the target cell is empty, not walkable, or holds
            a different tile than the one passed in
        ValueError: ``diagonal_weight_ratio`` is below 1
    """

    if allow_diagonals is None:
        allow_diagonals = Config.DEFAULT_ALLOW_DIAGONALS
    if diagonal_weight_ratio is None:
        diagonal_weight_ratio = Config.DEFAULT_DIAGONAL_WEIGHT_RATIO
    diagonal_weight_ratio = float(diagonal_weight_ratio)
    if diagonal_weight_ratio < 1:
        raise ValueError(
            f"diagonal_weight_ratio must be >= 1, got {diagonal_weight_ratio}"
        )

    tx, ty = grid.resolve(target)
    target_tile = grid.rows[ty][tx]
    if target_tile is None:
        raise InvalidTargetError(x=tx, y=ty, reason="target cell is empty")
    if not isinstance(target, (tuple, list)) and target is not target_tile:
        raise InvalidTargetError(x=tx, y=ty, reason="tile is not part of this grid")
    if not target_tile.is_walkable:
        raise InvalidTargetError(x=tx, y=ty)

    width, height = grid.width, grid.height
    verbose = verbose_enabled()
    if verbose:
        log_deterministic(
            f"[PathMap] Building path map toward ({tx}, {ty}) on {width}x{height} grid "
            f"(diagonals={allow_diagonals}, ratio={diagonal_weight_ratio})"
        )

    nodes = [Node(x, y, grid.rows[y][x]) for y in range(height) for x in range(width)]
    root = nodes[ty * width + tx]
    root.is_target = True
    root.cost = 0.0

    frontier: List[Tuple[float, int, int]] = [(0.0, ty, tx)]
    while frontier:
        cost, y, x = heapq.heappop(frontier)
        current = nodes[y * width + x]
        # Stale entry: the node was improved after this one was queued
        if cost > current.cost:
            continue
        for neighbor, diagonal in _neighbors(nodes, width, height, x, y, allow_diagonals):
            step = neighbor.weight * (diagonal_weight_ratio if diagonal else 1.0)
            candidate = current.cost + step
            if neighbor.cost is None or candidate < neighbor.cost:
                neighbor.cost = candidate
                neighbor.next_node = current
                neighbor.direction = (_sign(current.x - neighbor.x), _sign(current.y - neighbor.y))
                heapq.heappush(frontier, (candidate, neighbor.y, neighbor.x))

    path_map = PathMap(
        nodes=nodes,
        width=width,
        height=height,
        target=target_tile,
        allow_diagonals=allow_diagonals,
        diagonal_weight_ratio=diagonal_weight_ratio,
    )
    if verbose:
        log_success(f"[PathMap] Reached {path_map.reachable_count} tiles from ({tx}, {ty})")
    return path_map


class PathMap:
    """Immutable shortest-path tree toward a single target.

    Every tile argument must be inside the map, be the tile the map was built
    with (when a tile object is given) and have been walkable at build time;
    otherwise ``InvalidTileError`` is raised. Walkable tiles the search never
    reached raise ``UnreachableTileError`` from the path queries.

    Read-only once built, so one instance can be shared between callers.
    """

    def __init__(
        self,
        *,
        nodes: Sequence[Node],
        width: int,
        height: int,
        target: Tile,
        allow_diagonals: bool,
        diagonal_weight_ratio: float,
    ) -> None:
        self._nodes: Tuple[Node, ...] = tuple(nodes)
        self._width = width
        self._height = height
        self._target = target
        self._allow_diagonals = allow_diagonals
        self._diagonal_weight_ratio = diagonal_weight_ratio

    @property
    def target(self) -> Tile:
        return self._target

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def allow_diagonals(self) -> bool:
        return self._allow_diagonals

    @property
    def diagonal_weight_ratio(self) -> float:
        return self._diagonal_weight_ratio

    @property
    def reachable_count(self) -> int:
        """Number of tiles with a path to the target, the target included."""

        return sum(1 for node in self._nodes if node.reached)

    # -----------------------------
    # Lookup
    # -----------------------------

    def _locate(self, tile: Point) -> Node:
        x, y = point_coords(tile)
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise InvalidTileError(x=x, y=y, reason="tile is outside the map")
        node = self._nodes[y * self._width + x]
        if node.tile is None:
            raise InvalidTileError(x=x, y=y, reason="cell is empty")
        if not isinstance(tile, (tuple, list)) and tile is not node.tile:
            raise InvalidTileError(x=x, y=y, reason="tile is not part of this map")
        if not node.is_walkable:
            raise InvalidTileError(x=x, y=y, reason="tile is not walkable")
        return node

    def _reached(self, tile: Point) -> Node:
        node = self._locate(tile)
        if not node.reached:
            raise UnreachableTileError(x=node.x, y=node.y)
        return node

    def is_reachable(self, tile: Point) -> bool:
        """Return True when ``tile`` has a path to the target.

        Never raises: invalid or blocked tiles simply are not reachable.
        """

        try:
            self._reached(tile)
        except InvalidTileError:
            return False
        return True

    def __contains__(self, tile: object) -> bool:
        if not isinstance(tile, (tuple, list, Tile)):
            return False
        return self.is_reachable(tile)

    # -----------------------------
    # Queries
    # -----------------------------

    def get_next_tile(self, tile: Point) -> Tile:
        """Return the neighbor to step onto from ``tile``; the target maps to itself."""

        node = self._reached(tile)
        if node.is_target:
            return node.tile
        return node.next_node.tile

    def get_next_direction(self, tile: Point) -> Direction:
        """Return the ``(dx, dy)`` sign vector toward the next tile.

        Each component is -1, 0 or 1. The target returns ``(0, 0)``.
        """

        return self._reached(tile).direction

    def get_cost(self, tile: Point) -> float:
        """Return the cumulative weighted cost from ``tile`` to the target."""

        return self._reached(tile).cost

    def get_accessible_tiles(self, max_cost: float = 0) -> List[Tile]:
        """Return tiles that can reach the target, excluding the target itself.

        With ``max_cost > 0`` only tiles whose cost is at most ``max_cost``
        are kept. Tiles come in row-major order.
        """

        tiles: List[Tile] = []
        for node in self._nodes:
            if node.cost is None or node.cost <= 0:
                continue
            if max_cost > 0 and node.cost > max_cost:
                continue
            tiles.append(node.tile)
        return tiles

    def get_path_to_target(self, tile: Point) -> List[Tile]:
        """Return the tiles from ``tile`` to the target, both included."""

        node = self._reached(tile)
        path = [node.tile]
        while not node.is_target:
            node = node.next_node
            path.append(node.tile)
        return path

    def get_path_from_target(self, tile: Point) -> List[Tile]:
        """Return the tiles from the target to ``tile``, both included."""

        path = self.get_path_to_target(tile)
        path.reverse()
        return path

    # -----------------------------
    # Export
    # -----------------------------

    def to_state(self) -> PathMapState:
        """Export reached nodes as a serializable ``PathMapState``."""

        nodes: List[PathNodeState] = []
        for node in self._nodes:
            if not node.reached:
                continue
            next_coord = None
            if node.next_node is not None:
                next_coord = (node.next_node.x, node.next_node.y)
            nodes.append(
                PathNodeState(
                    x=node.x,
                    y=node.y,
                    cost=node.cost,
                    next=next_coord,
                    direction=node.direction,
                    is_target=node.is_target,
                )
            )
        return PathMapState(
            width=self._width,
            height=self._height,
            target=(self._target.x, self._target.y),
            allow_diagonals=self._allow_diagonals,
            diagonal_weight_ratio=self._diagonal_weight_ratio,
            nodes=nodes,
        )

    def __repr__(self) -> str:
        return (
            f"PathMap(target=({self._target.x}, {self._target.y}), "
            f"size={self._width}x{self._height}, reachable={self.reachable_count})"
        )
