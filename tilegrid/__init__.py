"""
Tilegrid - shape queries and shortest-path maps for tile-grid games.

Answers two recurring questions:
- Which tiles lie within a rectangle, circle or line from a point?
- What is the cheapest route from any tile to a fixed target, and which
  tiles can be reached within a movement budget?

In-process library. The host application owns the grid and its tiles;
tilegrid only reads them.
"""

__version__ = "0.1.0"

from .config import Config
from .errors import (
    GridError,
    OutOfBoundsError,
    InvalidTargetError,
    InvalidTileError,
    UnreachableTileError,
)
from .grid import Tile, GridTile, TileGrid, Point, point_coords
from .geometry import (
    get_tiles_in_rectangle,
    get_walkable_tiles_in_rectangle,
    get_tiles_on_rectangle_outline,
    get_walkable_tiles_on_rectangle_outline,
    get_tiles_in_radius,
    get_walkable_tiles_in_radius,
    get_tiles_on_radius_outline,
    get_walkable_tiles_on_radius_outline,
    get_tiles_on_line,
    get_walkable_tiles_on_line,
    get_line_of_sight,
    is_line_of_sight_clear,
)
from .pathmap import PathMap, build_path_map
from .schemas import GridTileState, TileGridState, PathNodeState, PathMapState
from .loader import GridLoader, grid_from_layout, load_grid
from .render import render_grid, render_costs, render_directions

__all__ = [
    "Config",
    # Errors
    "GridError",
    "OutOfBoundsError",
    "InvalidTargetError",
    "InvalidTileError",
    "UnreachableTileError",
    # Grid
    "Tile",
    "GridTile",
    "TileGrid",
    "Point",
    "point_coords",
    # Geometry queries
    "get_tiles_in_rectangle",
    "get_walkable_tiles_in_rectangle",
    "get_tiles_on_rectangle_outline",
    "get_walkable_tiles_on_rectangle_outline",
    "get_tiles_in_radius",
    "get_walkable_tiles_in_radius",
    "get_tiles_on_radius_outline",
    "get_walkable_tiles_on_radius_outline",
    "get_tiles_on_line",
    "get_walkable_tiles_on_line",
    "get_line_of_sight",
    "is_line_of_sight_clear",
    # Path maps
    "PathMap",
    "build_path_map",
    # Schemas
    "GridTileState",
    "TileGridState",
    "PathNodeState",
    "PathMapState",
    # Loading and rendering
    "GridLoader",
    "grid_from_layout",
    "load_grid",
    "render_grid",
    "render_costs",
    "render_directions",
]
