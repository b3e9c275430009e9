"""
Grid loading from JSON grid files and ASCII layouts.

This module provides GridLoader for turning declarative grid files into
TileGrid objects, plus ``grid_from_layout`` for building grids straight from
a list of strings (handy in tests and example scripts).

Grid file structure:
```json
{
  "name": "Courtyard",
  "description": "Walled yard with a muddy patch",
  "layout": [
    "#######",
    "#..~..#",
    "#.....#",
    "#######"
  ],
  "legend": {"~": {"walkable": true, "weight": 3, "kind": "mud"}},
  "tiles": [{"x": 3, "y": 2, "weight": 2.0, "kind": "gravel"}]
}
```

- ``layout`` rows run top (y = 0) to bottom; characters map through the
  legend (merged over ``DEFAULT_LEGEND``). A ``null`` legend entry means an
  empty cell.
- ``tiles`` overrides individual cells. Without ``layout`` it describes a
  sparse grid and ``width``/``height`` are required.

Usage:
    loader = GridLoader()
    grid = loader.load("courtyard")
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import Config
from .grid import TileGrid
from .logging_utils import log_info, verbose_enabled
from .schemas import GridTileState, TileGridState

LegendEntry = Optional[Dict[str, Any]]

DEFAULT_LEGEND: Dict[str, LegendEntry] = {
    ".": {"walkable": True, "kind": "floor"},
    "#": {"walkable": False, "kind": "wall"},
    "~": {"walkable": True, "weight": 3.0, "kind": "mud"},
    " ": None,
}
# Digits 1-9 are walkable tiles weighing that many movement points
DEFAULT_LEGEND.update(
    {str(n): {"walkable": True, "weight": float(n), "kind": "terrain"} for n in range(1, 10)}
)


def _layout_tiles(layout: Sequence[str], legend: Dict[str, LegendEntry]) -> List[GridTileState]:
    tiles: List[GridTileState] = []
    for y, line in enumerate(layout):
        for x, symbol in enumerate(line):
            if symbol not in legend:
                raise ValueError(f"Unknown layout symbol {symbol!r} at ({x}, {y})")
            entry = legend[symbol]
            if entry is None:
                continue
            tiles.append(GridTileState(x=x, y=y, **entry))
    return tiles


def _layout_size(layout: Sequence[str]) -> tuple[int, int]:
    if not layout:
        raise ValueError("Layout must contain at least one row")
    width = len(layout[0])
    for y, line in enumerate(layout):
        if len(line) != width:
            raise ValueError(f"Layout row {y} has {len(line)} cells, expected {width}")
    return width, len(layout)


def grid_from_layout(
    layout: Sequence[str],
    legend: Optional[Dict[str, LegendEntry]] = None,
) -> TileGrid:
    """Build a TileGrid from ASCII rows.

    Args:
        layout: Rows of symbols, top row first
        legend: Extra or overriding symbol definitions merged over
                ``DEFAULT_LEGEND``

    Returns:
        TileGrid of ``GridTile`` objects

    Raises:
        ValueError: Rows have different lengths or a symbol is unknown
    """
    merged = {**DEFAULT_LEGEND, **(legend or {})}
    width, height = _layout_size(layout)
    state = TileGridState(width=width, height=height, tiles=_layout_tiles(layout, merged))
    return state.to_grid()


class GridLoader:
    """Load and validate grids from JSON files.

    Directory structure:
    - Default: Config.GRIDS_DIR ({PROJECT_ROOT}/examples/grids/)
    - Override via constructor: GridLoader(Path("/custom/grids"))
    - Grid files: {grid_name}.json (e.g., "courtyard.json")

    Validation:
    - Required fields: name, description
    - Either ``layout`` or ``width`` + ``height`` must be present
    - Raises ValueError if validation fails
    """

    def __init__(self, grids_dir: Optional[Path] = None):
        """Initialize grid loader.

        Args:
            grids_dir: Directory containing grid files.
                       Defaults to Config.GRIDS_DIR
        """
        self.grids_dir = grids_dir or Config.GRIDS_DIR

    def load(self, grid_name: str) -> TileGrid:
        """Load a grid by name from its JSON file.

        Raises:
            FileNotFoundError: If the grid file doesn't exist in grids_dir
            ValueError: If the grid JSON is missing fields or malformed
            json.JSONDecodeError: If the file contains invalid JSON
        """
        state = self.load_state(grid_name)
        grid = state.to_grid()
        if verbose_enabled():
            stats = grid.describe()
            log_info(
                f"[Loader] Loaded grid '{state.name}' "
                f"({stats['width']}x{stats['height']}, {stats['walkable']} walkable)"
            )
        return grid

    def load_state(self, grid_name: str) -> TileGridState:
        """Load a grid file as a serializable TileGridState."""
        grid_path = self.grids_dir / f"{grid_name}.json"

        if not grid_path.exists():
            raise FileNotFoundError(
                f"Grid '{grid_name}' not found at {grid_path}"
            )

        data = json.loads(grid_path.read_text())
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> TileGridState:
        """Convert raw grid JSON data into a TileGridState."""
        self._validate_grid(data)

        tiles: Dict[tuple, GridTileState] = {}
        if "layout" in data:
            legend = {**DEFAULT_LEGEND, **data.get("legend", {})}
            width, height = _layout_size(data["layout"])
            for tile in _layout_tiles(data["layout"], legend):
                tiles[(tile.x, tile.y)] = tile
        else:
            width = int(data["width"])
            height = int(data["height"])

        # Explicit tiles override layout cells
        for tile in self._parse_tiles(data.get("tiles", [])):
            tiles[(tile.x, tile.y)] = tile

        return TileGridState(
            name=data["name"],
            description=data["description"],
            width=width,
            height=height,
            tiles=list(tiles.values()),
            metadata=data.get("metadata", {}),
        )

    def _validate_grid(self, data: Dict[str, Any]) -> None:
        required = ["name", "description"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Grid missing required fields: {missing}")

        if "layout" not in data and ("width" not in data or "height" not in data):
            raise ValueError(
                "Grid must define either a 'layout' or both 'width' and 'height'"
            )

    def _parse_tiles(self, raw: Any) -> List[GridTileState]:
        """Parse tile overrides.

        Accepts a list of {"x": int, "y": int, ...} or {"coordinate": [x, y], ...}
        entries, or a dict keyed by "x,y" strings.
        """
        tiles: List[GridTileState] = []
        if isinstance(raw, dict):
            for key, value in raw.items():
                if not (isinstance(key, str) and "," in key):
                    raise ValueError(f"Tile key {key!r} must look like 'x,y'")
                x_str, y_str = key.split(",", 1)
                fields = value if isinstance(value, dict) else {}
                tiles.append(GridTileState(x=int(x_str), y=int(y_str), **fields))
        elif isinstance(raw, list):
            for item in raw:
                if not isinstance(item, dict):
                    raise ValueError(f"Tile entry must be an object, got {item!r}")
                fields = dict(item)
                if "coordinate" in fields:
                    fields["x"], fields["y"] = fields.pop("coordinate")
                tiles.append(GridTileState(**fields))
        return tiles

    def list_grids(self) -> List[str]:
        """List all available grid files (names without .json)."""
        if not self.grids_dir.exists():
            return []

        return sorted(
            f.stem for f in self.grids_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_grid_info(self, grid_name: str) -> Dict[str, Any]:
        """Get grid metadata without building tiles."""
        grid_path = self.grids_dir / f"{grid_name}.json"
        data = json.loads(grid_path.read_text())

        if "layout" in data:
            width, height = _layout_size(data["layout"])
        else:
            width, height = data.get("width", 0), data.get("height", 0)

        return {
            "name": data.get("name", grid_name),
            "description": data.get("description", "No description"),
            "width": width,
            "height": height,
        }


def load_grid(grid_name: str) -> TileGrid:
    """Convenience function to load a grid from Config.GRIDS_DIR."""
    loader = GridLoader()
    return loader.load(grid_name)
