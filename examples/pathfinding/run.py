"""
Path map walkthrough

Loads a grid file, builds a path map toward a target tile and prints the
cost field, the next-hop arrows, the tiles reachable within a movement
budget and a line of sight.

Run: python examples/pathfinding/run.py --grid courtyard --target 1 1 --budget 4
"""

import argparse
from pathlib import Path

from tilegrid import (
    Config,
    GridLoader,
    build_path_map,
    get_line_of_sight,
    get_tiles_in_radius,
    render_costs,
    render_directions,
    render_grid,
)
from tilegrid.logging_utils import Color, colored, log_error, log_info


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tilegrid path map walkthrough")
    parser.add_argument("--grid", default="courtyard", help="Grid file name (without .json)")
    parser.add_argument(
        "--grids-dir",
        type=Path,
        default=Path(__file__).resolve().parent.parent / "grids",
        help="Directory holding grid files",
    )
    parser.add_argument("--target", type=int, nargs=2, default=[1, 1], metavar=("X", "Y"))
    parser.add_argument("--start", type=int, nargs=2, default=[8, 6], metavar=("X", "Y"))
    parser.add_argument("--budget", type=float, default=4.0, help="Movement budget for the accessible set")
    parser.add_argument("--radius", type=int, default=2, help="Radius for the circle query")
    parser.add_argument("--no-diagonals", action="store_true", help="Restrict moves to 4 directions")
    parser.add_argument(
        "--diagonal-weight",
        type=float,
        default=Config.DEFAULT_DIAGONAL_WEIGHT_RATIO,
        help="Cost multiplier for diagonal steps",
    )
    return parser.parse_args()


def main(args: argparse.Namespace) -> None:
    loader = GridLoader(args.grids_dir)
    info = loader.get_grid_info(args.grid)
    grid = loader.load(args.grid)
    target = tuple(args.target)
    start = tuple(args.start)

    print(colored(f"{info['name']}: {info['description']}", Color.CYAN))
    print(render_grid(grid, target=target))

    path_map = build_path_map(
        grid,
        target,
        allow_diagonals=not args.no_diagonals,
        diagonal_weight_ratio=args.diagonal_weight,
    )

    print("\nCost to target:")
    print(render_costs(path_map, grid))
    print("\nNext step:")
    print(render_directions(path_map, grid))

    accessible = path_map.get_accessible_tiles(args.budget)
    log_info(f"{len(accessible)} tiles within a budget of {args.budget:g}")
    print(render_grid(grid, highlight=accessible, target=target))

    if path_map.is_reachable(start):
        path = path_map.get_path_to_target(start)
        log_info(f"Path from {start} costs {path_map.get_cost(start):g} over {len(path) - 1} steps")
        print(render_grid(grid, highlight=path))
    else:
        log_error(f"{start} cannot reach the target")

    circle = get_tiles_in_radius(grid, target, args.radius)
    log_info(f"{len(circle)} tiles within radius {args.radius} of {target}")
    print(render_grid(grid, highlight=circle))

    sight = get_line_of_sight(grid, target, start)
    log_info(f"Line of sight from {target} toward {start} covers {len(sight)} tiles")
    print(render_grid(grid, highlight=sight))


if __name__ == "__main__":
    main(parse_args())
