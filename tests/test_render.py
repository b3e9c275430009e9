"""Tests for the ASCII renderers."""

from tilegrid import (
    build_path_map,
    get_tiles_in_radius,
    grid_from_layout,
    render_costs,
    render_directions,
    render_grid,
)


def test_render_grid_symbols():
    grid = grid_from_layout([
        ".#.",
        ". 2",
    ])
    assert render_grid(grid) == ".#.\n. ."


def test_render_grid_highlights_query_results():
    grid = grid_from_layout(["....."] * 3)
    circle = get_tiles_in_radius(grid, (2, 1), 1)
    assert render_grid(grid, highlight=circle) == "..*..\n.***.\n..*.."
    assert render_grid(grid, highlight=circle, symbols={"highlight": "o"}).count("o") == 5


def test_render_costs():
    grid = grid_from_layout(["...#"])
    path_map = build_path_map(grid, (0, 0), allow_diagonals=False)
    assert render_costs(path_map, grid) == "   T   1   2  --"


def test_render_directions():
    grid = grid_from_layout([
        "..#.",
        "...#",
    ])
    path_map = build_path_map(grid, (0, 0), allow_diagonals=False)
    # (1, 1) ties between its two neighbors; the one nearer the top row wins
    assert render_directions(path_map, grid) == "T←#?\n↑↑←#"


def test_render_grid_marks_target():
    grid = grid_from_layout(["....", "...."])
    path = build_path_map(grid, (3, 0)).get_path_to_target((0, 0))
    assert render_grid(grid, highlight=path, target=(3, 0)) == "***T\n...."
    assert render_grid(grid, target=grid.tile_at(0, 0), symbols={"target": "@"}) == "@...\n...."
