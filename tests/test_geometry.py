"""Tests for rectangle, circle and line queries."""

import pytest

from tilegrid import (
    GridTile,
    OutOfBoundsError,
    TileGrid,
    get_line_of_sight,
    get_tiles_in_radius,
    get_tiles_in_rectangle,
    get_tiles_on_line,
    get_tiles_on_radius_outline,
    get_tiles_on_rectangle_outline,
    get_walkable_tiles_in_radius,
    get_walkable_tiles_in_rectangle,
    get_walkable_tiles_on_line,
    get_walkable_tiles_on_radius_outline,
    get_walkable_tiles_on_rectangle_outline,
    grid_from_layout,
    is_line_of_sight_clear,
)


def coords(tiles):
    return [(tile.x, tile.y) for tile in tiles]


def grid_with_wall(width, height, wall):
    grid = TileGrid.filled(width, height)
    x, y = wall
    grid.set_tile(x, y, GridTile(x=x, y=y, is_walkable=False))
    return grid


# ---------------------------------------------------------------- rectangles


def test_rectangle_fill_row_major():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_in_rectangle(grid, (2, 2), 1, 1)) == [
        (1, 1), (2, 1), (3, 1),
        (1, 2), (2, 2), (3, 2),
        (1, 3), (2, 3), (3, 3),
    ]


def test_rectangle_fill_is_clipped_to_grid():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_in_rectangle(grid, (0, 0), 1, 1)) == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_rectangle_accepts_size_pair_and_square_default():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_in_rectangle(grid, (2, 2), (2, 0))) == [(x, 2) for x in range(5)]
    assert len(get_tiles_in_rectangle(grid, (2, 2), 2)) == 25


def test_rectangle_accepts_tile_center():
    grid = TileGrid.filled(3, 3)
    center = grid.get_tile(1, 1)
    assert len(get_tiles_in_rectangle(grid, center, 1)) == 9


def test_rectangle_skips_empty_cells_and_filters_walkable():
    grid = grid_from_layout([
        ".#.",
        ". .",
    ])
    assert coords(get_tiles_in_rectangle(grid, (1, 0), 1, 1)) == [(0, 0), (1, 0), (2, 0), (0, 1), (2, 1)]
    assert coords(get_walkable_tiles_in_rectangle(grid, (1, 0), 1, 1)) == [(0, 0), (2, 0), (0, 1), (2, 1)]


def test_rectangle_rejects_negative_size():
    grid = TileGrid.filled(3, 3)
    with pytest.raises(ValueError):
        get_tiles_in_rectangle(grid, (1, 1), -1, 1)


def test_rectangle_outline_yields_eight_neighbors():
    grid = TileGrid.filled(3, 3)
    outline = coords(get_tiles_on_rectangle_outline(grid, (1, 1), 1, 1))
    assert len(outline) == 8
    assert set(outline) == {(x, y) for x in range(3) for y in range(3)} - {(1, 1)}

    big = TileGrid.filled(6, 6)
    outline = coords(get_tiles_on_rectangle_outline(big, (2, 2), 1, 1))
    assert set(outline) == {(x, y) for x in (1, 2, 3) for y in (1, 2, 3)} - {(2, 2)}


def test_rectangle_outline_off_grid_is_partial_ring():
    grid = TileGrid.filled(5, 5)
    # The ring around (0, 0) runs through x = -1 and y = -1; only its
    # in-bounds part survives and the grid corner is not promoted to border.
    assert coords(get_tiles_on_rectangle_outline(grid, (0, 0), 1, 1)) == [(1, 0), (0, 1), (1, 1)]


def test_rectangle_outline_size_zero_is_center():
    grid = TileGrid.filled(3, 3)
    assert coords(get_tiles_on_rectangle_outline(grid, (1, 1), 0, 0)) == [(1, 1)]


def test_walkable_rectangle_outline_excludes_walls():
    grid = grid_with_wall(3, 3, (1, 0))
    outline = coords(get_walkable_tiles_on_rectangle_outline(grid, (1, 1), 1, 1))
    assert len(outline) == 7
    assert (1, 0) not in outline


# ------------------------------------------------------------------- circles


def test_radius_zero_is_center_only():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_in_radius(grid, (2, 2), 0)) == [(2, 2)]
    assert coords(get_walkable_tiles_in_radius(grid, (2, 2), 0)) == [(2, 2)]


def test_radius_one_is_a_plus_shape():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_in_radius(grid, (2, 2), 1)) == [(2, 1), (1, 2), (2, 2), (3, 2), (2, 3)]


def test_radius_two_counts_thirteen_tiles():
    grid = TileGrid.filled(5, 5)
    assert len(get_tiles_in_radius(grid, (2, 2), 2)) == 13


def test_radius_fill_is_clipped():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_in_radius(grid, (0, 0), 1)) == [(0, 0), (1, 0), (0, 1)]


def test_radius_tests_agree_for_integer_radii():
    grid = TileGrid.filled(9, 9)
    for center in [(4, 4), (0, 0), (8, 3), (2, 7)]:
        for radius in range(0, 7):
            row_spans = set(coords(get_tiles_in_radius(grid, center, radius)))
            squared = set(coords(get_walkable_tiles_in_radius(grid, center, radius)))
            assert row_spans == squared, (center, radius)


def test_walkable_radius_excludes_walls():
    grid = grid_with_wall(5, 5, (2, 1))
    assert (2, 1) in coords(get_tiles_in_radius(grid, (2, 2), 1))
    assert (2, 1) not in coords(get_walkable_tiles_in_radius(grid, (2, 2), 1))


def test_radius_rejects_bad_values():
    grid = TileGrid.filled(3, 3)
    with pytest.raises(ValueError):
        get_tiles_in_radius(grid, (1, 1), -1)
    with pytest.raises(ValueError):
        get_tiles_on_radius_outline(grid, (1, 1), 1.5)
    # Integral floats are accepted
    assert len(get_tiles_in_radius(grid, (1, 1), 1.0)) == 5


def test_radius_outline_small_radii():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_on_radius_outline(grid, (2, 2), 0)) == [(2, 2)]
    assert coords(get_tiles_on_radius_outline(grid, (2, 2), 1)) == [(1, 2), (3, 2), (2, 1), (2, 3)]
    assert set(coords(get_tiles_on_radius_outline(grid, (2, 2), 2))) == {
        (0, 2), (4, 2), (2, 0), (2, 4),
        (1, 1), (3, 1), (1, 3), (3, 3),
    }


def test_radius_outline_has_no_duplicates():
    grid = TileGrid.filled(11, 11)
    for radius in range(0, 6):
        outline = coords(get_tiles_on_radius_outline(grid, (5, 5), radius))
        assert len(outline) == len(set(outline))


def test_radius_outline_is_subset_of_fill():
    grid = TileGrid.filled(7, 7)
    for center in [(3, 3), (0, 0), (6, 2)]:
        for radius in range(0, 8):
            outline = set(coords(get_tiles_on_radius_outline(grid, center, radius)))
            fill = set(coords(get_tiles_in_radius(grid, center, radius)))
            assert outline <= fill, (center, radius)


def test_walkable_radius_outline_excludes_walls():
    grid = grid_with_wall(5, 5, (3, 2))
    assert coords(get_walkable_tiles_on_radius_outline(grid, (2, 2), 1)) == [(1, 2), (2, 1), (2, 3)]


# --------------------------------------------------------------------- lines


def test_horizontal_line():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_on_line(grid, (0, 2), (4, 2))) == [(x, 2) for x in range(5)]


def test_diagonal_line_is_supercover():
    grid = TileGrid.filled(5, 5)
    # Ties step vertically first
    assert coords(get_tiles_on_line(grid, (0, 0), (2, 2))) == [(0, 0), (0, 1), (1, 1), (1, 2), (2, 2)]


def test_shallow_line():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_on_line(grid, (0, 0), (4, 1))) == [(0, 0), (1, 0), (2, 0), (2, 1), (3, 1), (4, 1)]


def test_line_visits_one_cell_per_unit_step():
    grid = TileGrid.filled(6, 6)
    line = coords(get_tiles_on_line(grid, (5, 5), (0, 1)))
    assert line[0] == (5, 5)
    assert line[-1] == (0, 1)
    assert len(line) == 1 + 5 + 4
    for (ax, ay), (bx, by) in zip(line, line[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1


def test_line_to_self_is_start_only():
    grid = TileGrid.filled(3, 3)
    assert coords(get_tiles_on_line(grid, (1, 1), (1, 1))) == [(1, 1)]


def test_line_max_distance_truncates():
    grid = TileGrid.filled(5, 5)
    assert coords(get_tiles_on_line(grid, (0, 2), (4, 2), max_distance=2)) == [(0, 2), (1, 2), (2, 2)]


def test_walkable_line_skips_walls_but_continues():
    grid = grid_with_wall(5, 5, (2, 2))
    assert coords(get_tiles_on_line(grid, (0, 2), (4, 2))) == [(x, 2) for x in range(5)]
    assert coords(get_walkable_tiles_on_line(grid, (0, 2), (4, 2))) == [(0, 2), (1, 2), (3, 2), (4, 2)]


def test_line_skips_empty_cells():
    grid = grid_from_layout([". ..."])
    assert coords(get_tiles_on_line(grid, (0, 0), (4, 0))) == [(0, 0), (2, 0), (3, 0), (4, 0)]


def test_line_of_sight_clear_on_open_grid():
    grid = TileGrid.filled(6, 6)
    start, stop = grid.get_tile(0, 0), grid.get_tile(5, 3)
    assert is_line_of_sight_clear(grid, start, stop) is True
    assert get_line_of_sight(grid, start, stop) == get_tiles_on_line(grid, start, stop)
    sight = get_line_of_sight(grid, start, stop)
    assert sight[0] is start and sight[-1] is stop


def test_line_of_sight_blocked_by_wall():
    grid = grid_with_wall(5, 5, (2, 2))
    assert is_line_of_sight_clear(grid, (0, 2), (4, 2)) is False
    assert coords(get_line_of_sight(grid, (0, 2), (4, 2))) == [(0, 2), (1, 2)]


def test_line_of_sight_blocked_by_empty_cell():
    grid = grid_from_layout([".. .."])
    assert is_line_of_sight_clear(grid, (0, 0), (4, 0)) is False
    assert coords(get_line_of_sight(grid, (0, 0), (4, 0))) == [(0, 0), (1, 0)]


def test_line_of_sight_max_distance():
    grid = grid_with_wall(5, 5, (4, 2))
    # The walk stops at the range limit before reaching stop
    assert is_line_of_sight_clear(grid, (0, 2), (4, 2), max_distance=2) is False
    assert coords(get_line_of_sight(grid, (0, 2), (4, 2), max_distance=2)) == [(0, 2), (1, 2), (2, 2)]
    assert is_line_of_sight_clear(grid, (0, 2), (4, 2)) is False


def test_line_of_sight_range_limit_matches_trace():
    grid = grid_from_layout(["....."] * 5)
    sight = get_line_of_sight(grid, (0, 2), (4, 2), max_distance=2)
    assert coords(sight)[-1] != (4, 2)
    assert is_line_of_sight_clear(grid, (0, 2), (4, 2), max_distance=2) is False
    # Within range the open line is clear
    assert is_line_of_sight_clear(grid, (0, 2), (2, 2), max_distance=2) is True


def test_line_of_sight_ignores_start_cell():
    grid = grid_with_wall(3, 1, (0, 0))
    assert is_line_of_sight_clear(grid, (0, 0), (2, 0)) is True
    assert coords(get_line_of_sight(grid, (0, 0), (2, 0))) == [(0, 0), (1, 0), (2, 0)]


@pytest.mark.parametrize(
    "query",
    [
        lambda grid: get_tiles_in_rectangle(grid, (3, 0), 1),
        lambda grid: get_tiles_on_rectangle_outline(grid, (0, -1), 1),
        lambda grid: get_tiles_in_radius(grid, (9, 9), 1),
        lambda grid: get_walkable_tiles_in_radius(grid, (-1, 0), 1),
        lambda grid: get_tiles_on_radius_outline(grid, (0, 3), 1),
        lambda grid: get_tiles_on_line(grid, (0, 0), (3, 0)),
        lambda grid: get_line_of_sight(grid, (5, 0), (0, 0)),
        lambda grid: is_line_of_sight_clear(grid, (0, 0), (0, 3)),
    ],
)
def test_out_of_bounds_positions_raise(query):
    grid = TileGrid.filled(3, 3)
    with pytest.raises(OutOfBoundsError):
        query(grid)
