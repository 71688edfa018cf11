import numpy as np

from people_finder.silhouette.grid import GRID_SHAPE, Label
from people_finder.silhouette.region import default_seed, fill_region


def test_default_seed_is_grid_centre(empty_grid):
    assert default_seed(empty_grid) == (64, 32)


def test_fills_closed_outline(make_grid):
    mask = np.zeros(GRID_SHAPE, dtype=bool)
    mask[20:110, 10:55] = True
    grid = make_grid(mask)

    assert fill_region(grid)
    assert grid[64, 32] == Label.INTERIOR
    assert grid[21, 11] == Label.INTERIOR
    assert grid[20, 10] == Label.OUTLINE
    assert grid[0, 0] == Label.BACKGROUND
    assert grid[115, 32] == Label.BACKGROUND


def test_interior_and_outline_never_overlap(stick_grid):
    outline_before = stick_grid == Label.OUTLINE
    fill_region(stick_grid)
    assert np.array_equal(stick_grid == Label.OUTLINE, outline_before)


def test_missing_outline_is_degenerate(empty_grid):
    assert not fill_region(empty_grid)
    assert empty_grid[0, 0] == Label.INTERIOR


def test_outline_away_from_seed_is_degenerate(make_grid):
    mask = np.zeros(GRID_SHAPE, dtype=bool)
    mask[5:30, 5:30] = True
    grid = make_grid(mask)

    assert not fill_region(grid)
    # the fill spread through the background instead of the shape
    assert grid[10, 10] == Label.BACKGROUND


def test_seed_on_outline_is_degenerate(make_grid):
    mask = np.zeros(GRID_SHAPE, dtype=bool)
    mask[64:100, 32:50] = True
    grid = make_grid(mask)

    assert grid[64, 32] == Label.OUTLINE
    assert not fill_region(grid)
    assert not np.any(grid == Label.INTERIOR)


def test_seed_outside_grid_is_degenerate(empty_grid):
    assert not fill_region(empty_grid, seed=(500, 10))
    assert np.all(empty_grid == Label.BACKGROUND)
