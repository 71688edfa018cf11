"""Interior fill of outlined silhouettes."""
import logging
from typing import Optional

import cv2
import numpy as np

from .grid import Coordinate, Label, in_grid

logger = logging.getLogger(__name__)


def default_seed(grid: np.ndarray) -> Coordinate:
    """Centre of the grid, where a framed silhouette is expected to sit."""
    return grid.shape[0] // 2, grid.shape[1] // 2


def fill_region(grid: np.ndarray, seed: Optional[Coordinate] = None) -> bool:
    """
    Flood fill the silhouette interior in place and check the result.

    The fill starts at the seed cell and spreads through 4-connected
    background cells, stopping at outline cells. It is skipped when the seed
    already lies on the outline.

    Args:
        grid: Labeled grid with the outline drawn; mutated in place
        seed: (row, col) start of the fill, defaults to the grid centre

    Returns:
        True if the interior is usable, False for a degenerate silhouette
        (the fill leaked into the top-left corner or never reached the seed)

    Examples:
        >>> grid = new_grid()
        >>> fill_region(grid)  # no outline: the fill floods the whole grid
        False
    """
    if seed is None:
        seed = default_seed(grid)

    if not in_grid(seed, grid):
        logger.debug(f"Seed {seed} is outside the {grid.shape} grid")
        return False

    row, col = seed
    if grid[row, col] != Label.OUTLINE:
        # OpenCV seeds are (x, y) = (col, row)
        cv2.floodFill(grid, None, (col, row), int(Label.INTERIOR), 0, 0, 4)

    leaked = grid[0, 0] == Label.INTERIOR
    seeded = grid[row, col] == Label.INTERIOR

    if leaked or not seeded:
        logger.debug(
            f"Degenerate silhouette: leaked={bool(leaked)}, seeded={bool(seeded)}"
        )
        return False

    return True
