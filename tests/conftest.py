import numpy as np
import pytest

from people_finder.silhouette.grid import GRID_SHAPE, Label, new_grid


def outline_from_mask(mask: np.ndarray) -> np.ndarray:
    """Labeled grid whose outline is the 4-connected border of a filled mask."""
    padded = np.pad(mask, 1, constant_values=False)
    interior = (
        padded[1:-1, 1:-1]
        & padded[:-2, 1:-1]
        & padded[2:, 1:-1]
        & padded[1:-1, :-2]
        & padded[1:-1, 2:]
    )
    grid = new_grid(mask.shape)
    grid[mask & ~interior] = int(Label.OUTLINE)
    return grid


def stick_figure_mask() -> np.ndarray:
    """
    Filled pedestrian-like shape on the reference 128x64 grid.

    Head block, a narrow neck, a straight torso, a wide hip band at rows
    70-76, two legs and two feet reaching towards the bottom corners.
    """
    mask = np.zeros(GRID_SHAPE, dtype=bool)
    mask[2:9, 26:38] = True      # head
    mask[9:14, 30:34] = True     # neck
    mask[14:70, 20:44] = True    # torso
    mask[70:77, 14:50] = True    # hips
    mask[77:120, 14:25] = True   # left leg
    mask[77:120, 39:50] = True   # right leg
    mask[120:127, 2:25] = True   # left foot
    mask[120:127, 39:62] = True  # right foot
    return mask


@pytest.fixture
def make_grid():
    return outline_from_mask


@pytest.fixture
def stick_mask():
    return stick_figure_mask()


@pytest.fixture
def stick_grid():
    return outline_from_mask(stick_figure_mask())


@pytest.fixture
def empty_grid():
    return new_grid()


@pytest.fixture
def box_grid():
    """Closed rectangle below the torso search window; its torso falls off the grid."""
    mask = np.zeros(GRID_SHAPE, dtype=bool)
    mask[50:101, 10:51] = True
    return outline_from_mask(mask)
