"""Labeled silhouette grids and coordinate helpers."""
from enum import IntEnum
from typing import Tuple

import numpy as np

# (row, col) pixel position inside a grid
Coordinate = Tuple[int, int]

# Marks a landmark that could not be located. Grids are at most 128x64,
# so this never collides with a real pixel.
NOT_FOUND: Coordinate = (1000, 1000)

# Reference silhouette size (rows, cols)
GRID_SHAPE = (128, 64)


class Label(IntEnum):
    """Per-cell labels of a silhouette grid."""

    BACKGROUND = 0
    INTERIOR = 64
    OUTLINE = 255


def new_grid(shape: Tuple[int, int] = GRID_SHAPE) -> np.ndarray:
    """
    Create an empty (all background) labeled grid.

    Args:
        shape: Grid size as (rows, cols)

    Returns:
        uint8 array filled with Label.BACKGROUND

    Examples:
        >>> new_grid().shape
        (128, 64)
    """
    return np.full(shape, Label.BACKGROUND, dtype=np.uint8)


def validate_grid(grid: np.ndarray) -> np.ndarray:
    """
    Check that a labeled grid is a 2D uint8 array.

    Args:
        grid: Labeled grid to validate

    Returns:
        The same grid, for chaining

    Raises:
        ValueError: If the grid is not a 2D array or holds unknown labels
    """
    if not isinstance(grid, np.ndarray) or grid.ndim != 2:
        shape = getattr(grid, "shape", None)
        raise ValueError(f"Expected a 2D labeled grid (rows, cols), got shape {shape}")

    if grid.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 labeled grid, got dtype {grid.dtype}")

    unknown = np.setdiff1d(np.unique(grid), [label.value for label in Label])
    if unknown.size > 0:
        raise ValueError(f"Grid contains unknown labels: {unknown.tolist()}")

    return grid


def is_within_bound(
    node: Coordinate,
    low_row: int,
    low_col: int,
    high_row: int,
    high_col: int,
) -> bool:
    """
    Check whether a coordinate lies inside a half-open box.

    Args:
        node: (row, col) position to check
        low_row: Inclusive lower row bound
        low_col: Inclusive lower column bound
        high_row: Exclusive upper row bound
        high_col: Exclusive upper column bound

    Returns:
        True if low_row <= row < high_row and low_col <= col < high_col

    Examples:
        >>> is_within_bound((0, 0), 0, 0, 128, 64)
        True
        >>> is_within_bound((128, 10), 0, 0, 128, 64)
        False
    """
    row, col = node
    return low_row <= row < high_row and low_col <= col < high_col


def in_grid(node: Coordinate, grid: np.ndarray) -> bool:
    """True if the coordinate addresses a cell of the grid."""
    return is_within_bound(node, 0, 0, grid.shape[0], grid.shape[1])
