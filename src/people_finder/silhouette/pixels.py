"""Row-major pixel indexes of a filled silhouette."""
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .grid import Coordinate, Label


class PixelSequence:
    """
    Ordered pixel coordinates of one label, in row-major scan order.

    Locators walk these sequences with integer cursors. The end of the data
    is the explicit length of the sequence; `get` returns None past it.

    Args:
        points: (row, col) coordinates sorted by row, then column

    Examples:
        >>> seq = PixelSequence([(0, 1), (0, 2), (1, 0)])
        >>> len(seq), seq.get(1), seq.get(3)
        (3, (0, 2), None)
    """

    def __init__(self, points: List[Coordinate]):
        self.points = points

    @classmethod
    def from_mask(cls, mask: np.ndarray) -> "PixelSequence":
        """Build a sequence from a boolean mask; argwhere keeps row-major order."""
        return cls([(int(r), int(c)) for r, c in np.argwhere(mask)])

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> Coordinate:
        return self.points[index]

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.points)

    def get(self, index: int) -> Optional[Coordinate]:
        if 0 <= index < len(self.points):
            return self.points[index]
        return None

    def row(self, index: int) -> Optional[int]:
        point = self.get(index)
        return None if point is None else point[0]


def highlight_pixels(grid: np.ndarray) -> Tuple[PixelSequence, PixelSequence]:
    """
    Index the interior and outline pixels of a filled grid.

    Args:
        grid: Labeled grid after the interior fill

    Returns:
        Tuple of (interior, outline) pixel sequences in row-major order
    """
    interior = PixelSequence.from_mask(grid == Label.INTERIOR)
    outline = PixelSequence.from_mask(grid == Label.OUTLINE)
    return interior, outline
