"""Base classes for landmark extractors."""
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class LandmarkExtractor(ABC):
    """
    Abstract base class for landmark extraction from silhouette grids.

    Subclasses should implement:
    - process_frame: Extract landmarks from a single labeled grid
    - close: Release resources held by the extractor
    """

    @abstractmethod
    def process_frame(self, grid: np.ndarray) -> Optional[np.ndarray]:
        """
        Process a single silhouette and extract landmarks.

        Args:
            grid: Labeled grid with the silhouette outline drawn

        Returns:
            Integer array of landmarks with shape (num_landmarks, 2) as
            (row, col), or None if the silhouette is malformed

        Examples:
            >>> extractor = SomeExtractor()
            >>> grid = outline_grid(cv2.imread("person.png"))
            >>> landmarks = extractor.process_frame(grid)
            >>> landmarks.shape
            (11, 2)
        """
        pass

    def close(self):
        """
        Release resources held by the extractor.

        Pixel-heuristic extractors hold nothing, so the default does nothing.

        Examples:
            >>> extractor = SomeExtractor()
            >>> # ... use extractor ...
            >>> extractor.close()
        """
        pass
