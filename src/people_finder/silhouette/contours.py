"""Outline extraction: turns binary-ish images into labeled silhouette grids."""
import logging
from typing import List, Tuple

import cv2
import numpy as np

from ..common.images import to_grayscale
from .grid import GRID_SHAPE, Label, new_grid

logger = logging.getLogger(__name__)


def binarize(image: np.ndarray, threshold: int = 127) -> np.ndarray:
    """Foreground mask (0/255) of pixels brighter than `threshold`."""
    _, mask = cv2.threshold(to_grayscale(image), threshold, 255, cv2.THRESH_BINARY)
    return mask


def outline_grid(image: np.ndarray, threshold: int = 127) -> np.ndarray:
    """
    Draw the outline of the largest blob of an image into a labeled grid.

    Only the outline is labeled; the interior is left as background for the
    flood fill of the skeleton extractor.

    Args:
        image: Silhouette image (BGR or grayscale), foreground bright
        threshold: Gray level separating foreground from background

    Returns:
        uint8 labeled grid with the same rows/cols as the image. The grid is
        all background if the image has no foreground.

    Examples:
        >>> image = load_dataset_image("ped001.png")
        >>> grid = outline_grid(image)
        >>> grid.shape
        (128, 64)
    """
    mask = binarize(image, threshold)
    grid = new_grid(mask.shape)

    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_NONE)
    if not contours:
        logger.debug("No foreground found, returning an empty grid")
        return grid

    largest = max(contours, key=cv2.contourArea)
    cv2.drawContours(grid, [largest], -1, int(Label.OUTLINE), 1)
    return grid


def extract_silhouettes(
    frame: np.ndarray,
    threshold: int = 127,
    min_area: float = 50.0,
    shape: Tuple[int, int] = GRID_SHAPE,
) -> List[np.ndarray]:
    """
    Cut every blob of a foreground frame into its own silhouette grid.

    Each blob is cropped to its bounding box, scaled to the grid size with
    nearest-neighbour interpolation and outlined. Blobs are returned left to
    right.

    Args:
        frame: Foreground frame (BGR or grayscale), foreground bright
        threshold: Gray level separating foreground from background
        min_area: Blobs with a smaller contour area are dropped as noise
        shape: Grid size as (rows, cols)

    Returns:
        List of labeled grids, one per blob
    """
    rows, cols = shape
    mask = binarize(frame, threshold)
    contours, _ = cv2.findContours(mask, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

    grids = []
    for contour in sorted(contours, key=lambda c: cv2.boundingRect(c)[0]):
        if cv2.contourArea(contour) < min_area:
            continue

        x, y, w, h = cv2.boundingRect(contour)
        blob = np.zeros_like(mask)
        cv2.drawContours(blob, [contour], -1, 255, -1)
        crop = cv2.resize(blob[y:y + h, x:x + w], (cols, rows), interpolation=cv2.INTER_NEAREST)
        grids.append(outline_grid(crop, threshold))

    logger.debug(f"Extracted {len(grids)} silhouettes from {len(contours)} blobs")
    return grids
