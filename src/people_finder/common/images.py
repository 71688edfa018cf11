"""Image loading utilities for the silhouette datasets."""
import logging
import os
from typing import List, Optional, Tuple

import cv2
import numpy as np

from ..silhouette.grid import GRID_SHAPE

logger = logging.getLogger(__name__)


def validate_image_file(image_path: str) -> bool:
    """
    Validates if an image file exists and can be decoded by OpenCV.

    Args:
        image_path: Path to the image file

    Returns:
        True if the image can be read, False otherwise

    Examples:
        >>> validate_image_file("/data/ped001.png")
        True
        >>> validate_image_file("/data/missing.png")
        False
    """
    if not os.path.exists(image_path):
        return False
    return cv2.imread(image_path, cv2.IMREAD_GRAYSCALE) is not None


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR or BGRA image to a single channel; grayscale passes through."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def prepare_image(image: np.ndarray, shape: Tuple[int, int] = GRID_SHAPE) -> np.ndarray:
    """
    Convert an image to grayscale and resize it to the silhouette grid size.

    Args:
        image: Input image (BGR, BGRA or grayscale)
        shape: Target size as (rows, cols)

    Returns:
        Grayscale uint8 image with the requested shape

    Examples:
        >>> prepare_image(cv2.imread("ped001.png")).shape
        (128, 64)
    """
    rows, cols = shape
    gray = to_grayscale(image)
    # OpenCV sizes are (width, height)
    return cv2.resize(gray, (cols, rows))


def load_dataset_image(
    image_path: str, shape: Tuple[int, int] = GRID_SHAPE
) -> Optional[np.ndarray]:
    """
    Load one dataset image as a resized grayscale array.

    Args:
        image_path: Path to the image file
        shape: Target size as (rows, cols)

    Returns:
        Grayscale image, or None if the file cannot be decoded
    """
    image = cv2.imread(image_path)
    if image is None:
        logger.warning(f"Could not read image: {image_path}")
        return None
    return prepare_image(image, shape)


def load_dataset_images(
    image_paths: List[str], shape: Tuple[int, int] = GRID_SHAPE
) -> List[np.ndarray]:
    """
    Load every readable image of a dataset, skipping unreadable files.

    Args:
        image_paths: Paths to the image files
        shape: Target size as (rows, cols)

    Returns:
        List of grayscale images in input order
    """
    images = []
    for path in image_paths:
        image = load_dataset_image(path, shape)
        if image is not None:
            images.append(image)

    logger.info(f"Loaded {len(images)} of {len(image_paths)} images")
    return images
