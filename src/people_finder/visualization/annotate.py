"""Skeleton and silhouette rendering."""
from typing import List, Sequence, Tuple

import cv2
import numpy as np

from ..extractors.skeleton import (
    ELBOW_LEFT,
    ELBOW_RIGHT,
    FOOT_A,
    FOOT_B,
    HAND_LEFT,
    HAND_RIGHT,
    HEAD,
    SHOULDER_LEFT,
    SHOULDER_RIGHT,
    TORSO,
    WAIST,
)
from ..silhouette.grid import NOT_FOUND, Coordinate, Label

SKELETON_CONNECTIONS: List[Tuple[int, int]] = [
    # head to feet
    (HEAD, TORSO), (TORSO, WAIST), (WAIST, FOOT_A), (WAIST, FOOT_B),
    # left arm
    (TORSO, SHOULDER_LEFT), (SHOULDER_LEFT, ELBOW_LEFT), (ELBOW_LEFT, HAND_LEFT),
    # right arm
    (TORSO, SHOULDER_RIGHT), (SHOULDER_RIGHT, ELBOW_RIGHT), (ELBOW_RIGHT, HAND_RIGHT),
]

# BGR
GRID_COLORS = {
    Label.BACKGROUND: (0, 0, 0),
    Label.INTERIOR: (64, 0, 0),
    Label.OUTLINE: (0, 0, 255),
}


def render_grid(grid: np.ndarray) -> np.ndarray:
    """Colour a labeled grid: interior dark blue, outline red."""
    image = np.zeros(grid.shape + (3,), dtype=np.uint8)
    for label, color in GRID_COLORS.items():
        image[grid == label] = color
    return image


def draw_skeleton(
    image: np.ndarray,
    landmarks: Sequence[Coordinate],
    line_color: Tuple[int, int, int] = (255, 0, 255),
    point_color: Tuple[int, int, int] = (0, 255, 0),
    radius: int = 2,
) -> np.ndarray:
    """
    Draw the skeleton topology over an image.

    Segments touching a landmark that was not found are left out.

    Args:
        image: Image to annotate (BGR or grayscale); not modified
        landmarks: Eleven (row, col) landmarks
        line_color: BGR colour of the bones
        point_color: BGR colour of the joints
        radius: Joint circle radius in pixels

    Returns:
        Annotated BGR copy of the image
    """
    output = image.copy() if image.ndim == 3 else cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    found = [tuple(node) != NOT_FOUND for node in landmarks]

    for parent, child in SKELETON_CONNECTIONS:
        if found[parent] and found[child]:
            # OpenCV points are (x, y) = (col, row)
            p1 = (int(landmarks[parent][1]), int(landmarks[parent][0]))
            p2 = (int(landmarks[child][1]), int(landmarks[child][0]))
            cv2.line(output, p1, p2, line_color)

    for node, ok in zip(landmarks, found):
        if ok:
            cv2.circle(output, (int(node[1]), int(node[0])), radius, point_color)

    return output
