"""Skeleton extraction: interior fill followed by the landmark locator chain."""
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..silhouette.grid import NOT_FOUND, Coordinate, in_grid, validate_grid
from ..silhouette.pixels import highlight_pixels
from ..silhouette.region import fill_region
from .base import LandmarkExtractor
from .locators import (
    LocatorConfig,
    calc_halfway_torso_dist,
    find_elbow_feature,
    find_foot_feature,
    find_hand_feature,
    find_head_feature,
    find_torso_feature,
    find_waist_feature,
    set_shoulder_positions,
)

logger = logging.getLogger(__name__)

LANDMARK_NAMES = [
    "head",
    "torso",
    "waist",
    "foot_a",
    "foot_b",
    "shoulder_left",
    "shoulder_right",
    "elbow_left",
    "hand_left",
    "elbow_right",
    "hand_right",
]
NUM_LANDMARKS = len(LANDMARK_NAMES)

HEAD, TORSO, WAIST, FOOT_A, FOOT_B = 0, 1, 2, 3, 4
SHOULDER_LEFT, SHOULDER_RIGHT = 5, 6
ELBOW_LEFT, HAND_LEFT, ELBOW_RIGHT, HAND_RIGHT = 7, 8, 9, 10


@dataclass
class SkeletonResult:
    """
    Landmarks of one silhouette and whether they can be trusted.

    Args:
        landmarks: Eleven (row, col) coordinates indexed as LANDMARK_NAMES,
            NOT_FOUND where a landmark could not be placed
        valid: False if the silhouette was judged malformed
    """

    landmarks: List[Coordinate]
    valid: bool

    def as_array(self) -> np.ndarray:
        return np.array(self.landmarks, dtype=np.int32)

    def as_dict(self) -> dict:
        return dict(zip(LANDMARK_NAMES, self.landmarks))


class SkeletonExtractor(LandmarkExtractor):
    """
    Builds an eleven-landmark skeleton inside an outlined silhouette.

    Pipeline:
    1. Flood fill the interior from the grid centre
    2. Index interior and outline pixels in row-major order
    3. Run the locators: head, torso, waist, feet, shoulders, elbows, hands

    A silhouette is flagged invalid when the fill is degenerate or the torso
    lands outside the grid; the remaining locators are then skipped.

    Args:
        config: Locator tuning constants

    Examples:
        >>> extractor = SkeletonExtractor()
        >>> result = extractor.extract(grid)
        >>> result.valid, result.landmarks[0]
        (True, (8, 27))
    """

    def __init__(self, config: Optional[LocatorConfig] = None):
        """Initialize the extractor with locator tuning constants."""
        self.config = config or LocatorConfig()

    def extract(self, grid: np.ndarray, in_place: bool = False) -> SkeletonResult:
        """
        Extract the landmark skeleton of one silhouette.

        Args:
            grid: Labeled grid with the outline drawn and no interior yet
            in_place: Fill the caller's grid instead of a copy

        Returns:
            SkeletonResult with eleven landmarks and the validity flag

        Raises:
            ValueError: If the grid is not a 2D uint8 labeled grid
        """
        validate_grid(grid)
        if not in_place:
            grid = grid.copy()

        cfg = self.config
        nodes = [NOT_FOUND] * NUM_LANDMARKS

        if not fill_region(grid):
            logger.debug("Skipping silhouette: interior fill is degenerate")
            return SkeletonResult(nodes, valid=False)

        shape_pixels, outline_pixels = highlight_pixels(grid)

        nodes[HEAD], index_head = find_head_feature(shape_pixels, cfg.threshold)
        nodes[TORSO], index_torso = find_torso_feature(shape_pixels, nodes[HEAD], index_head, cfg)

        # the torso is the strongest indication of a well-formed shape
        if not in_grid(nodes[TORSO], grid):
            logger.debug(f"Skipping silhouette: torso {nodes[TORSO]} is outside the grid")
            return SkeletonResult(nodes, valid=False)

        nodes[WAIST], index_waist = find_waist_feature(shape_pixels, nodes[TORSO], index_torso, cfg)
        halfway_node, halfway_dist = calc_halfway_torso_dist(nodes[TORSO], nodes[WAIST])

        rows, cols = grid.shape
        nodes[FOOT_A] = find_foot_feature(shape_pixels, nodes[WAIST], (rows - 1, 1), index_waist, cfg)
        nodes[FOOT_B] = find_foot_feature(shape_pixels, nodes[WAIST], (rows - 1, cols - 1), index_waist, cfg)

        (
            nodes[SHOULDER_LEFT],
            nodes[SHOULDER_RIGHT],
            arm_width,
            index_shoulders,
        ) = set_shoulder_positions(shape_pixels, nodes[TORSO], index_torso, cfg)

        for elbow, hand, shoulder in (
            (ELBOW_LEFT, HAND_LEFT, SHOULDER_LEFT),
            (ELBOW_RIGHT, HAND_RIGHT, SHOULDER_RIGHT),
        ):
            nodes[elbow] = find_elbow_feature(
                shape_pixels,
                nodes[TORSO],
                nodes[shoulder],
                arm_width,
                halfway_dist,
                halfway_node,
                index_shoulders,
            )
            nodes[hand] = find_hand_feature(
                shape_pixels,
                outline_pixels,
                grid,
                nodes[WAIST],
                nodes[elbow],
                arm_width,
                halfway_dist,
                index_shoulders,
                cfg,
            )

        missing = [name for name, node in zip(LANDMARK_NAMES, nodes) if node == NOT_FOUND]
        if missing:
            logger.debug(f"Landmarks not found: {', '.join(missing)}")

        return SkeletonResult(nodes, valid=True)

    def process_frame(self, grid: np.ndarray) -> Optional[np.ndarray]:
        """
        Extract landmarks as an array.

        Args:
            grid: Labeled grid with the outline drawn

        Returns:
            Array of shape (11, 2) with (row, col) per landmark, or None if
            the silhouette is malformed
        """
        result = self.extract(grid)
        if not result.valid:
            return None
        return result.as_array()
