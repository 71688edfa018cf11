"""Per-landmark bounding boxes learned from training skeletons."""
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ..extractors.skeleton import NUM_LANDMARKS
from ..silhouette.grid import NOT_FOUND, Coordinate, is_within_bound


def _initial_min() -> np.ndarray:
    return np.full((NUM_LANDMARKS, 2), NOT_FOUND[0], dtype=np.int64)


def _initial_max() -> np.ndarray:
    return np.zeros((NUM_LANDMARKS, 2), dtype=np.int64)


@dataclass
class FeatureRanges:
    """
    Minimum and maximum (row, col) observed for every landmark slot.

    Bounds start at (1000, 1000) / (0, 0) so the first observation tightens
    both. Rows of `min_range` and `max_range` follow LANDMARK_NAMES.
    """

    min_range: np.ndarray = field(default_factory=_initial_min)
    max_range: np.ndarray = field(default_factory=_initial_max)

    def reset(self):
        self.min_range[:] = _initial_min()
        self.max_range[:] = _initial_max()

    def copy(self) -> "FeatureRanges":
        return FeatureRanges(self.min_range.copy(), self.max_range.copy())

    @property
    def is_trained(self) -> bool:
        return bool(np.all(self.min_range <= self.max_range))


def train_compare_ranges(ranges: FeatureRanges, feature_nodes: Sequence[Coordinate]):
    """
    Widen the bounding boxes so that they cover one training skeleton.

    Each row and column bound moves independently, and bounds only ever
    grow, so folding the same skeleton twice changes nothing.

    Args:
        ranges: Bounding boxes to update in place
        feature_nodes: Eleven (row, col) landmarks of a valid skeleton

    Raises:
        ValueError: If the skeleton does not hold one coordinate per slot
    """
    nodes = np.asarray(feature_nodes, dtype=np.int64)
    if nodes.shape != (NUM_LANDMARKS, 2):
        raise ValueError(
            f"Expected {NUM_LANDMARKS} (row, col) landmarks, got shape {nodes.shape}"
        )

    np.minimum(ranges.min_range, nodes, out=ranges.min_range)
    np.maximum(ranges.max_range, nodes, out=ranges.max_range)


def count_in_range(ranges: FeatureRanges, nodes: Sequence[Coordinate]) -> int:
    """
    Count the landmarks lying inside their slot's half-open bounding box.

    Args:
        ranges: Trained bounding boxes
        nodes: Eleven (row, col) landmarks of a test skeleton

    Returns:
        Number of slots with min <= landmark < max on both axes

    Examples:
        >>> ranges = FeatureRanges()
        >>> count_in_range(ranges, [(10, 10)] * 11)  # untrained boxes are empty
        0
    """
    if len(nodes) != NUM_LANDMARKS:
        raise ValueError(f"Expected {NUM_LANDMARKS} landmarks, got {len(nodes)}")

    feature_score = 0
    for node, low, high in zip(nodes, ranges.min_range, ranges.max_range):
        if is_within_bound(tuple(node), low[0], low[1], high[0], high[1]):
            feature_score += 1
    return feature_score
