"""Pedestrian classification from skeleton landmark ranges."""
import logging
import os
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..common.files import get_filenames, search_dataset_files
from ..common.images import load_dataset_image, load_dataset_images
from ..extractors.skeleton import SkeletonExtractor, SkeletonResult
from ..silhouette.contours import outline_grid
from ..silhouette.grid import Coordinate
from ..visualization.annotate import draw_skeleton, render_grid
from .ranges import FeatureRanges, count_in_range, train_compare_ranges

logger = logging.getLogger(__name__)

PEDESTRIAN_SCORE = 7
SOMETHING_SCORE = 3


class Verdict(str, Enum):
    """Classification outcome for one silhouette."""

    PEDESTRIAN = "Pedestrian"
    SOMETHING = "Something"
    NOISE = "Noise"


def judge_features(
    ranges: FeatureRanges,
    nodes: Sequence[Coordinate],
    pedestrian_score: int = PEDESTRIAN_SCORE,
    something_score: int = SOMETHING_SCORE,
) -> Verdict:
    """
    Classify a skeleton by how many landmarks fall inside the trained boxes.

    Args:
        ranges: Trained bounding boxes
        nodes: Eleven (row, col) landmarks
        pedestrian_score: Minimum in-range count for a pedestrian
        something_score: Minimum in-range count for an ambiguous object

    Returns:
        Verdict for the skeleton

    Examples:
        >>> judge_features(ranges, skeleton)  # 8 of 11 landmarks in range
        <Verdict.PEDESTRIAN: 'Pedestrian'>
    """
    feature_score = count_in_range(ranges, nodes)

    if feature_score >= pedestrian_score:
        return Verdict.PEDESTRIAN
    if feature_score >= something_score:
        return Verdict.SOMETHING
    return Verdict.NOISE


def _until_empty(grids: Iterable[np.ndarray]) -> Iterable[np.ndarray]:
    """Yield grids up to the first zero-size entry, which ends a batch."""
    for grid in grids:
        if grid is None or grid.size == 0:
            return
        yield grid


class PeopleFinder:
    """
    Pedestrian classifier trained on ground-truth silhouettes.

    Training folds the skeleton of every valid training silhouette into a
    per-landmark bounding box. Testing counts how many landmarks of a
    silhouette land inside those boxes:
    - 7 or more: Pedestrian
    - 3 to 6: Something
    - fewer than 3: Noise

    The classifier owns its FeatureRanges; one instance must not be trained
    from several threads at once.

    Args:
        extractor: Skeleton extractor, a default one if None
        ranges: Bounding boxes to start from, fresh ones if None
        pedestrian_score: Minimum in-range count for a pedestrian
        something_score: Minimum in-range count for an ambiguous object

    Examples:
        >>> finder = PeopleFinder()
        >>> finder.train(training_grids)
        >>> finder.test([outline_grid(shape) for shape in shapes])
        [<Verdict.PEDESTRIAN: 'Pedestrian'>, <Verdict.NOISE: 'Noise'>]
    """

    def __init__(
        self,
        extractor: Optional[SkeletonExtractor] = None,
        ranges: Optional[FeatureRanges] = None,
        pedestrian_score: int = PEDESTRIAN_SCORE,
        something_score: int = SOMETHING_SCORE,
    ):
        """Initialize the classifier with an extractor and bounding boxes."""
        self.extractor = extractor or SkeletonExtractor()
        self.ranges = ranges or FeatureRanges()
        self.pedestrian_score = pedestrian_score
        self.something_score = something_score
        self.bad_skel_flag = False
        self.verdicts: List[Verdict] = []

    def init(self):
        """Reset the bounding boxes to their untrained state."""
        self.ranges.reset()

    def create_skeleton(self, grid: np.ndarray, in_place: bool = False) -> SkeletonResult:
        """Extract a skeleton and record its validity flag."""
        result = self.extractor.extract(grid, in_place=in_place)
        self.bad_skel_flag = not result.valid
        return result

    def train(self, grids: Iterable[np.ndarray]) -> int:
        """
        Fold training silhouettes into the bounding boxes.

        Silhouettes flagged as malformed are left out. The batch ends at the
        first zero-size grid.

        Args:
            grids: Outlined training silhouettes

        Returns:
            Number of silhouettes that contributed to the ranges
        """
        trained = 0
        skipped = 0

        for grid in _until_empty(grids):
            result = self.create_skeleton(grid)
            if not result.valid:
                skipped += 1
                continue
            train_compare_ranges(self.ranges, result.landmarks)
            trained += 1

        logger.info(f"Trained on {trained} silhouettes, skipped {skipped} malformed")
        return trained

    def test(self, grids: Iterable[np.ndarray]) -> List[Verdict]:
        """
        Classify silhouettes against the trained bounding boxes.

        Malformed silhouettes are still judged; their missing landmarks
        count against them.

        Args:
            grids: Outlined silhouettes to classify

        Returns:
            One verdict per silhouette, in input order
        """
        self.verdicts = [self.classify(grid)[0] for grid in _until_empty(grids)]
        return self.verdicts

    def classify(self, grid: np.ndarray) -> Tuple[Verdict, SkeletonResult]:
        """
        Classify one silhouette.

        Args:
            grid: Outlined silhouette

        Returns:
            Tuple of (verdict, skeleton extraction result)
        """
        result = self.create_skeleton(grid)
        verdict = judge_features(
            self.ranges, result.landmarks, self.pedestrian_score, self.something_score
        )
        return verdict, result

    def get_verdicts(self) -> List[Verdict]:
        return self.verdicts

    def get_bad_flag(self) -> bool:
        return self.bad_skel_flag

    def train_from_directory(self, directory: str, pattern: str = "*.*", threshold: int = 127) -> int:
        """
        Train on every image of a ground-truth directory.

        Each image is converted to grayscale, resized to the grid size and
        the outline of its largest blob is used as the silhouette.

        Args:
            directory: Directory of ground-truth pedestrian images
            pattern: Glob pattern selecting the images
            threshold: Gray level separating silhouette from background

        Returns:
            Number of silhouettes that contributed to the ranges
        """
        paths = search_dataset_files(directory, pattern)
        if not paths:
            logger.warning(f"No training images found in {directory}")
            return 0

        logger.info(f"Training the PeopleFinder classifier on {len(paths)} images...")
        self.init()
        images = load_dataset_images(paths)
        return self.train(outline_grid(image, threshold) for image in images)

    def demo(self, directory: str, output_dir: str, pattern: str = "*.*", threshold: int = 127) -> int:
        """
        Write the skeleton of every ground-truth image to `output_dir`.

        Args:
            directory: Directory of ground-truth pedestrian images
            output_dir: Directory receiving `<name>_skeleton.png` renderings
            pattern: Glob pattern selecting the images
            threshold: Gray level separating silhouette from background

        Returns:
            Number of renderings written
        """
        paths = search_dataset_files(directory, pattern)
        os.makedirs(output_dir, exist_ok=True)
        written = 0

        for path, name in zip(paths, get_filenames(paths)):
            image = load_dataset_image(path)
            if image is None:
                continue

            grid = outline_grid(image, threshold)
            result = self.create_skeleton(grid, in_place=True)

            annotated = draw_skeleton(render_grid(grid), result.landmarks)
            output_path = os.path.join(output_dir, f"{name}_skeleton.png")
            cv2.imwrite(output_path, annotated)
            written += 1
            logger.info(f"{name}: valid={result.valid}, saved to {output_path}")

        return written
