#!/usr/bin/env python3
"""
Train the pedestrian classifier and classify test silhouettes.

This script learns per-landmark ranges from the ground-truth silhouettes in
the training directory, then classifies every silhouette found in the test
directory as Pedestrian, Something or Noise. Ranges live only for the
duration of the run.

Usage:
    python scripts/2_classify_silhouettes.py

Configuration:
    Edit configs/classify_silhouettes.py to change:
    - TRAINING_DIR / TEST_DIR: Dataset directories
    - OUTPUT_CSV: Path of the verdict report
    - SPLIT_BLOBS, MIN_BLOB_AREA: How test frames are cut into silhouettes
    - THRESHOLD and the *_ROW constants: Locator tuning
    - PEDESTRIAN_SCORE, SOMETHING_SCORE: Verdict thresholds

Output Format:
    Comma-separated CSV with columns:
    - NAME: <image name> or <image name>-<blob index>
    - VERDICT: Pedestrian, Something or Noise
    - VALID: False if the silhouette was judged malformed
    - <landmark>_row, <landmark>_col: Landmark positions (1000 if not found)
"""
import os
import sys
import logging
from collections import Counter

import cv2
from tqdm import tqdm

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import configs.classify_silhouettes as cfg
from people_finder.classifier.people_finder import PeopleFinder
from people_finder.common.files import get_filenames
from people_finder.common.images import load_dataset_image
from people_finder.extractors.locators import LocatorConfig
from people_finder.extractors.skeleton import SkeletonExtractor
from people_finder.pipeline.processor import build_dataset_tasks, build_verdict_report
from people_finder.silhouette.contours import extract_silhouettes, outline_grid

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_finder() -> PeopleFinder:
    """Create a classifier from the configured locator and verdict settings."""
    config = LocatorConfig(
        threshold=cfg.THRESHOLD,
        torso_lower_row=cfg.TORSO_LOWER_ROW,
        waist_upper_row=cfg.WAIST_UPPER_ROW,
        waist_lower_row=cfg.WAIST_LOWER_ROW,
        foot_upper_row=cfg.FOOT_UPPER_ROW,
    )
    return PeopleFinder(
        extractor=SkeletonExtractor(config),
        pedestrian_score=cfg.PEDESTRIAN_SCORE,
        something_score=cfg.SOMETHING_SCORE,
    )


def train(finder: PeopleFinder) -> int:
    """
    Fold every training silhouette into the classifier's ranges.

    Args:
        finder: Classifier to train

    Returns:
        Number of silhouettes that contributed to the ranges
    """
    tasks, _ = build_dataset_tasks(cfg.TRAINING_DIR, cfg.IMAGE_PATTERN)

    grids = []
    for path in tqdm(tasks, desc="Loading training set"):
        image = load_dataset_image(path)
        if image is not None:
            grids.append(outline_grid(image, cfg.BINARY_THRESHOLD))

    finder.init()
    return finder.train(grids)


def load_test_silhouettes(path: str):
    """
    Cut one test image into named silhouette grids.

    Args:
        path: Test image path

    Returns:
        List of (name, grid) tuples
    """
    name = get_filenames([path])[0]

    if not cfg.SPLIT_BLOBS:
        image = load_dataset_image(path)
        if image is None:
            return []
        return [(name, outline_grid(image, cfg.BINARY_THRESHOLD))]

    frame = cv2.imread(path)
    if frame is None:
        logger.warning(f"Could not read image: {path}")
        return []

    grids = extract_silhouettes(
        frame,
        threshold=cfg.BINARY_THRESHOLD,
        min_area=cfg.MIN_BLOB_AREA,
    )
    return [(f"{name}-{i:03d}", grid) for i, grid in enumerate(grids)]


def main():
    """Main function to train the classifier and classify the test set."""
    logger.info("=" * 80)
    logger.info("People Finder - Step 2: Train and Classify Silhouettes")
    logger.info("=" * 80)

    logger.info("Configuration:")
    logger.info(f"  - Training directory: {cfg.TRAINING_DIR}")
    logger.info(f"  - Test directory: {cfg.TEST_DIR}")
    logger.info(f"  - Split blobs: {cfg.SPLIT_BLOBS} (min area {cfg.MIN_BLOB_AREA})")
    logger.info(f"  - Verdict scores: {cfg.PEDESTRIAN_SCORE} / {cfg.SOMETHING_SCORE}\n")

    finder = build_finder()
    trained = train(finder)
    if trained == 0:
        logger.error("No valid training silhouettes, cannot classify. Exiting.")
        return

    tasks, _ = build_dataset_tasks(cfg.TEST_DIR, cfg.IMAGE_PATTERN)
    if not tasks:
        logger.info("\nNo test images to process. Exiting.")
        return

    names, verdicts, results = [], [], []
    for path in tqdm(tasks, desc="Classifying"):
        try:
            for name, grid in load_test_silhouettes(path):
                verdict, result = finder.classify(grid)
                names.append(name)
                verdicts.append(verdict)
                results.append(result)
        except Exception as e:
            logger.error(f"Error processing {path}: {str(e)}")

    finder.extractor.close()

    report = build_verdict_report(names, verdicts, results)
    os.makedirs(os.path.dirname(cfg.OUTPUT_CSV), exist_ok=True)
    report.to_csv(cfg.OUTPUT_CSV, index=False)

    counts = Counter(report["VERDICT"])
    malformed = len(report) - int(report["VALID"].astype(bool).sum())
    logger.info("\n" + "=" * 80)
    logger.info("Classification Summary:")
    logger.info(f"  - Training silhouettes used: {trained}")
    logger.info(f"  - Silhouettes classified: {len(report)}")
    for verdict in ("Pedestrian", "Something", "Noise"):
        logger.info(f"  - {verdict}: {counts.get(verdict, 0)}")
    logger.info(f"  - Malformed silhouettes: {malformed}")
    logger.info(f"  - Report saved to: {cfg.OUTPUT_CSV}")
    logger.info("=" * 80)


if __name__ == "__main__":
    main()
