#!/usr/bin/env python3
"""
Render the landmark skeleton of every ground-truth silhouette.

This script outlines each training image, extracts its eleven-landmark
skeleton and writes the filled silhouette with the skeleton drawn on top,
so the locators can be checked by eye before training.

Usage:
    python scripts/1_demo_skeletons.py

Configuration:
    Edit configs/demo_skeletons.py to change:
    - TRAINING_DIR: Directory with ground-truth pedestrian silhouettes
    - OUTPUT_DIR: Directory receiving the renderings
    - IMAGE_PATTERN: Glob pattern selecting the images
    - BINARY_THRESHOLD: Gray level separating silhouette from background

Output Format:
    PNG images named <name>_skeleton.png (64x128, BGR):
    - Interior in dark blue, outline in red
    - Bones in magenta, joints in green
"""
import os
import sys
import logging

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import configs.demo_skeletons as cfg
from people_finder.classifier.people_finder import PeopleFinder

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main():
    """Main function to render skeletons of the training silhouettes."""
    logger.info("=" * 80)
    logger.info("People Finder - Step 1: Demo Skeletons")
    logger.info("=" * 80)

    logger.info(f"Training directory: {cfg.TRAINING_DIR}")
    logger.info(f"Output directory: {cfg.OUTPUT_DIR}\n")

    finder = PeopleFinder()
    written = finder.demo(
        cfg.TRAINING_DIR,
        cfg.OUTPUT_DIR,
        pattern=cfg.IMAGE_PATTERN,
        threshold=cfg.BINARY_THRESHOLD,
    )

    logger.info("=" * 80)
    logger.info(f"Rendered {written} skeletons to {cfg.OUTPUT_DIR}")
    logger.info("=" * 80)


if __name__ == "__main__":
    main()
