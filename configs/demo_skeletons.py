"""Configuration for skeleton rendering of the training set (scripts/1_demo_skeletons.py)"""
import os

# =============================================================================
# PROJECT PATHS
# =============================================================================

# Base paths
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Ground-truth pedestrian silhouettes (bright shape on dark background)
TRAINING_DIR = os.path.join(ROOT, "dataset", "training")

# Annotated renderings are written here as <name>_skeleton.png
OUTPUT_DIR = os.path.join(ROOT, "dataset", "skeletons")

# Glob pattern selecting the images inside TRAINING_DIR
IMAGE_PATTERN = "*.*"

# =============================================================================
# SILHOUETTE CONFIGURATION
# =============================================================================

# Gray level separating the silhouette from the background
BINARY_THRESHOLD = 127
