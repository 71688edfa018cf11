"""Configuration for training and classification (scripts/2_classify_silhouettes.py)"""
import os

# =============================================================================
# PROJECT PATHS
# =============================================================================

# Base paths
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Ground-truth pedestrian silhouettes used to learn the landmark ranges
TRAINING_DIR = os.path.join(ROOT, "dataset", "training")

# Foreground frames or shape crops to classify
TEST_DIR = os.path.join(ROOT, "dataset", "test")

# Verdict report (one row per silhouette)
OUTPUT_CSV = os.path.join(ROOT, "dataset", "verdicts.csv")

# Glob pattern selecting the images inside the dataset directories
IMAGE_PATTERN = "*.*"

# =============================================================================
# SILHOUETTE CONFIGURATION
# =============================================================================

# Gray level separating silhouettes from the background
BINARY_THRESHOLD = 127

# When True every blob of a test frame is classified separately;
# when False each test image is treated as a single silhouette
SPLIT_BLOBS = True

# Blobs with a smaller contour area are ignored as noise (pixels)
MIN_BLOB_AREA = 50.0

# =============================================================================
# LOCATOR CONFIGURATION (reference 128x64 silhouette)
# =============================================================================

# Row slack used to offset landmarks from the rows they were measured on
THRESHOLD = 5

# Search windows in rows
TORSO_LOWER_ROW = 48
WAIST_UPPER_ROW = 64
WAIST_LOWER_ROW = 80
FOOT_UPPER_ROW = 70

# =============================================================================
# CLASSIFIER CONFIGURATION
# =============================================================================

# Number of landmarks (out of 11) inside the trained ranges needed for
# each verdict; anything below SOMETHING_SCORE is noise
PEDESTRIAN_SCORE = 7
SOMETHING_SCORE = 3
