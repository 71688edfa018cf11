"""Common pipeline utilities for silhouette dataset processing."""
import logging
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from ..common.files import get_filenames, search_dataset_files
from ..common.images import validate_image_file
from ..extractors.skeleton import LANDMARK_NAMES, SkeletonResult

logger = logging.getLogger(__name__)


def build_dataset_tasks(
    directory: str,
    pattern: str = "*.*",
) -> Tuple[List[str], Dict[str, int]]:
    """
    Build the list of dataset images to process, with skip statistics.

    Args:
        directory: Dataset directory
        pattern: Glob pattern selecting the images (default: "*.*")

    Returns:
        Tuple of:
        - List of readable image paths, sorted
        - Dictionary with skip statistics

    Examples:
        >>> tasks, stats = build_dataset_tasks("/data/test")
        >>> print(f"Images to process: {len(tasks)}")
        >>> print(f"Unreadable: {stats['invalid_image']}")
    """
    stats = {
        "invalid_image": 0,
    }

    tasks = []
    invalid_images = []

    paths = search_dataset_files(directory, pattern)
    for path, name in zip(paths, get_filenames(paths)):
        if not validate_image_file(path):
            stats["invalid_image"] += 1
            invalid_images.append(name)
            continue

        tasks.append(path)

    logger.info(f"Task summary for {directory}:")
    logger.info(f"  - Images to process: {len(tasks)}")
    logger.info(f"  - Skipped (invalid images): {stats['invalid_image']}")

    if invalid_images:
        logger.warning(f"Unreadable image files: {', '.join(sorted(invalid_images))}")

    return tasks, stats


def build_verdict_report(
    names: Sequence[str],
    verdicts: Sequence[str],
    results: Sequence[SkeletonResult],
) -> pd.DataFrame:
    """
    Tabulate verdicts and landmarks, one row per silhouette.

    Args:
        names: Silhouette identifiers
        verdicts: Verdict per silhouette
        results: Skeleton extraction result per silhouette

    Returns:
        DataFrame with columns NAME, VERDICT, VALID and one
        `<landmark>_row` / `<landmark>_col` pair per landmark

    Raises:
        ValueError: If the three sequences differ in length
    """
    if not len(names) == len(verdicts) == len(results):
        raise ValueError(
            f"Length mismatch: {len(names)} names, {len(verdicts)} verdicts, "
            f"{len(results)} results"
        )

    rows = []
    for name, verdict, result in zip(names, verdicts, results):
        row = {"NAME": name, "VERDICT": str(getattr(verdict, "value", verdict)), "VALID": result.valid}
        for landmark, (r, c) in zip(LANDMARK_NAMES, result.landmarks):
            row[f"{landmark}_row"] = r
            row[f"{landmark}_col"] = c
        rows.append(row)

    columns = ["NAME", "VERDICT", "VALID"] + [
        f"{landmark}_{axis}" for landmark in LANDMARK_NAMES for axis in ("row", "col")
    ]
    return pd.DataFrame(rows, columns=columns)
