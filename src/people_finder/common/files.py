"""Common file and directory utilities for the silhouette datasets."""
import os
from glob import glob
from typing import List

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".pgm", ".tif", ".tiff")


def search_dataset_files(directory: str, pattern: str = "*.*") -> List[str]:
    """
    Retrieves image file paths from a dataset directory.

    Args:
        directory: Path to directory containing the images
        pattern: File pattern to match (default: "*.*")

    Returns:
        Sorted list of paths whose extension is a known image format

    Examples:
        >>> search_dataset_files("/data/pedestrians")
        ['/data/pedestrians/ped001.png', '/data/pedestrians/ped002.png']
    """
    return sorted(
        f
        for f in glob(os.path.join(directory, pattern))
        if os.path.isfile(f) and os.path.splitext(f)[1].lower() in IMAGE_EXTENSIONS
    )


def get_filenames(paths: List[str]) -> List[str]:
    """
    Strip directories and extensions from file paths.

    Args:
        paths: File paths

    Returns:
        List of filenames without extensions

    Examples:
        >>> get_filenames(["/data/ped001.png"])
        ['ped001']
    """
    return [os.path.splitext(os.path.basename(f))[0] for f in paths]
