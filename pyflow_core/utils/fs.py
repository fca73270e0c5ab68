"""Filesystem helpers."""

from pathlib import Path
from typing import List, Union


def find_folders(path: Union[str, Path]) -> List[str]:
    """
    List the names of a directory's immediate child folders, sorted.

    Returns an empty list if ``path`` is not a directory.
    """
    directory = Path(path)
    if not directory.is_dir():
        return []
    return sorted(child.name for child in directory.iterdir() if child.is_dir())
