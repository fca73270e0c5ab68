"""
Project Discovery
=================

Locates the project a command is run from: the nearest directory, walking
up from the start path, that holds a pyproject.toml.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .common.constants import Filenames
from .common.logger import get_logger
from .config.merge import load_config
from .config.model import Config
from .resolver import populate_path_subreqs

logger = get_logger(__name__)


@dataclass
class PresentConfig:
    """
    A loaded project together with the paths derived from its location.

    Attributes:
        project_path: Directory holding the manifest
        config_path: The pyproject.toml itself
        pypackages_path: Where the project's packages are installed
        lock_path: The project's lock file
        config: The parsed, path-expanded Config
    """

    project_path: Path
    config_path: Path
    pypackages_path: Path
    lock_path: Path
    config: Config

    @classmethod
    def from_project_dir(cls, project_path: Path, config: Config) -> "PresentConfig":
        return cls(
            project_path=project_path,
            config_path=project_path / Filenames.PYPROJECT,
            pypackages_path=project_path / Filenames.PYPACKAGES,
            lock_path=project_path / Filenames.LOCKFILE,
            config=config,
        )


def find_manifest(start: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """
    Find the closest pyproject.toml at or above ``start``.

    Args:
        start: Starting directory (defaults to current working directory)

    Returns:
        Path to the manifest, or None if no ancestor holds one
    """
    current = Path(start).resolve() if start is not None else Path.cwd()

    for parent in [current] + list(current.parents):
        candidate = parent / Filenames.PYPROJECT
        if candidate.is_file():
            return candidate

    return None


def find_project(
    start: Optional[Union[str, Path]] = None,
    strict: Optional[bool] = None,
) -> Optional[PresentConfig]:
    """
    Load the project enclosing ``start``, with path dependencies expanded.

    Args:
        start: Starting directory (defaults to current working directory)
        strict: Passed on to ``populate_path_subreqs``

    Returns:
        PresentConfig, or None if no pyproject.toml was found

    Raises:
        DescriptorError: If the manifest or a descriptor it reaches is malformed
        DependencyCycleError: On a path dependency cycle, when strict
    """
    manifest = find_manifest(start)
    if manifest is None:
        logger.debug(f"No {Filenames.PYPROJECT} found above {start or Path.cwd()}")
        return None

    config = load_config(manifest)
    if config is None:
        return None

    project_path = manifest.parent
    populate_path_subreqs(config, base_dir=project_path, strict=strict)
    logger.info(f"Found project at {project_path}")
    return PresentConfig.from_project_dir(project_path, config)
