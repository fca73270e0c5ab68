"""
Local Path Dependency Expansion
===============================

For every Req with a ``path``, look inside that directory and append the
requirements found there to the list the Req came from (reqs or dev_reqs).
The path Req itself stays in place.

Discovery order inside each directory:
1. requirements.txt
2. pyproject.toml - loaded in full and expanded recursively; only its
   runtime reqs are kept
3. <name>-<version>.dist-info/METADATA of immediate child folders

Output order is append order across the three steps, across path Reqs in
input order. A relative ``path`` on a discovered Req is rewritten as an
absolute path against the directory it was found in. ``setup.py`` is
never read, since that means running arbitrary code.

Cycles: each call tracks the chain of directories being expanded. A path
that leads back onto the chain is skipped with a warning, or raises
DependencyCycleError when strict cycle handling is enabled.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from .common.constants import Filenames
from .common.errors import DependencyCycleError
from .common.logger import get_logger
from .common.settings import get_settings
from .config.merge import load_config
from .config.model import Config
from .dependencies import Req
from .formats.requirements_txt import parse_requirements_file
from .formats.wheel_metadata import find_dist_info_requirements

logger = get_logger(__name__)


def populate_path_subreqs(
    config: Config,
    base_dir: Optional[Union[str, Path]] = None,
    strict: Optional[bool] = None,
) -> Config:
    """
    Expand the path dependencies of a Config in place.

    Args:
        config: Config whose reqs and dev_reqs are extended
        base_dir: Directory relative ``path`` values are resolved against;
            normally the directory holding the manifest. Defaults to cwd.
        strict: Raise on cycles instead of skipping. Defaults to
            PYFLOW_STRICT_CYCLES.

    Returns:
        The same Config

    Raises:
        DescriptorError: If any discovered descriptor is malformed
        DependencyCycleError: On a cycle, when strict
    """
    root = Path(base_dir) if base_dir is not None else Path.cwd()
    strict = get_settings().strict_cycles if strict is None else strict
    chain = [root.resolve()]

    config.reqs.extend(collect_path_subreqs(config.reqs, root, chain, strict))
    config.dev_reqs.extend(collect_path_subreqs(config.dev_reqs, root, chain, strict))
    return config


def collect_path_subreqs(
    reqs: Sequence[Req],
    base_dir: Path,
    chain: List[Path],
    strict: bool = False,
) -> List[Req]:
    """
    Gather the requirements declared inside each path dependency's directory.

    Args:
        reqs: Requirements to scan; only those with ``path`` are expanded
        base_dir: Directory relative paths are resolved against
        chain: Directories currently being expanded, outermost first
        strict: Raise DependencyCycleError instead of skipping a cycle

    Returns:
        Newly discovered requirements, in discovery order
    """
    result: List[Req] = []

    for req in [r for r in reqs if r.path is not None]:
        req_path = (base_dir / req.path).resolve()

        if req_path in chain:
            if strict:
                raise DependencyCycleError(chain + [req_path])
            logger.warning(
                f"Skipping path dependency '{req.name}': {req_path} is already being expanded"
            )
            continue

        if not req_path.is_dir():
            logger.warning(f"Path dependency '{req.name}' not found at {req_path}")
            continue

        logger.debug(f"Expanding path dependency '{req.name}' at {req_path}")
        result.extend(_discover(req_path, chain + [req_path], strict))

    return result


def _discover(directory: Path, chain: List[Path], strict: bool) -> List[Req]:
    found: List[Req] = []

    req_txt = directory / Filenames.REQUIREMENTS
    if req_txt.is_file():
        found.extend(parse_requirements_file(req_txt))

    pyproject = directory / Filenames.PYPROJECT
    if pyproject.is_file():
        # Nested metadata is discarded, so skip the git identity lookup
        nested = load_config(pyproject, author_fallback=list)
        if nested is not None:
            # Only runtime reqs are kept, so only they need expanding
            nested.reqs.extend(collect_path_subreqs(nested.reqs, directory, chain, strict))
            found.extend(nested.reqs)

    # Check for metadata of a built wheel
    found.extend(find_dist_info_requirements(directory))

    # Rebase relative paths onto the directory that declared them
    for req in found:
        if req.path is not None and not Path(req.path).is_absolute():
            req.path = str((directory / req.path).resolve())

    logger.debug(f"Discovered {len(found)} requirements in {directory}")
    return found
