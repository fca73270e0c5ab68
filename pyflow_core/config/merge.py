"""
Manifest Merging
================

Assembles one Config from a pyproject.toml that may hold both a
[tool.poetry] and a [tool.pyflow] section.

Precedence Rules:
1. Poetry fields are applied first into a fresh Config
2. pyflow fields are applied second and overwrite, field by field
3. A field absent from a section leaves the earlier value untouched
4. Dependency tables are never merged: a pyflow ``dependencies`` table
   replaces Poetry's reqs entirely (same for dev dependencies)
5. A Poetry dependency named ``python`` (any case) sets ``py_version``
   instead of becoming a Req
6. An empty pyflow ``authors`` list falls back to the local git identity

Field copying is driven by the POETRY_FIELDS / PYFLOW_FIELDS tables so the
precedence can be audited in one place.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel

from ..common.errors import DescriptorError
from ..common.logger import get_logger
from ..common.settings import get_settings
from ..dependencies import Req, parse_version
from ..formats.pyproject import parse_dependency_table, read_toml
from ..formats.schema import PoetrySection, PyflowSection, PyprojectDocument, validate_document
from ..utils.git import get_git_author
from .model import Config

logger = get_logger(__name__)

AuthorFallback = Callable[[], List[str]]


# ============================================================================
# Field Override Tables
# ============================================================================


@dataclass(frozen=True)
class FieldRule:
    """
    Copy ``section.<source>`` onto ``config.<target>`` when it is present.

    Attributes:
        source: Attribute name on the section model
        target: Attribute name on Config (defaults to ``source``)
        convert: Optional conversion; a ValueError becomes a DescriptorError
    """

    source: str
    target: Optional[str] = None
    convert: Optional[Callable[[Any], Any]] = None

    @property
    def config_field(self) -> str:
        return self.target or self.source


def _readme(value: Union[str, List[str]]) -> Optional[str]:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _build_script(value: Union[str, Dict[str, Any]]) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("script")
    return value


def _poetry_extras(value: Dict[str, Union[str, List[str]]]) -> Dict[str, str]:
    return {k: ", ".join(v) if isinstance(v, list) else v for k, v in value.items()}


def _poetry_scripts(value: Dict[str, Union[str, Dict[str, Any]]]) -> Dict[str, str]:
    scripts: Dict[str, str] = {}
    for name, entry in value.items():
        if isinstance(entry, dict):
            target = entry.get("callable") or entry.get("reference")
            if not isinstance(target, str):
                logger.warning(f"Skipping Poetry script {name!r}: no callable or reference")
                continue
            entry = target
        scripts[name] = entry
    return scripts


POETRY_FIELDS: Sequence[FieldRule] = (
    FieldRule("name"),
    FieldRule("authors"),
    FieldRule("license"),
    FieldRule("homepage"),
    FieldRule("description"),
    FieldRule("repository"),
    FieldRule("readme", convert=_readme),
    FieldRule("build", convert=_build_script),
    FieldRule("classifiers"),
    FieldRule("keywords"),
    FieldRule("extras", convert=_poetry_extras),
    FieldRule("scripts", convert=_poetry_scripts),
    FieldRule("version", convert=parse_version),
)

# authors is handled separately because of the git identity fallback
PYFLOW_FIELDS: Sequence[FieldRule] = (
    FieldRule("name"),
    FieldRule("license"),
    FieldRule("homepage"),
    FieldRule("description"),
    FieldRule("repository"),
    FieldRule("repo_url"),
    FieldRule("classifiers"),
    FieldRule("keywords"),
    FieldRule("readme"),
    FieldRule("build"),
    FieldRule("extras"),
    FieldRule("scripts"),
    FieldRule("python_requires"),
    FieldRule("package_url"),
    FieldRule("version", convert=parse_version),
    FieldRule("py_version", convert=parse_version),
)


def apply_field_rules(
    config: Config,
    section: BaseModel,
    rules: Sequence[FieldRule],
    source: Optional[Union[str, Path]] = None,
) -> Config:
    """
    Overwrite every Config field whose section value is present.

    Raises:
        DescriptorError: If a conversion (e.g. version parsing) fails
    """
    for rule in rules:
        value = getattr(section, rule.source)
        if value is None:
            continue
        if rule.convert is not None:
            try:
                value = rule.convert(value)
            except ValueError as e:
                raise DescriptorError(f"`{rule.source}`: {e}", source=source) from e
        elif isinstance(value, (list, dict)):
            value = value.copy()
        setattr(config, rule.config_field, value)
    return config


# ============================================================================
# Section Passes
# ============================================================================


def apply_poetry_section(
    config: Config,
    section: PoetrySection,
    source: Optional[Union[str, Path]] = None,
) -> Config:
    """First pass: [tool.poetry]."""
    apply_field_rules(config, section, POETRY_FIELDS, source)

    if section.dependencies is not None:
        reqs: List[Req] = []
        for req in parse_dependency_table(section.dependencies, source):
            if req.is_python():
                if req.constraints:
                    config.py_version = req.constraints[0].version
                continue
            reqs.append(req)
        config.reqs = reqs

    dev_deps = section.dev_dependency_map()
    if dev_deps is not None:
        config.dev_reqs = parse_dependency_table(dev_deps, source)

    return config


def apply_pyflow_section(
    config: Config,
    section: PyflowSection,
    source: Optional[Union[str, Path]] = None,
    author_fallback: Optional[AuthorFallback] = None,
) -> Config:
    """Second pass: [tool.pyflow], overwriting whatever the first pass set."""
    apply_field_rules(config, section, PYFLOW_FIELDS, source)

    if section.authors is not None:
        config.authors = list(section.authors) if section.authors else _fallback_authors(author_fallback)

    if section.dependencies is not None:
        config.reqs = parse_dependency_table(section.dependencies, source)
    if section.dev_dependencies is not None:
        config.dev_reqs = parse_dependency_table(section.dev_dependencies, source)

    return config


def _fallback_authors(author_fallback: Optional[AuthorFallback]) -> List[str]:
    if author_fallback is not None:
        return list(author_fallback())
    if not get_settings().git_author_fallback:
        return []
    authors = get_git_author()
    if not authors:
        logger.debug("authors is empty and no git identity is configured")
    return authors


def merge_sections(
    poetry: Optional[PoetrySection],
    pyflow: Optional[PyflowSection],
    source: Optional[Union[str, Path]] = None,
    author_fallback: Optional[AuthorFallback] = None,
) -> Config:
    """
    Build a Config from the two pyproject dialects.

    Args:
        poetry: Validated [tool.poetry] section, if present
        pyflow: Validated [tool.pyflow] section, if present
        source: Manifest path, for error messages
        author_fallback: Called when pyflow ``authors`` is an empty list;
            defaults to the local git identity

    Returns:
        The assembled Config
    """
    result = Config()

    # Parse Poetry first, since pyflow wins if there's a conflict.
    if poetry is not None:
        apply_poetry_section(result, poetry, source)
    if pyflow is not None:
        apply_pyflow_section(result, pyflow, source, author_fallback)

    return result


def load_config(
    path: Union[str, Path],
    author_fallback: Optional[AuthorFallback] = None,
) -> Optional[Config]:
    """
    Pull config data from a pyproject.toml.

    Path dependencies are not expanded here; see
    ``pyflow_core.resolver.populate_path_subreqs``.

    Args:
        path: pyproject.toml to read
        author_fallback: See ``merge_sections``

    Returns:
        Config, or None if the file does not exist

    Raises:
        DescriptorError: If the file or any value in it is malformed
    """
    data = read_toml(path)
    if data is None:
        logger.debug(f"No manifest at {path}")
        return None

    document = validate_document(PyprojectDocument, data, source=path)
    config = merge_sections(
        document.tool.poetry,
        document.tool.pyflow,
        source=path,
        author_fallback=author_fallback,
    )

    logger.info(
        f"Loaded {path}: {len(config.reqs)} requirements, {len(config.dev_reqs)} dev requirements"
    )
    return config
