"""
Descriptor Section Schemas
==========================

Pydantic models for the raw tables found in descriptor files. They check
the *shape* of the decoded TOML (types, dependency table keys) before the
adapters map it onto the canonical model.

Design Principles:
- Pure validation: receives dicts decoded by tomllib, returns typed objects
- No file I/O: reading files is the adapters' job
- Lenient: unknown keys are accepted so newer tool versions still load

Usage:
    from pyflow_core.formats.schema import PyprojectDocument, validate_document

    document = validate_document(PyprojectDocument, data, source="pyproject.toml")
    document.tool.pyflow.dependencies
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing_extensions import Self

from ..common.errors import DescriptorError

# =============================================================================
# DEPENDENCY TABLES
# =============================================================================


class DependencyTable(BaseModel):
    """
    Table form of a dependency declaration.

    Example:
        requests = { version = ">=2.0", extras = ["socks"], python = ">=3.7" }
        mylib = { path = "../mylib" }

    The version string may be given as ``version`` or ``constrs``. A
    dependency names at most one source: ``path`` or ``git``.
    """

    version: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("version", "constrs")
    )
    extras: Optional[List[str]] = None
    path: Optional[str] = None
    git: Optional[str] = None
    python: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="after")
    def validate_single_source(self) -> Self:
        """Reject dependencies that are both local and VCS"""
        if self.path is not None and self.git is not None:
            raise ValueError(
                f"dependency declares both path ('{self.path}') and git ('{self.git}'); "
                f"use one or the other"
            )
        return self


DependencySpec = Union[str, DependencyTable]
"""Shorthand version string or table form"""

DependencyMap = Dict[str, DependencySpec]


# =============================================================================
# PYPROJECT.TOML SECTIONS
# =============================================================================


class _ProjectSection(BaseModel):
    """Fields shared by the [tool.pyflow] and [tool.poetry] sections."""

    name: Optional[str] = None
    version: Optional[str] = None
    authors: Optional[List[str]] = None
    license: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None
    repository: Optional[str] = None
    classifiers: Optional[List[str]] = None
    keywords: Optional[List[str]] = None
    scripts: Optional[Dict[str, str]] = None
    dependencies: Optional[DependencyMap] = None
    dev_dependencies: Optional[DependencyMap] = Field(
        default=None, validation_alias=AliasChoices("dev-dependencies", "dev_dependencies")
    )

    model_config = ConfigDict(extra="allow")


class PyflowSection(_ProjectSection):
    """The native [tool.pyflow] section."""

    py_version: Optional[str] = None
    python_requires: Optional[str] = None
    package_url: Optional[str] = None
    repo_url: Optional[str] = None
    readme: Optional[str] = None
    build: Optional[str] = None
    extras: Optional[Dict[str, str]] = None


class PoetryGroup(BaseModel):
    """A [tool.poetry.group.<name>] table."""

    dependencies: DependencyMap = {}

    model_config = ConfigDict(extra="allow")


class PoetrySection(_ProjectSection):
    """
    The [tool.poetry] section.

    Poetry allows a few richer shapes than pyflow: ``readme`` may be a list,
    ``build`` a table with a ``script`` key, extras map to package lists and
    a script may be a table with a ``callable`` or ``reference`` key.
    """

    readme: Optional[Union[str, List[str]]] = None
    build: Optional[Union[str, Dict[str, Any]]] = None
    extras: Optional[Dict[str, Union[str, List[str]]]] = None
    scripts: Optional[Dict[str, Union[str, Dict[str, Any]]]] = None
    group: Optional[Dict[str, PoetryGroup]] = None

    def dev_dependency_map(self) -> Optional[DependencyMap]:
        """Dev dependencies from ``dev-dependencies`` or the ``dev`` group."""
        if self.dev_dependencies is not None:
            return self.dev_dependencies
        if self.group and "dev" in self.group:
            return self.group["dev"].dependencies
        return None


class ToolTable(BaseModel):
    """The [tool] table; other tools' sections are ignored."""

    pyflow: Optional[PyflowSection] = None
    poetry: Optional[PoetrySection] = None

    model_config = ConfigDict(extra="allow")


class PyprojectDocument(BaseModel):
    """A decoded pyproject.toml."""

    tool: ToolTable = Field(default_factory=ToolTable)

    model_config = ConfigDict(extra="allow")


# =============================================================================
# PIPFILE
# =============================================================================


class PipfileDocument(BaseModel):
    """A decoded Pipfile; only the package tables are read."""

    packages: Optional[DependencyMap] = None
    dev_packages: Optional[DependencyMap] = Field(
        default=None, validation_alias=AliasChoices("dev-packages", "dev_packages")
    )

    model_config = ConfigDict(extra="allow")


# =============================================================================
# VALIDATION HELPER
# =============================================================================

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_document(
    model: Type[ModelT],
    data: Dict[str, Any],
    source: Optional[Union[str, Path]] = None,
) -> ModelT:
    """
    Validate decoded descriptor data against a section schema.

    Raises:
        DescriptorError: With every schema violation listed as ``location: message``
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise DescriptorError(problems, source=source) from e
