"""pyflow core - project descriptor resolution.

This package reads the manifests a Python project may carry and turns them
into one canonical Config:
- pyproject.toml in the native [tool.pyflow] and the [tool.poetry] dialects
- Pipfile
- requirements.txt
- metadata of wheels vendored in a local path dependency

Example:
    >>> from pyflow_core import Config, find_project
    >>> project = find_project()
    >>> [req.to_pip_string() for req in project.config.reqs]
    >>> Config(name="demo").write_file("new/pyproject.toml")

Package Structure:
    pyflow_core/
    ├── common/         - Errors, constants, settings, logging
    ├── dependencies/   - Version, Constraint and Req primitives
    ├── formats/        - One adapter per descriptor dialect
    ├── config/         - The Config model and the Poetry/pyflow merge
    ├── resolver.py     - Transitive expansion of local path dependencies
    ├── serializer.py   - Writes a Config as a new pyproject.toml
    ├── project.py      - Locates and loads the enclosing project
    └── utils/          - Directory listing and git identity
"""

from .common import (
    DependencyCycleError,
    DescriptorError,
    OutputExistsError,
    PyflowError,
    configure_logging,
    get_settings,
)
from .config import Config, load_config, merge_sections
from .dependencies import (
    Constraint,
    Req,
    Version,
    VersionOperator,
    parse_constraint,
    parse_constraints,
    parse_requirement_line,
    parse_version,
)
from .formats import load_pipfile, parse_requirements_file, parse_requirements_string
from .project import PresentConfig, find_project
from .resolver import populate_path_subreqs
from .serializer import render_config, write_config

__version__ = "0.1.0"

__all__ = [
    # Errors
    "PyflowError",
    "DescriptorError",
    "OutputExistsError",
    "DependencyCycleError",
    # Primitives
    "Version",
    "VersionOperator",
    "Constraint",
    "Req",
    "parse_version",
    "parse_constraint",
    "parse_constraints",
    "parse_requirement_line",
    # Loading
    "Config",
    "load_config",
    "merge_sections",
    "load_pipfile",
    "parse_requirements_string",
    "parse_requirements_file",
    "populate_path_subreqs",
    # Writing
    "render_config",
    "write_config",
    # Project
    "PresentConfig",
    "find_project",
    # Ambient
    "configure_logging",
    "get_settings",
]
