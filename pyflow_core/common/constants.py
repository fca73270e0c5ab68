"""
pyflow Shared Constants

Single source of truth for file names, defaults and patterns used while
discovering and writing project descriptors.

Usage:
    from pyflow_core.common.constants import Filenames, Defaults

    manifest = project_dir / Filenames.PYPROJECT
"""


class Filenames:
    """Descriptor and layout file names."""

    PYPROJECT = "pyproject.toml"
    LOCKFILE = "pyflow.lock"
    PIPFILE = "Pipfile"
    REQUIREMENTS = "requirements.txt"
    METADATA = "METADATA"
    PYPACKAGES = "__pypackages__"


class Defaults:
    """Values written for fields a new project leaves unset."""

    PY_VERSION = "3.8"
    """Interpreter version written when the config has none"""

    PROJECT_VERSION = "0.1.0"
    """Project version written when the config has none"""

    PYTHON_SENTINEL = "python"
    """Dependency name that expresses the interpreter requirement"""


class Patterns:
    """Regex patterns for names found on disk."""

    DIST_INFO = r"^(.*?)-(.*?)\.dist-info$"
    """Installed wheel metadata folder: <name>-<version>.dist-info"""


class EnvVars:
    """Environment variables read by the settings object."""

    PREFIX = "PYFLOW_"
    LOG_LEVEL = "PYFLOW_LOG_LEVEL"
    STRICT_CYCLES = "PYFLOW_STRICT_CYCLES"
    GIT_AUTHOR_FALLBACK = "PYFLOW_GIT_AUTHOR_FALLBACK"
