"""
Format Adapters
===============

One adapter per descriptor dialect, each mapping raw syntax onto Req and
Config fragments:
- pyproject.toml tables ([tool.pyflow], [tool.poetry]) -> see pyflow_core.config
- Pipfile ([packages], [dev-packages])
- requirements.txt
- Installed wheel metadata (<name>-<version>.dist-info/METADATA)
"""

from .pipfile import load_pipfile
from .pyproject import parse_dependency_table, read_toml
from .requirements_txt import parse_requirements_file, parse_requirements_string
from .wheel_metadata import (
    WheelMetadata,
    find_dist_info_requirements,
    match_dist_info,
    parse_metadata,
)

__all__ = [
    "read_toml",
    "parse_dependency_table",
    "load_pipfile",
    "parse_requirements_string",
    "parse_requirements_file",
    "WheelMetadata",
    "match_dist_info",
    "parse_metadata",
    "find_dist_info_requirements",
]
