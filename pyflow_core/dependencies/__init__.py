"""
pyflow Dependency Model
=======================

Provides the primitives every descriptor format is mapped onto:
- Version parsing and ordering
- Constraint parsing (single and multiple) and satisfaction checks
- The Req dependency edge and pip-style requirement line parsing
"""

from .requirement import Req, parse_requirement_line
from .version import (
    Constraint,
    Version,
    VersionOperator,
    parse_constraint,
    parse_constraints,
    parse_version,
)

__all__ = [
    # Version utilities
    "Version",
    "VersionOperator",
    "Constraint",
    "parse_version",
    "parse_constraint",
    "parse_constraints",
    # Requirements
    "Req",
    "parse_requirement_line",
]
