"""
Project Config
==============

The canonical Config model and the engine that assembles it from the
Poetry and pyflow sections of a pyproject.toml.
"""

from .model import Config
from .merge import (
    POETRY_FIELDS,
    PYFLOW_FIELDS,
    FieldRule,
    apply_field_rules,
    load_config,
    merge_sections,
)

__all__ = [
    "Config",
    "FieldRule",
    "POETRY_FIELDS",
    "PYFLOW_FIELDS",
    "apply_field_rules",
    "merge_sections",
    "load_config",
]
