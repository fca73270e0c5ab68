"""
pyflow Common

Errors, constants, settings and logging shared by every other module.
"""

from .settings import Settings, get_settings
from .constants import Defaults, EnvVars, Filenames, Patterns
from .errors import DependencyCycleError, DescriptorError, OutputExistsError, PyflowError
from .logger import configure_logging, get_logger

__all__ = [
    # Errors
    "PyflowError",
    "DescriptorError",
    "OutputExistsError",
    "DependencyCycleError",
    # Constants
    "Defaults",
    "EnvVars",
    "Filenames",
    "Patterns",
    # Settings
    "Settings",
    "get_settings",
    # Logger
    "get_logger",
    "configure_logging",
]
