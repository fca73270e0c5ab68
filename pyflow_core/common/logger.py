"""
Logging helpers.

Modules call ``get_logger(__name__)``; nothing is printed until an
application calls ``configure_logging``.
"""

import logging
from typing import Optional

from .settings import get_settings

ROOT_LOGGER_NAME = "pyflow_core"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the package hierarchy."""
    return logging.getLogger(name)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to PYFLOW_LOG_LEVEL.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level_name = (level or get_settings().log_level).upper()
    logger.setLevel(level_name)

    if not any(getattr(h, "_pyflow_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pyflow_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
