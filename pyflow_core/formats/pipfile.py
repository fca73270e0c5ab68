"""Pipfile adapter: [packages] and [dev-packages] only, no metadata."""

from pathlib import Path
from typing import Optional, Union

from ..common.logger import get_logger
from ..config.model import Config
from .pyproject import parse_dependency_table, read_toml
from .schema import PipfileDocument, validate_document

logger = get_logger(__name__)


def load_pipfile(path: Union[str, Path]) -> Optional[Config]:
    """
    Load a Pipfile into a Config holding only reqs and dev_reqs.

    Returns:
        Config, or None if the file does not exist

    Raises:
        DescriptorError: If the file is malformed
    """
    data = read_toml(path)
    if data is None:
        return None

    document = validate_document(PipfileDocument, data, source=path)
    result = Config()

    if document.packages is not None:
        result.reqs = parse_dependency_table(document.packages, source=path)
    if document.dev_packages is not None:
        result.dev_reqs = parse_dependency_table(document.dev_packages, source=path)

    logger.info(f"Loaded {len(result.reqs)} requirements from {path}")
    return result
