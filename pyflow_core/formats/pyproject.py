"""
TOML Descriptor Reading
=======================

Reads pyproject.toml / Pipfile documents and maps dependency tables onto
``Req`` values. Both declaration shapes are accepted and produce equal
results:

    requests = ">=2.0, <3.0"
    requests = { version = ">=2.0, <3.0" }
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..common.errors import DescriptorError
from ..common.logger import get_logger
from ..dependencies import Constraint, Req, parse_constraints
from .schema import DependencyMap, DependencyTable

logger = get_logger(__name__)


def read_toml(path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """
    Decode a TOML descriptor.

    Args:
        path: File to read

    Returns:
        The decoded document, or None if the file does not exist or cannot be read

    Raises:
        DescriptorError: If the file is not valid TOML
    """
    file_path = Path(path)
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        raise DescriptorError(f"invalid TOML ({e})", source=file_path) from e
    except OSError as e:
        logger.warning(f"Could not read {file_path}: {e}")
        return None


def parse_dependency_table(
    deps: DependencyMap,
    source: Optional[Union[str, Path]] = None,
) -> List[Req]:
    """
    Map a validated dependency table onto Req values, in table order.

    Args:
        deps: Dependency name -> version string or DependencyTable
        source: Descriptor path, for error messages

    Returns:
        List of Req objects

    Raises:
        DescriptorError: If a version or python constraint cannot be parsed
    """
    result: List[Req] = []

    for name, data in deps.items():
        if isinstance(data, str):
            result.append(Req(name=name, constraints=_constraints(name, data, source)))
            continue

        table: DependencyTable = data
        req = Req(
            name=name,
            constraints=_constraints(name, table.version, source) if table.version else [],
            install_with_extras=list(table.extras) if table.extras is not None else None,
            path=table.path,
            git=table.git,
        )
        if table.python is not None:
            req.python_version = _constraints(name, table.python, source)
        result.append(req)

    logger.debug(f"Parsed {len(result)} dependencies from {source or 'table'}")
    return result


def _constraints(
    name: str,
    text: str,
    source: Optional[Union[str, Path]],
) -> List[Constraint]:
    try:
        return parse_constraints(text)
    except ValueError as e:
        raise DescriptorError(f"constraints for `{name}`: {text} ({e})", source=source) from e
