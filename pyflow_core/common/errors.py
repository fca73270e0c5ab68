"""
pyflow Error Types
==================

Every failure this package reports on purpose derives from ``PyflowError``,
so callers that want to fall back to another descriptor format only need a
single ``except`` clause.

- DescriptorError: a descriptor file (or a string inside it) could not be parsed
- OutputExistsError: the serializer was asked to overwrite an existing file
- DependencyCycleError: local path dependencies point back at each other
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union


class PyflowError(Exception):
    """Base class for all pyflow errors."""


class DescriptorError(PyflowError):
    """
    Raised when a descriptor is malformed.

    Covers unparseable TOML, unparseable version or constraint strings,
    dependency tables of the wrong shape and broken wheel metadata. The whole
    load operation is aborted; no partial Config is returned.
    """

    def __init__(self, detail: str, source: Optional[Union[str, Path]] = None):
        self.detail = detail
        self.source = str(source) if source is not None else None

        if self.source:
            message = f"Problem parsing `{self.source}`: {detail}"
        else:
            message = f"Problem parsing descriptor: {detail}"
        super().__init__(message)


class OutputExistsError(PyflowError):
    """Raised when the serializer target already exists."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(
            f"`{self.path}` already exists\n"
            f"Refusing to overwrite it. Remove the file or choose another path."
        )


class DependencyCycleError(PyflowError):
    """
    Raised when path dependencies form a cycle and strict cycle handling is on.

    ``chain`` holds the directories being expanded, outermost first, ending
    with the directory that was reached a second time.
    """

    def __init__(self, chain: Sequence[Path]):
        self.chain: List[Path] = list(chain)
        rendered = "\n  -> ".join(str(p) for p in self.chain)
        super().__init__(
            f"Cycle detected in local path dependencies:\n  {rendered}\n"
            f"\nHow to resolve:\n"
            f"  1. Remove the `path` dependency that points back up the chain\n"
            f"  2. Or unset PYFLOW_STRICT_CYCLES to skip repeated directories"
        )
