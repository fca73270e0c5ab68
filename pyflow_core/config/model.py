"""The canonical project descriptor."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from ..dependencies import Req, Version


@dataclass
class Config:
    """
    One project's full descriptor, assembled from pyproject.toml, Pipfile or
    requirements.txt.

    Every field is optional; ``reqs`` (runtime) and ``dev_reqs``
    (development only) default to empty. Duplicate names inside a list are
    allowed, since merging several sources can legitimately produce them.
    """

    name: Optional[str] = None
    py_version: Optional[Version] = None
    reqs: List[Req] = field(default_factory=list)
    dev_reqs: List[Req] = field(default_factory=list)
    version: Optional[Version] = None
    authors: List[str] = field(default_factory=list)
    license: Optional[str] = None
    extras: Dict[str, str] = field(default_factory=dict)
    description: Optional[str] = None
    classifiers: List[str] = field(default_factory=list)  # https://pypi.org/classifiers/
    keywords: List[str] = field(default_factory=list)
    homepage: Optional[str] = None
    repository: Optional[str] = None
    repo_url: Optional[str] = None
    package_url: Optional[str] = None
    readme: Optional[str] = None
    build: Optional[str] = None  # A python file used to build non-python extensions
    scripts: Dict[str, str] = field(default_factory=dict)
    python_requires: Optional[str] = None

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        author_fallback: Optional[Callable[[], List[str]]] = None,
    ) -> Optional["Config"]:
        """Load a pyproject.toml; ``None`` if the file does not exist."""
        from .merge import load_config

        return load_config(path, author_fallback=author_fallback)

    @classmethod
    def from_pipfile(cls, path: Union[str, Path]) -> Optional["Config"]:
        """Load a Pipfile; ``None`` if the file does not exist."""
        from ..formats.pipfile import load_pipfile

        return load_pipfile(path)

    def populate_path_subreqs(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        strict: Optional[bool] = None,
    ) -> "Config":
        """Append the requirements of local path dependencies to reqs/dev_reqs."""
        from ..resolver import populate_path_subreqs

        return populate_path_subreqs(self, base_dir=base_dir, strict=strict)

    def write_file(self, path: Union[str, Path]) -> Path:
        """Write a new pyproject.toml; refuses to overwrite."""
        from ..serializer import write_config

        return write_config(self, path)
