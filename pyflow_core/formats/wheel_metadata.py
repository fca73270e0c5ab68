"""
Installed Wheel Metadata
========================

Reads ``<name>-<version>.dist-info/METADATA`` files. The file uses RFC 822
headers, so the stdlib email parser does the tokenizing; each
``Requires-Dist`` header is a pip-style requirement line.
"""

import re
from dataclasses import dataclass, field
from email.parser import Parser
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..common.constants import Filenames, Patterns
from ..common.errors import DescriptorError
from ..common.logger import get_logger
from ..dependencies import Req, parse_requirement_line
from ..utils.fs import find_folders

logger = get_logger(__name__)

DIST_INFO_RE = re.compile(Patterns.DIST_INFO)


@dataclass
class WheelMetadata:
    """The parts of a METADATA file relevant to dependency discovery."""

    name: Optional[str] = None
    version: Optional[str] = None
    summary: Optional[str] = None
    requires_python: Optional[str] = None
    provides_extra: List[str] = field(default_factory=list)
    requires_dist: List[Req] = field(default_factory=list)


def match_dist_info(folder_name: str) -> Optional[Tuple[str, str]]:
    """Return (name, version) if the folder is a dist-info directory."""
    match = DIST_INFO_RE.match(folder_name)
    if not match:
        return None
    return match.group(1), match.group(2)


def parse_metadata(path: Union[str, Path]) -> WheelMetadata:
    """
    Parse a METADATA file.

    Args:
        path: Path to the METADATA file

    Returns:
        WheelMetadata with requires_dist parsed into Req values

    Raises:
        DescriptorError: If a Requires-Dist entry cannot be parsed
    """
    file_path = Path(path)
    content = file_path.read_text(encoding="utf-8", errors="replace")
    headers = Parser().parsestr(content, headersonly=True)

    requires_dist: List[Req] = []
    for entry in headers.get_all("Requires-Dist") or []:
        try:
            requires_dist.append(parse_requirement_line(entry))
        except ValueError as e:
            raise DescriptorError(f"Requires-Dist '{entry}': {e}", source=file_path) from e

    return WheelMetadata(
        name=headers.get("Name"),
        version=headers.get("Version"),
        summary=headers.get("Summary"),
        requires_python=headers.get("Requires-Python"),
        provides_extra=list(headers.get_all("Provides-Extra") or []),
        requires_dist=requires_dist,
    )


def find_dist_info_requirements(directory: Union[str, Path]) -> List[Req]:
    """
    Collect the declared requirements of every wheel unpacked in a directory.

    Only immediate children are scanned. Folders not named like
    ``<name>-<version>.dist-info`` are skipped, as are dist-info folders
    without a METADATA file.
    """
    directory = Path(directory)
    result: List[Req] = []

    for folder_name in find_folders(directory):
        match = match_dist_info(folder_name)
        if match is None:
            continue

        metadata_path = directory / folder_name / Filenames.METADATA
        if not metadata_path.is_file():
            logger.debug(f"No {Filenames.METADATA} in {directory / folder_name}, skipping")
            continue

        metadata = parse_metadata(metadata_path)
        logger.debug(
            f"Found {len(metadata.requires_dist)} requirements in {match[0]} {match[1]} metadata"
        )
        result.extend(metadata.requires_dist)

    return result
