"""
requirements.txt Parsing
========================

Parses plain requirement lists. Handles:
- Comments and blank lines
- Inline comments ("requests>=2.0  # http")
- Line continuations ending in a backslash
- pip option lines (-r, -c, -e, --index-url, ...), which are skipped
"""

import re
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from ..common.errors import DescriptorError
from ..common.logger import get_logger
from ..dependencies import Req, parse_requirement_line

logger = get_logger(__name__)

_INLINE_COMMENT_RE = re.compile(r"(^|\s)#.*$")
# Per-requirement options such as --hash=sha256:... run to the end of the line
_REQ_OPTION_RE = re.compile(r"\s+--\S.*$")


def parse_requirements_string(
    content: str,
    source: Optional[Union[str, Path]] = None,
) -> List[Req]:
    """
    Parse requirements from a string (e.g., requirements.txt content).

    Args:
        content: Multi-line string with requirements
        source: File the content came from, for error messages

    Returns:
        List of Req objects

    Raises:
        DescriptorError: If a line cannot be parsed
    """
    requirements: List[Req] = []

    for lineno, line in _logical_lines(content):
        line = _INLINE_COMMENT_RE.sub("", line).strip()
        if not line:
            continue

        # Skip -r, -e, --index-url, etc.
        if line.startswith("-"):
            logger.debug(f"Skipping option line {lineno}: {line}")
            continue

        stripped = _REQ_OPTION_RE.sub("", line)
        if stripped != line:
            logger.debug(f"Dropping options on line {lineno}: {line[len(stripped):].strip()}")
            line = stripped

        try:
            requirements.append(parse_requirement_line(line))
        except ValueError as e:
            raise DescriptorError(f"line {lineno}: {e}", source=source) from e

    return requirements


def parse_requirements_file(file_path: Union[str, Path]) -> List[Req]:
    """
    Parse requirements from a file.

    Args:
        file_path: Path to requirements.txt or similar file

    Returns:
        List of Req objects

    Raises:
        FileNotFoundError: If file doesn't exist
        DescriptorError: If a line cannot be parsed
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Requirements file not found: {file_path}")

    content = file_path.read_text(encoding="utf-8")
    requirements = parse_requirements_string(content, source=file_path)
    logger.info(f"Loaded {len(requirements)} requirements from {file_path}")
    return requirements


def _logical_lines(content: str) -> Iterator[Tuple[int, str]]:
    """Yield (first line number, text) with backslash continuations joined."""
    buffer = ""
    start = 0
    for lineno, raw in enumerate(content.splitlines(), start=1):
        if not buffer:
            start = lineno
        if raw.rstrip().endswith("\\"):
            buffer += raw.rstrip()[:-1] + " "
            continue
        yield start, buffer + raw
        buffer = ""
    if buffer:
        yield start, buffer
