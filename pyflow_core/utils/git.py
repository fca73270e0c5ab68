"""Local source-control identity lookup."""

import subprocess
from typing import List, Optional

from ..common.logger import get_logger

logger = get_logger(__name__)


def _git_config(key: str) -> Optional[str]:
    try:
        result = subprocess.run(
            ["git", "config", "--get", key],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"git unavailable while reading {key}: {e}")
        return None
    if result.returncode != 0:
        return None
    value = result.stdout.strip()
    return value or None


def get_git_author() -> List[str]:
    """
    Get the local git user as an authors list.

    Returns:
        ["Name <email>"], ["Name"] without an email, or [] when git or
        the identity is not configured
    """
    name = _git_config("user.name")
    if not name:
        return []
    email = _git_config("user.email")
    return [f"{name} <{email}>" if email else name]
