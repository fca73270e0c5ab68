"""TOML quoting for hand-rendered descriptor lines."""

import json
import re

_BARE_KEY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def toml_str(value: object) -> str:
    """Quote a value as a TOML basic string (JSON string escapes are valid TOML)."""
    return json.dumps(str(value), ensure_ascii=False)


def toml_key(key: str) -> str:
    """Render a table key, quoting it only when it is not a bare key."""
    return key if _BARE_KEY_RE.match(key) else toml_str(key)
