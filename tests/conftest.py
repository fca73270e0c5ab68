"""Pytest configuration and fixtures for pyflow_core tests."""

from pathlib import Path
from textwrap import dedent

import pytest

from pyflow_core.common.settings import get_settings


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that build a project tree on disk"
    )
    config.addinivalue_line(
        "markers", "requires_git: marks tests that shell out to git"
    )


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from PYFLOW_* variables of the calling shell."""
    for var in ("PYFLOW_LOG_LEVEL", "PYFLOW_STRICT_CYCLES", "PYFLOW_GIT_AUTHOR_FALLBACK"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def no_git_identity(monkeypatch):
    """Keep the authors fallback off the machine's real git config."""
    monkeypatch.setattr("pyflow_core.config.merge.get_git_author", lambda: [])


@pytest.fixture
def write_file():
    """Write dedented text to a path, creating parent directories."""

    def _write(path: Path, content: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write
