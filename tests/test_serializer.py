"""
Tests for writing a Config as a new pyproject.toml.
"""

import tomllib

import pytest

from pyflow_core.common.errors import OutputExistsError
from pyflow_core.config import Config, load_config
from pyflow_core.dependencies import Req, parse_constraints, parse_version
from pyflow_core.serializer import render_config, write_config

# ============================================================================
# Rendering Tests
# ============================================================================


class TestRenderConfig:
    """Tests for render_config."""

    def test_empty_config(self):
        """An empty Config gets the defaults and all four sections."""
        assert render_config(Config()) == (
            "\n"
            "[tool.pyflow]\n"
            'name = ""\n'
            'py_version = "3.8"\n'
            'version = "0.1.0"\n'
            "\n"
            "[tool.pyflow.scripts]\n"
            "\n"
            "[tool.pyflow.dependencies]\n"
            "\n"
            "[tool.pyflow.dev-dependencies]\n"
            "\n"
        )

    def test_output_is_valid_toml(self):
        """Rendered text parses back with tomllib."""
        config = Config(
            name="demo",
            py_version=parse_version("3.11.4"),
            version=parse_version("2.0"),
            authors=['Ada "The Countess" <ada@example.com>', "Grace"],
            description="Line one\nline two",
            homepage="https://example.com",
            scripts={"demo": "demo.cli:main"},
            reqs=[Req("requests", constraints=parse_constraints(">=2.0,<3.0"))],
            dev_reqs=[Req("pytest")],
        )

        doc = tomllib.loads(render_config(config))["tool"]["pyflow"]

        assert doc["name"] == "demo"
        assert doc["py_version"] == "3.11"
        assert doc["version"] == "2.0"
        assert doc["authors"] == ['Ada "The Countess" <ada@example.com>', "Grace"]
        assert doc["description"] == "Line one\nline two"
        assert doc["homepage"] == "https://example.com"
        assert doc["scripts"] == {"demo": "demo.cli:main"}
        assert doc["dependencies"] == {"requests": ">=2.0, <3.0"}
        assert doc["dev-dependencies"] == {"pytest": "*"}

    def test_unset_optional_fields_omitted(self):
        """authors, description and homepage only appear when set."""
        text = render_config(Config(name="demo"))
        assert "authors" not in text
        assert "description" not in text
        assert "homepage" not in text

    def test_dependencies_sorted(self):
        """Dependencies and scripts are written in name order."""
        config = Config(
            reqs=[Req("zeta"), Req("Alpha"), Req("mid", path="../mid")],
            scripts={"z": "z:main", "a": "a:main"},
        )
        text = render_config(config)

        deps = text.split("[tool.pyflow.dependencies]\n")[1].split("\n\n")[0].splitlines()
        assert deps == ['Alpha = "*"', 'mid = { path = "../mid" }', 'zeta = "*"']
        assert text.index('a = "a:main"') < text.index('z = "z:main"')

    def test_deterministic(self):
        """Rendering the same Config twice gives the same text."""
        config = Config(name="demo", reqs=[Req("b"), Req("a")])
        assert render_config(config) == render_config(config)


# ============================================================================
# Writing Tests
# ============================================================================


class TestWriteConfig:
    """Tests for write_config."""

    def test_write(self, tmp_path):
        """Test writing a new file."""
        target = tmp_path / "pyproject.toml"
        written = write_config(Config(name="demo"), target)

        assert written == target
        assert 'name = "demo"' in target.read_text(encoding="utf-8")

    def test_refuses_to_overwrite(self, tmp_path):
        """A second write to the same path fails and leaves the file alone."""
        target = tmp_path / "pyproject.toml"
        Config(name="first").write_file(target)
        before = target.read_text(encoding="utf-8")

        with pytest.raises(OutputExistsError) as exc_info:
            Config(name="second").write_file(target)

        assert exc_info.value.path == target
        assert target.read_text(encoding="utf-8") == before

    def test_round_trip(self, tmp_path, write_file):
        """A manifest read, written and read again keeps its dependencies."""
        source = write_file(
            tmp_path / "src" / "pyproject.toml",
            """
            [tool.pyflow]
            name = "demo"
            py_version = "3.10"
            version = "1.4.0"

            [tool.pyflow.dependencies]
            requests = ">=2.0,<3.0"
            black = { version = "^22.1", extras = ["d"], python = ">=3.8" }
            mylib = { path = "../mylib" }

            [tool.pyflow.dev-dependencies]
            pytest = "*"
            """,
        )
        original = load_config(source)
        requests = next(r for r in original.reqs if r.name == "requests")
        assert requests.constraints == parse_constraints(">=2.0,<3.0")

        (tmp_path / "out").mkdir()
        target = write_config(original, tmp_path / "out" / "pyproject.toml")
        text = target.read_text(encoding="utf-8")
        assert 'requests = ">=2.0, <3.0"' in text

        reloaded = load_config(target)
        assert reloaded.name == "demo"
        assert reloaded.py_version == original.py_version
        assert reloaded.version == original.version
        assert sorted(reloaded.reqs, key=lambda r: r.name) == sorted(
            original.reqs, key=lambda r: r.name
        )
        assert reloaded.dev_reqs == original.dev_reqs
