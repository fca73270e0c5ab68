"""
Config Serializer
=================

Renders a Config as a fresh pyproject.toml in the native ``[tool.pyflow]``
dialect. Only the fields a new project needs are written:

- name, py_version, version (defaulted when unset)
- authors, description, homepage (when set)
- scripts, dependencies, dev-dependencies

Dependencies and scripts are sorted by name so the output is stable for a
given Config. Existing files are never overwritten.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound

from .common.constants import Defaults, Filenames
from .common.errors import OutputExistsError, PyflowError
from .common.logger import get_logger
from .config.model import Config
from .dependencies import Req
from .utils.toml_format import toml_key, toml_str

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_FILE = f"{Filenames.PYPROJECT}.j2"


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["toml_str"] = toml_str
    env.filters["toml_key"] = toml_key
    return env


def _sorted_reqs(reqs: List[Req]) -> List[str]:
    # Stable sort: duplicate names keep their relative order
    return [req.to_cfg_string() for req in sorted(reqs, key=lambda r: r.name.lower())]


def build_context(config: Config) -> Dict[str, Any]:
    """
    Flatten a Config into template variables, applying the defaults for
    fields a new manifest always carries.
    """
    py_version = (
        config.py_version.to_string_no_patch() if config.py_version else Defaults.PY_VERSION
    )
    version = str(config.version) if config.version else Defaults.PROJECT_VERSION

    return {
        "name": config.name or "",
        "py_version": py_version,
        "version": version,
        "authors": list(config.authors),
        "description": config.description,
        "homepage": config.homepage,
        "scripts": sorted(config.scripts.items()),
        "dependencies": _sorted_reqs(config.reqs),
        "dev_dependencies": _sorted_reqs(config.dev_reqs),
    }


def render_config(config: Config) -> str:
    """
    Render a Config as pyproject.toml text.

    Raises:
        PyflowError: If the template is missing or fails to render
    """
    try:
        template = _build_environment().get_template(TEMPLATE_FILE)
        return template.render(**build_context(config))
    except TemplateNotFound as e:
        raise PyflowError(f"Template not found: {TEMPLATE_FILE}\nSearched in: {TEMPLATE_DIR}") from e
    except TemplateError as e:
        raise PyflowError(f"Template rendering error: {e}") from e


def write_config(config: Config, path: Union[str, Path]) -> Path:
    """
    Write a Config to a new pyproject.toml.

    Args:
        config: Config to serialize
        path: Target file; must not exist

    Returns:
        The path written

    Raises:
        OutputExistsError: If ``path`` already exists
    """
    target = Path(path)
    if target.exists():
        raise OutputExistsError(target)

    content = render_config(config)
    try:
        # "x" closes the gap between the check above and the write
        with open(target, "x", encoding="utf-8") as f:
            f.write(content)
    except FileExistsError as e:
        raise OutputExistsError(target) from e

    logger.info(f"Wrote {target}")
    return target
