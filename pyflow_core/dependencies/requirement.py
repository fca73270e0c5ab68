"""
Requirements
============

The canonical dependency edge (``Req``) and parsing of pip-style requirement
lines as found in requirements.txt files and in the ``Requires-Dist``
headers of wheel metadata:

- Simple: package>=1.0.0
- With extras: package[extra1,extra2]>=1.0.0
- Parenthesized (older wheels): package (>=1.0,<2.0)
- Direct references: package @ git+https://host/repo.git
- Environment markers: package>=1.0; python_version < "3.8" and extra == "dev"
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..common.constants import Defaults
from ..utils.toml_format import toml_key, toml_str
from .version import Constraint, VersionOperator, parse_constraint, parse_constraints


@dataclass
class Req:
    """
    A single dependency edge.

    Attributes:
        name: Package name, kept as written (case-significant)
        constraints: Version constraints; all must hold. Empty means any version
        extra: The extra of the *parent* package that pulls this in
            (from a ``extra == "x"`` marker in wheel metadata)
        sys_platform: Platform filter, e.g. "win32"
        python_version: Interpreter constraints scoping this dependency
        install_with_extras: Extras to install with the dependency
        path: Local directory holding the dependency
        git: Source-control URL of the dependency
    """

    name: str
    constraints: List[Constraint] = field(default_factory=list)
    extra: Optional[str] = None
    sys_platform: Optional[str] = None
    python_version: Optional[List[Constraint]] = None
    install_with_extras: Optional[List[str]] = None
    path: Optional[str] = None
    git: Optional[str] = None

    @property
    def is_local(self) -> bool:
        return self.path is not None

    @property
    def is_vcs(self) -> bool:
        return self.git is not None

    @property
    def is_registry(self) -> bool:
        return self.path is None and self.git is None

    def is_python(self) -> bool:
        """True for the sentinel dependency expressing the interpreter version."""
        return self.name.lower() == Defaults.PYTHON_SENTINEL

    def constraints_string(self) -> str:
        return ", ".join(str(c) for c in self.constraints)

    def to_cfg_string(self) -> str:
        """
        Render as one line of a pyflow dependencies table.

        Examples:
            requests = "*"
            requests = ">=2.0, <3.0"
            mylib = { path = "../mylib" }
            black = { version = "^22.1", extras = ["d"], python = ">=3.7" }
        """
        name = toml_key(self.name)
        table: List[str] = []

        if self.constraints and (
            self.install_with_extras or self.python_version or self.path or self.git
        ):
            table.append(f"version = {toml_str(self.constraints_string())}")
        if self.install_with_extras:
            extras = ", ".join(toml_str(e) for e in self.install_with_extras)
            table.append(f"extras = [{extras}]")
        if self.python_version:
            python = ", ".join(str(c) for c in self.python_version)
            table.append(f"python = {toml_str(python)}")
        if self.path:
            table.append(f"path = {toml_str(self.path)}")
        if self.git:
            table.append(f"git = {toml_str(self.git)}")

        if table:
            return f"{name} = {{ {', '.join(table)} }}"
        if not self.constraints:
            return f'{name} = "*"'
        return f"{name} = {toml_str(self.constraints_string())}"

    def to_pip_string(self) -> str:
        """Convert to pip-installable string."""
        result = self.name
        if self.install_with_extras:
            result += f"[{','.join(self.install_with_extras)}]"
        if self.git:
            return f"{result} @ git+{self.git}"
        if self.path:
            return f"{result} @ {self.path}"
        if self.constraints:
            result += ",".join(str(c) for c in self.constraints)
        markers = self._markers()
        if markers:
            result += f"; {markers}"
        return result

    def _markers(self) -> str:
        clauses: List[str] = []
        if self.python_version:
            for c in self.python_version:
                # Markers have no caret/tilde; emit the lower bound and upper bound
                if c.operator in _RANGE_OPERATORS:
                    clauses.append(f'python_version >= "{c.version}"')
                    clauses.append(f'python_version < "{c.upper_bound()}"')
                else:
                    clauses.append(f'python_version {c.operator.value} "{c.version}"')
        if self.sys_platform:
            clauses.append(f'sys_platform == "{self.sys_platform}"')
        if self.extra:
            clauses.append(f'extra == "{self.extra}"')
        return " and ".join(clauses)


_RANGE_OPERATORS = (VersionOperator.CARET, VersionOperator.TILDE, VersionOperator.COMPAT)


# ============================================================================
# Requirement line parsing
# ============================================================================

_NAME_RE = re.compile(r"^\s*([A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)\s*")
_EXTRAS_RE = re.compile(r"^\[([^\]]*)\]\s*")
_MARKER_CLAUSE_RE = re.compile(
    r"""^\(?\s*(python_version|python_full_version|sys_platform|extra)\s*
        (==|!=|>=|<=|~=|>|<)\s*['"]([^'"]*)['"]\s*\)?$""",
    re.VERBOSE,
)


def parse_requirement_line(line: str) -> Req:
    """
    Parse a single pip-style requirement.

    Args:
        line: Requirement string like "package>=1.0" or
            'package (>=1.0) ; extra == "test"'

    Returns:
        Req object

    Raises:
        ValueError: If the name or a constraint cannot be parsed

    Examples:
        >>> parse_requirement_line("langchain[openai]>=0.1.0,<1.0.0")
        Req(name='langchain', constraints=[...], install_with_extras=['openai'], ...)
    """
    text = line.strip()

    # Extract environment marker (after semicolon)
    marker = None
    if ";" in text:
        text, marker = text.split(";", 1)
        text = text.strip()
        marker = marker.strip()

    name_match = _NAME_RE.match(text)
    if not name_match:
        raise ValueError(f"Invalid requirement: '{line.strip()}'")
    req = Req(name=name_match.group(1))
    rest = text[name_match.end() :]

    # Extract extras (in square brackets)
    extras_match = _EXTRAS_RE.match(rest)
    if extras_match:
        extras = [e.strip() for e in extras_match.group(1).split(",") if e.strip()]
        req.install_with_extras = extras or None
        rest = rest[extras_match.end() :]

    rest = rest.strip()
    if rest.startswith("@"):
        _apply_direct_reference(req, rest[1:].strip())
    elif rest:
        # Older metadata wraps the specifiers in parentheses
        if rest.startswith("(") and rest.endswith(")"):
            rest = rest[1:-1]
        req.constraints = parse_constraints(rest)

    if marker:
        _apply_marker(req, marker)

    return req


def _apply_direct_reference(req: Req, url: str) -> None:
    if not url:
        raise ValueError(f"Missing URL in direct reference for '{req.name}'")
    if url.startswith("git+"):
        req.git = url[len("git+") :]
    elif url.startswith("file://"):
        req.path = url[len("file://") :]
    elif "://" not in url:
        req.path = url
    # Archive URLs have no counterpart in the model; the Req stays a registry one


def _apply_marker(req: Req, marker: str) -> None:
    """
    Copy the marker clauses this model can express onto the Req.

    Only ``and``-joined clauses are decomposed; a marker using ``or`` is
    left alone since a single Req cannot express a disjunction.
    """
    if re.search(r"\bor\b", marker):
        return

    for clause in re.split(r"\band\b", marker):
        match = _MARKER_CLAUSE_RE.match(clause.strip())
        if not match:
            continue
        variable, op, value = match.groups()
        if variable == "extra" and op == "==":
            req.extra = value
        elif variable == "sys_platform" and op == "==":
            req.sys_platform = value
        elif variable in ("python_version", "python_full_version"):
            req.python_version = (req.python_version or []) + [parse_constraint(f"{op}{value}")]
