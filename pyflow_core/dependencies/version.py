"""
Version Parsing and Comparison
==============================

Provides the Version and Constraint primitives every descriptor adapter
produces. The grammar covers PEP 440 style specifiers plus the caret and
tilde ranges used by Poetry and pyflow manifests:

- Exact / not equal: ==1.2.3, !=1.2, =1.2, 1.2.3 (bare)
- Ordered: >=1.0, >1.0, <=2, <2.0
- Compatible release: ~=1.4.2
- Caret: ^1.2 (same major), Tilde: ~1.2 (same minor)
- Wildcard: ==1.2.*
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class VersionOperator(str, Enum):
    """Version comparison operators."""

    EQ = "=="  # Exact match
    NE = "!="  # Not equal
    GE = ">="  # Greater or equal
    GT = ">"  # Greater than
    LE = "<="  # Less or equal
    LT = "<"  # Less than
    COMPAT = "~="  # Compatible release
    CARET = "^"  # Same left-most non-zero component
    TILDE = "~"  # Same major.minor


# Ordering of pre/post release tags relative to the final release (0)
_PRE_RELEASE_ORDER = {
    "dev": -4,
    "a": -3,
    "alpha": -3,
    "b": -2,
    "beta": -2,
    "c": -1,
    "rc": -1,
    "pre": -1,
    "preview": -1,
    "post": 1,
}

_VERSION_RE = re.compile(
    r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?(\.\*)?"
    r"(?:[.\-_]?(dev|alpha|beta|preview|pre|post|rc|a|b|c)[.\-_]?(\d+)?)?"
    r"(?:\+([A-Za-z0-9]+(?:\.[A-Za-z0-9]+)*))?$",
    re.IGNORECASE,
)


@dataclass(frozen=True, eq=False)
class Version:
    """
    Represents a parsed, immutable version number.

    Supports formats like:
    - 3.8, 1.0.0, 2.5.3.1
    - 1.0.0a1, 2.0b2, 3.0rc1, 1.0.dev0, 1.0.post2
    - 1.2.* (wildcard, only meaningful inside an == or != constraint)
    - 2.0.0+cu118 (local label, kept for rendering but ignored in comparisons)

    ``precision`` records how many numeric components were written, so
    "2.0" renders back as "2.0". It takes no part in comparisons:
    Version("1.0") == Version("1.0.0").
    """

    major: int
    minor: int = 0
    patch: int = 0
    extra_num: Optional[int] = None
    pre_release: Optional[str] = None
    pre_release_num: Optional[int] = None
    star: bool = False
    precision: int = field(default=3, repr=False)
    local: Optional[str] = field(default=None, repr=False)

    def __str__(self) -> str:
        """Convert version to string."""
        parts = [self.major, self.minor, self.patch]
        if self.extra_num is not None:
            parts.append(self.extra_num)
        count = max(1, min(self.precision, len(parts)))
        if self.extra_num is not None:
            count = 4
        base = ".".join(str(p) for p in parts[:count])
        if self.star:
            base += ".*"
        if self.pre_release:
            separator = "." if self.pre_release.lower() in ("dev", "post") else ""
            base += f"{separator}{self.pre_release}{self.pre_release_num if self.pre_release_num is not None else ''}"
        if self.local:
            base += f"+{self.local}"
        return base

    def to_string_no_patch(self) -> str:
        """Render as major.minor, e.g. for interpreter versions."""
        return f"{self.major}.{self.minor}"

    def as_tuple(self) -> Tuple[int, int, int, int, int, int]:
        """
        Convert to tuple for comparison.

        Pre-releases are sorted before releases, post-releases after:
        dev < a < b < rc < release < post
        """
        pre_order = 0
        pre_num = 0

        if self.pre_release:
            pre_order = _PRE_RELEASE_ORDER.get(self.pre_release.lower(), 0)
            pre_num = self.pre_release_num or 0

        return (self.major, self.minor, self.patch, self.extra_num or 0, pre_order, pre_num)

    def __lt__(self, other: "Version") -> bool:
        return self.as_tuple() < other.as_tuple()

    def __le__(self, other: "Version") -> bool:
        return self.as_tuple() <= other.as_tuple()

    def __gt__(self, other: "Version") -> bool:
        return self.as_tuple() > other.as_tuple()

    def __ge__(self, other: "Version") -> bool:
        return self.as_tuple() >= other.as_tuple()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return False
        return self.as_tuple() == other.as_tuple() and self.star == other.star

    def __hash__(self) -> int:
        return hash((self.as_tuple(), self.star))


def parse_version(version_str: str) -> Version:
    """
    Parse a version string into a Version object.

    Args:
        version_str: Version string like "1.0.0", "3.8", "1.0.0a1", "1.2.*",
            "2.0.0+cu118"

    Returns:
        Version object

    Raises:
        ValueError: If version string is invalid
    """
    version_str = version_str.strip()
    match = _VERSION_RE.match(version_str)

    if not match:
        raise ValueError(f"Invalid version string: '{version_str}'")

    numbers = [match.group(i) for i in range(1, 5)]
    precision = sum(1 for n in numbers if n is not None)

    return Version(
        major=int(numbers[0]),
        minor=int(numbers[1]) if numbers[1] else 0,
        patch=int(numbers[2]) if numbers[2] else 0,
        extra_num=int(numbers[3]) if numbers[3] else None,
        pre_release=match.group(6) if match.group(6) else None,
        pre_release_num=int(match.group(7)) if match.group(7) else None,
        star=bool(match.group(5)),
        precision=precision,
        local=match.group(8),
    )


@dataclass(frozen=True)
class Constraint:
    """
    Represents a version constraint like >=1.0.0 or ^2.5.

    A requirement carries a list of these; all of them must hold.
    """

    operator: VersionOperator
    version: Version

    def __str__(self) -> str:
        return f"{self.operator.value}{self.version}"

    def is_satisfied_by(self, version: Version) -> bool:
        """Check if a version satisfies this constraint."""
        if self.operator == VersionOperator.EQ:
            return self._matches(version)
        elif self.operator == VersionOperator.NE:
            return not self._matches(version)
        elif self.operator == VersionOperator.GE:
            return version >= self.version
        elif self.operator == VersionOperator.GT:
            return version > self.version
        elif self.operator == VersionOperator.LE:
            return version <= self.version
        elif self.operator == VersionOperator.LT:
            return version < self.version
        # Range operators: >= lower bound and < computed upper bound
        if version < self.version:
            return False
        return version < self.upper_bound()

    def upper_bound(self) -> Version:
        """
        Exclusive upper bound of a compatible, caret or tilde range.

        ~=1.4.2 -> 1.5.0   ~=1.4 -> 2.0.0
        ^1.2.3  -> 2.0.0   ^0.2.3 -> 0.3.0   ^0.0.3 -> 0.0.4
        ~1.2.3  -> 1.3.0   ~1 -> 2.0.0
        """
        v = self.version
        if self.operator == VersionOperator.COMPAT:
            if v.precision >= 3:
                return Version(v.major, v.minor + 1, 0)
            return Version(v.major + 1, 0, 0)
        if self.operator == VersionOperator.CARET:
            if v.major != 0 or v.precision == 1:
                return Version(v.major + 1, 0, 0)
            if v.minor != 0 or v.precision == 2:
                return Version(0, v.minor + 1, 0)
            return Version(0, 0, v.patch + 1)
        if self.operator == VersionOperator.TILDE:
            if v.precision == 1:
                return Version(v.major + 1, 0, 0)
            return Version(v.major, v.minor + 1, 0)
        raise ValueError(f"Operator {self.operator.value} has no upper bound")

    def _matches(self, version: Version) -> bool:
        if not self.version.star:
            return version.as_tuple() == self.version.as_tuple()
        # Wildcard: compare only the components written before ".*"
        width = self.version.precision
        return version.as_tuple()[:width] == self.version.as_tuple()[:width]


def parse_constraint(constraint_str: str) -> Constraint:
    """
    Parse a single version constraint string.

    Args:
        constraint_str: Constraint like ">=1.0.0", "==2.5.3", "^1.2", "1.4"

    Returns:
        Constraint object

    Raises:
        ValueError: If constraint string is invalid
    """
    constraint_str = constraint_str.strip()

    # Try each operator (longer ones first to avoid partial matches)
    operators = sorted(VersionOperator, key=lambda x: -len(x.value))

    for op in operators:
        if constraint_str.startswith(op.value):
            version_part = constraint_str[len(op.value) :].strip()
            return Constraint(operator=op, version=parse_version(version_part))

    # Pipfile style single "=" is an exact match
    if constraint_str.startswith("="):
        constraint_str = constraint_str[1:]

    # No operator found - assume exact match
    return Constraint(operator=VersionOperator.EQ, version=parse_version(constraint_str))


_TOKEN_RE = re.compile(r"[\s,]*(==|!=|>=|<=|~=|>|<|\^|~|=)?\s*([^\s,<>=!~^]+)[\s,]*")


def parse_constraints(constraints_str: str) -> List[Constraint]:
    """
    Parse multiple version constraints.

    Constraints are separated by commas and/or whitespace; an operator may be
    followed by whitespace (">= 1.0, < 2.0"). An empty string or "*" means
    any version and yields an empty list.

    Args:
        constraints_str: String like ">=1.0.0,<2.0.0" or "^3.8"

    Returns:
        List of Constraint objects, in written order

    Raises:
        ValueError: If any part of the string is not a valid constraint
    """
    text = constraints_str.strip()
    constraints: List[Constraint] = []
    pos = 0

    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match or match.end() == pos:
            raise ValueError(f"Invalid constraint string: '{constraints_str}'")
        pos = match.end()

        operator, version_part = match.group(1), match.group(2)
        if version_part == "*" and operator is None:
            continue
        try:
            constraints.append(parse_constraint(f"{operator or ''}{version_part}"))
        except ValueError as e:
            raise ValueError(f"Invalid constraint string: '{constraints_str}' ({e})") from e

    return constraints
