"""
Tests for the version primitives.

Tests cover:
- Version parsing, rendering and ordering
- Single and multiple constraint parsing
- Constraint satisfaction for every operator
"""

import pytest

from pyflow_core.dependencies import (
    Constraint,
    Version,
    VersionOperator,
    parse_constraint,
    parse_constraints,
    parse_version,
)

# ============================================================================
# Version Parsing Tests
# ============================================================================


class TestVersionParsing:
    """Tests for version parsing."""

    def test_parse_simple_version(self):
        """Test parsing simple version like 1.2.3."""
        v = parse_version("1.2.3")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)
        assert v.extra_num is None
        assert v.pre_release is None

    def test_parse_short_versions(self):
        """Missing components default to zero."""
        assert parse_version("3") == Version(3, 0, 0)
        assert parse_version("3.8") == Version(3, 8, 0)

    def test_parse_four_components(self):
        """Test parsing a fourth numeric component."""
        v = parse_version("2.5.3.1")
        assert v.extra_num == 1
        assert str(v) == "2.5.3.1"

    def test_parse_leading_v(self):
        """Test that a leading v is accepted."""
        assert parse_version("v1.4") == parse_version("1.4")

    def test_parse_local_label(self):
        """A local label is rendered back but ignored when comparing."""
        v = parse_version("2.0.0+cu118")
        assert v.local == "cu118"
        assert str(v) == "2.0.0+cu118"
        assert v == parse_version("2.0.0")
        assert parse_version("1.0+ubuntu.1").local == "ubuntu.1"

    def test_parse_bad_local_label(self):
        """An empty or malformed local label is rejected."""
        for text in ("1.0+", "1.0+cu@118", "1.0+a..b"):
            with pytest.raises(ValueError):
                parse_version(text)

    def test_parse_prerelease(self):
        """Test parsing pre-release tags."""
        v = parse_version("1.0.0rc1")
        assert v.pre_release == "rc"
        assert v.pre_release_num == 1

        v = parse_version("2.0b2")
        assert v.pre_release == "b"
        assert v.pre_release_num == 2

    def test_parse_dev_and_post(self):
        """Test parsing dev and post releases."""
        assert parse_version("1.0.dev0").pre_release == "dev"
        assert parse_version("1.0.post2").pre_release_num == 2

    def test_parse_wildcard(self):
        """Test parsing 1.2.* wildcard versions."""
        v = parse_version("1.2.*")
        assert v.star is True
        assert str(v) == "1.2.*"

    def test_invalid_version_raises_error(self):
        """Test that invalid versions raise ValueError."""
        for bad in ("", "not.a.version", "1.2.3.4.5", "abc1.0"):
            with pytest.raises(ValueError):
                parse_version(bad)


class TestVersionRendering:
    """Tests for Version string output."""

    def test_str_keeps_written_precision(self):
        """A version written as 2.0 renders as 2.0, not 2.0.0."""
        assert str(parse_version("2.0")) == "2.0"
        assert str(parse_version("2.0.0")) == "2.0.0"
        assert str(parse_version("7")) == "7"

    def test_str_prerelease(self):
        """Pre-release tags are appended; dev and post get a dot."""
        assert str(parse_version("1.0.0a1")) == "1.0.0a1"
        assert str(parse_version("1.0.dev0")) == "1.0.dev0"

    def test_to_string_no_patch(self):
        """Interpreter versions render as major.minor."""
        assert parse_version("3.11.4").to_string_no_patch() == "3.11"
        assert parse_version("3").to_string_no_patch() == "3.0"


class TestVersionComparison:
    """Tests for version ordering and equality."""

    def test_equality_ignores_precision(self):
        """1.0 and 1.0.0 are the same version."""
        assert parse_version("1.0") == parse_version("1.0.0")
        assert len({parse_version("1.0"), parse_version("1.0.0")}) == 1

    def test_ordering(self):
        """Test basic ordering."""
        assert parse_version("1.0.0") < parse_version("1.0.1")
        assert parse_version("1.9") < parse_version("1.10")
        assert parse_version("2.0") > parse_version("1.99.99")
        assert parse_version("1.2.3") <= parse_version("1.2.3")

    def test_prerelease_ordering(self):
        """dev < a < b < rc < release < post."""
        ordered = ["1.0.dev0", "1.0a1", "1.0b1", "1.0rc1", "1.0", "1.0.post1"]
        versions = [parse_version(v) for v in ordered]
        assert sorted(reversed(versions)) == versions

    def test_not_equal_to_other_types(self):
        """Comparing with a plain string is never equal."""
        assert parse_version("1.0") != "1.0"


# ============================================================================
# Constraint Tests
# ============================================================================


class TestConstraintParsing:
    """Tests for single constraint parsing."""

    def test_parse_operators(self):
        """Test every operator."""
        cases = {
            "==1.0": VersionOperator.EQ,
            "!=1.0": VersionOperator.NE,
            ">=1.0": VersionOperator.GE,
            ">1.0": VersionOperator.GT,
            "<=1.0": VersionOperator.LE,
            "<1.0": VersionOperator.LT,
            "~=1.0": VersionOperator.COMPAT,
            "^1.0": VersionOperator.CARET,
            "~1.0": VersionOperator.TILDE,
        }
        for text, op in cases.items():
            assert parse_constraint(text).operator == op, text

    def test_bare_version_is_exact(self):
        """A version with no operator means ==."""
        c = parse_constraint("1.4")
        assert c.operator == VersionOperator.EQ
        assert c.version == parse_version("1.4")

    def test_single_equals_is_exact(self):
        """A single = means ==."""
        assert parse_constraint("=2.1").operator == VersionOperator.EQ

    def test_str(self):
        """Test constraint rendering."""
        assert str(parse_constraint(">= 2.0")) == ">=2.0"
        assert str(parse_constraint("^0.3.1")) == "^0.3.1"

    def test_invalid_constraint(self):
        """Test that garbage raises ValueError."""
        with pytest.raises(ValueError):
            parse_constraint(">=banana")


class TestMultipleConstraints:
    """Tests for parse_constraints."""

    def test_comma_separated(self):
        """Test the common >=,< pair."""
        constraints = parse_constraints(">=2.0,<3.0")
        assert [str(c) for c in constraints] == [">=2.0", "<3.0"]

    def test_whitespace_separated(self):
        """Whitespace works as a delimiter, also after operators."""
        assert parse_constraints(">=1.0 <2.0") == parse_constraints(">= 1.0, < 2.0")

    def test_any_version(self):
        """An empty string or * means no constraint."""
        assert parse_constraints("") == []
        assert parse_constraints("*") == []
        assert parse_constraints("  ") == []

    def test_one_bad_token_fails_everything(self):
        """A single unparseable token fails the whole string."""
        with pytest.raises(ValueError):
            parse_constraints(">=1.0, bogus")
        with pytest.raises(ValueError):
            parse_constraints(">=")

    def test_deterministic(self):
        """Parsing the same text twice gives equal results."""
        text = "^1.2, !=1.4.1, <1.9"
        assert parse_constraints(text) == parse_constraints(text)

    def test_written_order_is_kept(self):
        """Constraints come back in the order they were written."""
        constraints = parse_constraints("<3,>=2")
        assert [c.operator for c in constraints] == [VersionOperator.LT, VersionOperator.GE]


class TestConstraintSatisfaction:
    """Tests for Constraint.is_satisfied_by."""

    @pytest.mark.parametrize(
        "constraint,version,expected",
        [
            ("==1.2", "1.2.0", True),
            ("==1.2", "1.2.1", False),
            ("!=1.5", "1.5.0", False),
            ("!=1.5", "1.6", True),
            (">=2.0", "2.0", True),
            (">2.0", "2.0", False),
            ("<=1.0", "1.0.0", True),
            ("<1.0", "1.0a1", True),
            ("==1.2.*", "1.2.7", True),
            ("==1.2.*", "1.3.0", False),
            ("!=1.2.*", "1.3.0", True),
        ],
    )
    def test_simple_operators(self, constraint, version, expected):
        """Test the comparison operators."""
        assert parse_constraint(constraint).is_satisfied_by(parse_version(version)) is expected

    def test_caret(self):
        """^1.2 allows anything below 2.0."""
        c = parse_constraint("^1.2")
        assert c.is_satisfied_by(parse_version("1.9.9"))
        assert not c.is_satisfied_by(parse_version("2.0"))
        assert not c.is_satisfied_by(parse_version("1.1"))

    def test_caret_zero_major(self):
        """^0.2.3 stays within 0.2."""
        c = parse_constraint("^0.2.3")
        assert c.upper_bound() == Version(0, 3, 0)
        assert c.is_satisfied_by(parse_version("0.2.5"))
        assert not c.is_satisfied_by(parse_version("0.3.0"))

    def test_caret_zero_minor(self):
        """^0.0.3 only allows 0.0.3."""
        assert parse_constraint("^0.0.3").upper_bound() == Version(0, 0, 4)

    def test_tilde(self):
        """~1.2.3 stays within 1.2."""
        c = parse_constraint("~1.2.3")
        assert c.upper_bound() == Version(1, 3, 0)
        assert c.is_satisfied_by(parse_version("1.2.9"))
        assert not c.is_satisfied_by(parse_version("1.3"))

    def test_compatible_release(self):
        """~= bumps the second to last written component."""
        assert parse_constraint("~=1.4.2").upper_bound() == Version(1, 5, 0)
        assert parse_constraint("~=1.4").upper_bound() == Version(2, 0, 0)

    def test_upper_bound_undefined_for_plain_operators(self):
        """Only range operators have an upper bound."""
        with pytest.raises(ValueError):
            Constraint(VersionOperator.GE, parse_version("1.0")).upper_bound()
