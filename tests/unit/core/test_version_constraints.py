"""Unit tests for semantic version constraint matching."""

from __future__ import annotations

import pytest

from core.errors import InvalidConstraintError
from core.version_constraints import (
    first_match,
    highest_match,
    parse_constraint,
    parse_version,
)


def test_empty_constraint_matches_any_release() -> None:
    """Empty constraint should behave as the wildcard."""
    constraint = parse_constraint("")

    assert first_match(constraint, ["3.4.5"]) == "3.4.5"


def test_exact_constraint_matches_only_itself() -> None:
    """A literal version should only match that version."""
    constraint = parse_constraint("1.2.0")

    assert first_match(constraint, ["1.0.0", "1.2.0", "1.3.0"]) == "1.2.0"


def test_comma_separated_comparators_are_intersected() -> None:
    """Commas between comparators should act as AND."""
    constraint = parse_constraint(">=1.0.0, <2.0.0")

    assert first_match(constraint, ["2.1.0", "0.9.0", "1.5.0"]) == "1.5.0"


def test_invalid_constraint_raises() -> None:
    """Unparseable constraints should raise a typed error."""
    with pytest.raises(InvalidConstraintError):
        parse_constraint("not-a-valid-constraint!!")

    assert True


def test_parse_version_rejects_non_semver() -> None:
    """Non-semver keys should parse to None instead of raising."""
    assert parse_version("latest") is None and parse_version("1.0.0") is not None


def test_first_match_skips_invalid_versions() -> None:
    """Invalid version keys should be skipped during the scan."""
    constraint = parse_constraint("*")

    assert first_match(constraint, ["stable", "0.3.0"]) == "0.3.0"


def test_highest_match_picks_greatest_satisfying_version() -> None:
    """Highest match should compare semver precedence, not string order."""
    constraint = parse_constraint("^1.0.0")

    assert highest_match(constraint, ["1.10.0", "1.9.0", "2.0.0", "bogus"]) == "1.10.0"


def test_no_match_returns_none() -> None:
    """Scans without a satisfying version should return None."""
    constraint = parse_constraint("2.x")

    assert first_match(constraint, ["1.0.0"]) is None and highest_match(constraint, []) is None


def test_parse_version_reads_short_keys_loosely() -> None:
    """One- and two-part keys should parse as full releases."""
    assert str(parse_version("1.2")) == "1.2.0" and str(parse_version("1")) == "1.0.0"


def test_short_version_key_satisfies_constraints() -> None:
    """A ``1.2`` key should match constraints that cover 1.2.0."""
    exact = parse_constraint("1.2.0")
    caret = parse_constraint("^1.0.0")

    assert first_match(exact, ["1.2"]) == "1.2" and highest_match(caret, ["1.2", "1.1.9"]) == "1.2"


def test_not_equal_excludes_version() -> None:
    """``!=`` should match every version except the excluded one."""
    constraint = parse_constraint("!=1.0.0")

    assert first_match(constraint, ["1.0.0", "1.2.0"]) == "1.2.0"


def test_not_equal_combines_with_range() -> None:
    """``!=`` should narrow the other comparators in its alternative."""
    constraint = parse_constraint(">=1.0.0, != 1.3.0")

    assert highest_match(constraint, ["0.9.0", "1.2.0", "1.3.0"]) == "1.2.0"


def test_not_equal_applies_per_alternative() -> None:
    """An exclusion in one ``||`` branch should not restrict the other branch."""
    constraint = parse_constraint("^1.0.0 !=1.1.0 || 1.1.0")

    assert first_match(constraint, ["1.1.0"]) == "1.1.0"


def test_separator_only_constraint_raises() -> None:
    """Commas and whitespace alone should not act as the wildcard."""
    with pytest.raises(InvalidConstraintError):
        parse_constraint(", ,")

    assert True


def test_empty_alternative_raises() -> None:
    """A bare or trailing ``||`` should be rejected."""
    with pytest.raises(InvalidConstraintError):
        parse_constraint("1.0.0 ||")

    assert True


def test_not_equal_without_version_raises() -> None:
    """``!=`` with nothing after it should be rejected."""
    with pytest.raises(InvalidConstraintError):
        parse_constraint("!=")

    assert True
