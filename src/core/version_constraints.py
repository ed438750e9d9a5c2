"""Semantic version constraint matching.

This module adapts the node-semver range grammar for index lookups and
adds ``!=`` exclusions. Recorded version keys are parsed loosely, so
``1.2`` reads as ``1.2.0``; keys that still do not parse never match.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING, Iterable

from nodesemver import make_range, make_semver

from core.constants import WILDCARD_CONSTRAINT
from core.errors import InvalidConstraintError
from core.logging_config import get_logger

if TYPE_CHECKING:
    from nodesemver import Range, SemVer

_LOGGER = get_logger(__name__)

_ALTERNATIVE_SEPARATOR = "||"
_EXCLUSION_OPERATOR = "!="
_EXCLUSION_SPACING = re.compile(r"!=\s+")


@dataclass(frozen=True)
class _ConstraintAlternative:
    """One ``||`` branch: a range plus versions it must not match."""

    allowed: Range
    excluded: tuple[Range, ...]

    def test(self, version: SemVer) -> bool:
        if not self.allowed.test(version):
            return False
        return not any(excluded.test(version) for excluded in self.excluded)


@dataclass(frozen=True)
class VersionConstraint:
    """Parsed constraint expression.

    Attributes:
        text: Constraint as given by the caller.
        alternatives: Branches joined by ``||``; any one may match.
    """

    text: str
    alternatives: tuple[_ConstraintAlternative, ...]

    def test(self, version: SemVer) -> bool:
        """Return whether a parsed version satisfies any alternative."""
        return any(alternative.test(version) for alternative in self.alternatives)


def parse_constraint(constraint: str) -> VersionConstraint:
    """Parse a version constraint expression.

    Only the empty string means any version. Comparators may be joined by
    commas as well as whitespace, e.g. ``>=1.0.0, <2.0.0``, and ``!=X``
    excludes whatever ``X`` matches on its own.

    Args:
        constraint: Constraint text such as ``^1.2.0``, ``1.x`` or ``!=1.0.0``.

    Returns:
        Parsed constraint.

    Raises:
        InvalidConstraintError: If the constraint cannot be parsed.
    """
    if constraint == "":
        normalized = WILDCARD_CONSTRAINT
    else:
        normalized = " ".join(constraint.replace(",", " ").split())
    if not normalized:
        raise _invalid_constraint(constraint, "no comparators given")
    normalized = _EXCLUSION_SPACING.sub(_EXCLUSION_OPERATOR, normalized)
    alternatives = tuple(
        _parse_alternative(constraint, branch.strip())
        for branch in normalized.split(_ALTERNATIVE_SEPARATOR)
    )
    return VersionConstraint(text=constraint, alternatives=alternatives)


def parse_version(version: str) -> SemVer | None:
    """Parse a recorded version key, returning None when it is not semver.

    Keys are read loosely, so ``1.2`` and ``1`` count as ``1.2.0`` and
    ``1.0.0``. The result is re-read strictly so ranges compare it as-is.
    """
    try:
        return make_semver(make_semver(version, True).version, False)
    except (TypeError, ValueError):
        _LOGGER.debug("skipped_invalid_version", version=version)
        return None


def first_match(constraint: VersionConstraint, versions: Iterable[str]) -> str | None:
    """Return the first version key satisfying the constraint.

    Args:
        constraint: Parsed constraint.
        versions: Version keys in scan order.

    Returns:
        Matching version key, or None when nothing matches.
    """
    for version in versions:
        parsed = parse_version(version)
        if parsed is not None and constraint.test(parsed):
            return version
    return None


def highest_match(constraint: VersionConstraint, versions: Iterable[str]) -> str | None:
    """Return the highest version key satisfying the constraint.

    Args:
        constraint: Parsed constraint.
        versions: Version keys in any order.

    Returns:
        Highest matching version key, or None when nothing matches.
    """
    best_key: str | None = None
    best_version: SemVer | None = None
    for version in versions:
        parsed = parse_version(version)
        if parsed is None or not constraint.test(parsed):
            continue
        if best_version is None or parsed.compare(best_version) > 0:
            best_key = version
            best_version = parsed
    return best_key


def _parse_alternative(constraint: str, branch: str) -> _ConstraintAlternative:
    """Split ``!=`` comparators out of one branch and parse both parts."""
    if not branch:
        raise _invalid_constraint(constraint, "empty '||' alternative")
    allowed_parts: list[str] = []
    excluded: list[Range] = []
    for token in branch.split():
        if token.startswith(_EXCLUSION_OPERATOR):
            excluded_text = token[len(_EXCLUSION_OPERATOR):]
            if not excluded_text:
                raise _invalid_constraint(constraint, "'!=' needs a version")
            excluded.append(_make_range(constraint, excluded_text))
        else:
            allowed_parts.append(token)
    allowed = _make_range(constraint, " ".join(allowed_parts) or WILDCARD_CONSTRAINT)
    return _ConstraintAlternative(allowed=allowed, excluded=tuple(excluded))


def _make_range(constraint: str, range_text: str) -> Range:
    try:
        return make_range(range_text, False)
    except (TypeError, ValueError) as error:
        raise _invalid_constraint(constraint, str(error)) from error


def _invalid_constraint(constraint: str, reason: str) -> InvalidConstraintError:
    return InvalidConstraintError(
        f"Invalid version constraint '{constraint}': {reason}. "
        "Use a semver range such as '1.2.3', '^1.2.0', '~1.2', '!=1.0.0' or '>=1.0.0 <2.0.0'."
    )
