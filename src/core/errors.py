"""Bundle index exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure kind of the index raises a specific error type.
"""

from __future__ import annotations


class BundleError(Exception):
    """Base exception for all bundle index failures."""


class BundleConfigError(BundleError):
    """Raised for invalid runtime configuration."""


class BundleLookupError(BundleError):
    """Raised when a name and constraint cannot be resolved to a digest."""


class UnknownBundleNameError(BundleLookupError):
    """Raised when the requested bundle name has no entries at all."""


class NoMatchingVersionError(BundleLookupError):
    """Raised when no recorded version satisfies the requested constraint."""


class InvalidConstraintError(BundleLookupError):
    """Raised when a version constraint string is not syntactically valid."""


class IndexDecodeError(BundleError):
    """Raised when index input is not a valid JSON index document."""


class IndexIOError(BundleError):
    """Raised when reading or writing index storage fails."""
