"""Public SDK surface for the bundle index.

This module provides a stable import path for library users.
It re-exports the index, client, config and error types.
"""

from __future__ import annotations

from core.config import BundleHomeConfig
from core.errors import (
    BundleConfigError,
    BundleError,
    BundleLookupError,
    IndexDecodeError,
    IndexIOError,
    InvalidConstraintError,
    NoMatchingVersionError,
    UnknownBundleNameError,
)
from core.types import IndexEntry
from store.index_sdk import IndexClient
from store.version_index import VersionIndex, load_index, load_index_buffer, load_index_reader

__all__ = [
    "BundleConfigError",
    "BundleError",
    "BundleHomeConfig",
    "BundleLookupError",
    "IndexClient",
    "IndexDecodeError",
    "IndexEntry",
    "IndexIOError",
    "InvalidConstraintError",
    "NoMatchingVersionError",
    "UnknownBundleNameError",
    "VersionIndex",
    "load_index",
    "load_index_buffer",
    "load_index_reader",
]
