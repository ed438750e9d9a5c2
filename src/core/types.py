"""Shared typed models.

This module defines the index entry record and mapping aliases
used by the store, SDK, and CLI layers.
"""

from __future__ import annotations

from dataclasses import dataclass

VersionMap = dict[str, str]
IndexPayload = dict[str, VersionMap]


@dataclass(frozen=True)
class IndexEntry:
    """One recorded bundle version.

    Attributes:
        name: Bundle name.
        version: Version key as recorded, not necessarily valid semver.
        digest: Opaque content reference for the bundle payload.
    """

    name: str
    version: str
    digest: str
