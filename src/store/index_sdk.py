"""Python SDK for index operations.

This module exposes high-level APIs that load the index under the
configured home, apply one operation, and write it back.
"""

from __future__ import annotations

from pathlib import Path

from core.config import BundleHomeConfig
from core.errors import IndexIOError
from core.types import IndexEntry
from store.version_index import VersionIndex, load_index


class IndexClient:
    """Primary SDK entry point for index workflows.

    Each mutating call is one load-modify-write cycle. Concurrent writers
    are not coordinated; the last write wins.
    """

    def __init__(self, config: BundleHomeConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or BundleHomeConfig.from_env()

    @property
    def config(self) -> BundleHomeConfig:
        return self._config

    @property
    def index_path(self) -> Path:
        return self._config.index_file

    def load(self) -> VersionIndex:
        """Load the home index, creating the home and an empty index file if needed.

        Raises:
            IndexIOError: If the home or index file cannot be accessed.
            IndexDecodeError: If the index file is corrupt.
        """
        self._ensure_home()
        return load_index(self.index_path)

    def save(self, index: VersionIndex) -> None:
        """Write the full index to the home index file.

        Raises:
            IndexIOError: If the index file cannot be written.
        """
        self._ensure_home()
        index.write_file(self.index_path)

    def resolve(self, name: str, constraint: str = "", latest: bool = False) -> str:
        """Resolve a bundle name and constraint to a digest.

        Args:
            name: Bundle name.
            constraint: Version constraint; empty matches any version.
            latest: Return the highest matching version instead of the first.

        Returns:
            Matching digest.

        Raises:
            BundleLookupError: If the name or constraint cannot be resolved.
        """
        index = self.load()
        if latest:
            return index.latest(name, constraint)
        return index.get(name, constraint)

    def has(self, name: str, version: str) -> bool:
        """Return whether the home index resolves a name and version."""
        return self.load().has(name, version)

    def add(self, name: str, version: str, digest: str) -> IndexEntry:
        """Record one bundle version and persist the index.

        Returns:
            The recorded entry.
        """
        index = self.load()
        index.add(name, version, digest)
        self.save(index)
        return IndexEntry(name=name, version=version, digest=digest)

    def merge_file(self, source_path: Path | str) -> int:
        """Fill gaps in the home index from another index file.

        Args:
            source_path: Existing index file to merge from.

        Returns:
            Number of entries written to the home index.

        Raises:
            IndexIOError: If the source is missing or files cannot be accessed.
            IndexDecodeError: If either index is corrupt.
        """
        source = load_index(source_path, create=False)
        index = self.load()
        added = index.merge(source)
        self.save(index)
        return added

    def list_entries(self, name: str | None = None) -> tuple[IndexEntry, ...]:
        """List recorded entries, optionally for a single bundle name.

        Raises:
            UnknownBundleNameError: If the requested name is not indexed.
        """
        index = self.load()
        if name is None:
            return tuple(index.entries())
        index.versions(name)  # raises for unknown names
        return tuple(entry for entry in index.entries() if entry.name == name)

    def _ensure_home(self) -> None:
        try:
            self._config.home.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise IndexIOError(
                f"Failed to create home directory {self._config.home}: {error}. "
                "Set BUNDLE_INDEX_HOME to a writable location."
            ) from error
