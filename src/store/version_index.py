"""Versioned bundle index.

This module maps bundle names to recorded versions and their digests.
It provides constraint lookups, fill-gaps merges, and file persistence.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Iterator, Mapping

from core.constants import DEFAULT_INDEX_FILE_MODE, WILDCARD_CONSTRAINT
from core.errors import BundleLookupError, NoMatchingVersionError, UnknownBundleNameError
from core.logging_config import get_logger
from core.types import IndexEntry, IndexPayload
from core.version_constraints import first_match, highest_match, parse_constraint
from store.index_io import read_index_bytes, write_index_bytes
from store.index_payload import decode_index_payload, encode_index_payload

_LOGGER = get_logger(__name__)


class VersionIndex:
    """In-memory index of bundle names, versions and digests.

    Lookups resolve a version constraint against the versions recorded
    for a name. When several versions satisfy a constraint, ``get``
    returns whichever it scans first; use ``latest`` for the highest.
    """

    def __init__(self, payload: Mapping[str, Mapping[str, str]] | None = None) -> None:
        """Create an index, optionally copying an existing mapping.

        Args:
            payload: Optional name to version map payload.
        """
        self._bundles: IndexPayload = {}
        for name, versions in (payload or {}).items():
            self._bundles[name] = dict(versions)

    def __len__(self) -> int:
        return len(self._bundles)

    def __contains__(self, name: object) -> bool:
        return name in self._bundles

    def __repr__(self) -> str:
        return f"VersionIndex({self._bundles!r})"

    def add(self, name: str, version: str, digest: str) -> None:
        """Record a digest for a name and exact version, overwriting any previous one."""
        versions = self._bundles.get(name)
        if versions is None:
            self._bundles[name] = {version: digest}
        else:
            versions[version] = digest

    def has(self, name: str, version: str) -> bool:
        """Return whether ``get`` would resolve the name and version."""
        try:
            self.get(name, version)
        except BundleLookupError:
            return False
        return True

    def get(self, name: str, version: str = "") -> str:
        """Resolve a name and version constraint to a digest.

        Args:
            name: Bundle name.
            version: Constraint expression; empty matches any version.

        Returns:
            Digest of the first recorded version satisfying the constraint.

        Raises:
            UnknownBundleNameError: If the name is not indexed.
            InvalidConstraintError: If the constraint cannot be parsed.
            NoMatchingVersionError: If no recorded version satisfies it.
        """
        versions = self._resolvable_versions_for(name)
        constraint = parse_constraint(version)
        matched = first_match(constraint, versions)
        if matched is None:
            raise _no_match_error(name, version)
        return versions[matched]

    def latest(self, name: str, version: str = "") -> str:
        """Resolve a name and constraint to the digest of the highest match.

        Args:
            name: Bundle name.
            version: Constraint expression; empty matches any version.

        Returns:
            Digest of the highest recorded version satisfying the constraint.

        Raises:
            UnknownBundleNameError: If the name is not indexed.
            InvalidConstraintError: If the constraint cannot be parsed.
            NoMatchingVersionError: If no recorded version satisfies it.
        """
        versions = self._resolvable_versions_for(name)
        constraint = parse_constraint(version)
        matched = highest_match(constraint, versions)
        if matched is None:
            raise _no_match_error(name, version)
        return versions[matched]

    def merge(self, source: "VersionIndex") -> int:
        """Add source entries this index cannot already resolve.

        Existence is checked with ``has``, so a recorded version is kept
        and the source digest ignored. Version keys that are not valid
        semver never resolve and are taken from the source every time.

        Args:
            source: Index to merge from.

        Returns:
            Number of entries written.
        """
        added = 0
        for entry in list(source.entries()):
            if not self.has(entry.name, entry.version):
                self.add(entry.name, entry.version, entry.digest)
                added += 1
        _LOGGER.debug("index_merged", source_names=len(source), added=added)
        return added

    def names(self) -> tuple[str, ...]:
        """List indexed bundle names."""
        return tuple(self._bundles)

    def versions(self, name: str) -> tuple[str, ...]:
        """List version keys recorded for a name.

        Raises:
            UnknownBundleNameError: If the name is not indexed.
        """
        return tuple(self._versions_for(name))

    def entries(self) -> Iterator[IndexEntry]:
        """Iterate over every recorded name, version and digest."""
        for name, versions in self._bundles.items():
            for version, digest in versions.items():
                yield IndexEntry(name=name, version=version, digest=digest)

    def to_payload(self) -> IndexPayload:
        """Return a copy of the index as plain nested dictionaries."""
        return {name: dict(versions) for name, versions in self._bundles.items()}

    def to_json(self) -> str:
        """Render the index as indented JSON text."""
        return encode_index_payload(self._bundles).decode("utf-8")

    def write_file(self, dest: Path | str, mode: int = DEFAULT_INDEX_FILE_MODE) -> None:
        """Write the full index to a file.

        Args:
            dest: Destination file path.
            mode: Permission bits applied when the file is created.

        Raises:
            IndexIOError: If encoding or writing fails.
        """
        dest_path = Path(dest)
        write_index_bytes(dest_path, encode_index_payload(self._bundles), mode)
        _LOGGER.info("index_written", path=str(dest_path), names=len(self))

    def _versions_for(self, name: str) -> dict[str, str]:
        versions = self._bundles.get(name)
        if versions is None:
            raise UnknownBundleNameError(
                f"No bundle named '{name}' in the index. "
                "Add it or merge an index that records it."
            )
        return versions

    def _resolvable_versions_for(self, name: str) -> dict[str, str]:
        versions = self._versions_for(name)
        if not versions:
            raise NoMatchingVersionError(f"Bundle '{name}' has no recorded versions.")
        return versions


def load_index(index_path: Path | str, create: bool = True) -> VersionIndex:
    """Load an index file, by default creating it empty when missing.

    Args:
        index_path: Index file path.
        create: Whether a missing file is created empty.

    Returns:
        Loaded index.

    Raises:
        IndexIOError: If the file cannot be opened, created or read.
        IndexDecodeError: If the file is not a valid index document.
    """
    path = Path(index_path)
    index = load_index_buffer(read_index_bytes(path, create=create))
    _LOGGER.info("index_loaded", path=str(path), names=len(index))
    return index


def load_index_reader(stream: IO[bytes] | IO[str]) -> VersionIndex:
    """Load an index from a binary or text stream.

    Raises:
        IndexDecodeError: If the stream is not a valid index document.
    """
    return load_index_buffer(stream.read())


def load_index_buffer(data: bytes | str) -> VersionIndex:
    """Load an index from an in-memory JSON document.

    Raises:
        IndexDecodeError: If the data is not a valid index document.
    """
    return VersionIndex(decode_index_payload(data))


def _no_match_error(name: str, version: str) -> NoMatchingVersionError:
    constraint = version or WILDCARD_CONSTRAINT
    return NoMatchingVersionError(
        f"No version of bundle '{name}' satisfies '{constraint}'. "
        "List recorded versions to choose a different constraint."
    )
