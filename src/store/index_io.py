"""Byte-level index file IO.

This module isolates opening, creating, reading and writing index files.
It maps every OS failure onto a traceable index IO error.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.constants import DEFAULT_INDEX_FILE_MODE
from core.errors import IndexIOError


def read_index_bytes(index_path: Path, create: bool = True) -> bytes:
    """Read raw index bytes, creating an empty file when allowed.

    Args:
        index_path: Index file path.
        create: Whether a missing file is created empty.

    Returns:
        File contents, empty for a newly created file.

    Raises:
        IndexIOError: If the file cannot be opened or read.
    """
    flags = os.O_RDONLY | (os.O_CREAT if create else 0)
    try:
        file_descriptor = os.open(index_path, flags, DEFAULT_INDEX_FILE_MODE)
        with os.fdopen(file_descriptor, "rb") as handle:
            return handle.read()
    except FileNotFoundError as error:
        raise IndexIOError(
            f"Index file or its parent directory not found at {index_path}. "
            "Check the path or create the index before reading it."
        ) from error
    except OSError as error:
        raise IndexIOError(f"Failed to read index file {index_path}: {error}.") from error


def write_index_bytes(index_path: Path, payload: bytes, mode: int) -> None:
    """Write raw index bytes in a single write call.

    The mode is applied when the file is created; existing files keep
    their permissions.

    Args:
        index_path: Destination file path.
        payload: Encoded index document.
        mode: Permission bits for a newly created file.

    Raises:
        IndexIOError: If the file cannot be written.
    """
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
    try:
        file_descriptor = os.open(index_path, flags, mode)
        with os.fdopen(file_descriptor, "wb") as handle:
            handle.write(payload)
    except OSError as error:
        raise IndexIOError(f"Failed to write index file {index_path}: {error}.") from error
