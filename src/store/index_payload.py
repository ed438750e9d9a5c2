"""Index payload encode and decode helpers.

This module isolates JSON parsing and shape validation of index documents.
It keeps the version index focused on lookup and merge semantics.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from core.constants import INDEX_JSON_INDENT
from core.errors import IndexDecodeError, IndexIOError
from core.types import IndexPayload


def decode_index_payload(data: bytes | str) -> IndexPayload:
    """Decode and validate an index JSON document.

    Empty or whitespace-only input decodes to an empty payload.

    Args:
        data: Raw document as bytes (UTF-8) or text.

    Returns:
        Validated name to version map payload.

    Raises:
        IndexDecodeError: If the document is not a valid index.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as error:
            raise IndexDecodeError(
                f"Failed to decode index: invalid UTF-8 at byte {error.start}."
            ) from error
    else:
        text = data
    if not text.strip():
        return {}
    try:
        document = json.loads(text)
    except json.JSONDecodeError as error:
        raise IndexDecodeError(
            f"Failed to parse index JSON at line {error.lineno} column {error.colno}: "
            f"{error.msg}."
        ) from error
    if document is None:
        return {}
    return _validate_document(document)


def encode_index_payload(payload: Mapping[str, Mapping[str, str]]) -> bytes:
    """Encode an index payload as indented, key-sorted UTF-8 JSON.

    Args:
        payload: Name to version map payload.

    Returns:
        Encoded document bytes.

    Raises:
        IndexIOError: If the payload cannot be encoded.
    """
    try:
        text = json.dumps(payload, indent=INDEX_JSON_INDENT, sort_keys=True)
    except (TypeError, ValueError) as error:
        raise IndexIOError(f"Failed to encode index: {error}.") from error
    return (text + "\n").encode("utf-8")


def _validate_document(document: Any) -> IndexPayload:
    """Check the two-level string mapping shape."""
    if not isinstance(document, dict):
        raise IndexDecodeError(
            "Failed to parse index: expected JSON object at top level, "
            f"got {type(document).__name__}."
        )
    payload: IndexPayload = {}
    for name, versions in document.items():
        if versions is None:
            payload[name] = {}
            continue
        if not isinstance(versions, dict):
            raise IndexDecodeError(
                f"Failed to parse index entry '{name}': expected object of versions, "
                f"got {type(versions).__name__}."
            )
        for version, digest in versions.items():
            if not isinstance(digest, str):
                raise IndexDecodeError(
                    f"Failed to parse index entry '{name}' version '{version}': "
                    f"expected digest string, got {type(digest).__name__}."
                )
        payload[name] = dict(versions)
    return payload
