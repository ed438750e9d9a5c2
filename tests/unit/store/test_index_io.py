"""Unit tests for index file loading and writing."""

from __future__ import annotations

import io
import os
import stat

import pytest

from core.errors import IndexDecodeError, IndexIOError
from store.version_index import VersionIndex, load_index, load_index_buffer, load_index_reader
from tests.fixture_paths import fixture_path


def test_load_index_creates_missing_file(tmp_path) -> None:
    """Loading a missing index file should create it and return an empty index."""
    index_path = tmp_path / "repositories.json"

    index = load_index(index_path)

    assert len(index) == 0 and index_path.exists() and index_path.stat().st_size == 0


def test_load_index_without_create_requires_file(tmp_path) -> None:
    """Loading with creation disabled should fail for missing files."""
    with pytest.raises(IndexIOError):
        load_index(tmp_path / "missing.json", create=False)

    assert not (tmp_path / "missing.json").exists()


def test_load_index_fails_when_parent_is_missing(tmp_path) -> None:
    """Missing parent directories should surface as IO errors."""
    with pytest.raises(IndexIOError):
        load_index(tmp_path / "no-such-dir" / "repositories.json")

    assert True


def test_load_index_reads_fixture() -> None:
    """Index fixtures should load into name and version entries."""
    index = load_index(fixture_path("index/mybundle.json"), create=False)

    assert index.to_payload() == {"mybundle": {"1.0.0": "sha256:aaa", "1.2.0": "sha256:bbb"}}


def test_load_index_rejects_malformed_fixture() -> None:
    """Malformed JSON files should fail with a decode error."""
    with pytest.raises(IndexDecodeError):
        load_index(fixture_path("index/malformed.json"), create=False)

    assert True


def test_load_index_rejects_wrong_shape_fixture() -> None:
    """Files with a non-index shape should fail with a decode error."""
    with pytest.raises(IndexDecodeError):
        load_index(fixture_path("index/wrong_shape.json"), create=False)

    assert True


def test_load_index_reader_accepts_binary_and_text_streams() -> None:
    """Reader loading should accept both byte and text streams."""
    document = '{"a": {"1.0.0": "sha256:aaa"}}'

    from_bytes = load_index_reader(io.BytesIO(document.encode("utf-8")))
    from_text = load_index_reader(io.StringIO(document))

    assert from_bytes.to_payload() == from_text.to_payload() == {"a": {"1.0.0": "sha256:aaa"}}


def test_load_index_reader_empty_stream_is_empty_index() -> None:
    """An immediately exhausted stream should yield an empty index."""
    index = load_index_reader(io.BytesIO(b""))

    assert len(index) == 0


def test_write_file_round_trips(tmp_path) -> None:
    """Written indexes should load back with identical entries."""
    index = VersionIndex({"mybundle": {"1.0.0": "sha256:aaa", "1.2.0": "sha256:bbb"}})
    index.add("other", "0.1.0", "sha256:ccc")
    dest = tmp_path / "repositories.json"

    index.write_file(dest)

    assert load_index(dest).to_payload() == index.to_payload()


def test_write_file_matches_to_json(tmp_path) -> None:
    """The written document should equal the rendered JSON text."""
    index = VersionIndex({"mybundle": {"1.0.0": "sha256:aaa"}})
    dest = tmp_path / "repositories.json"

    index.write_file(dest)

    assert dest.read_text(encoding="utf-8") == index.to_json()


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_write_file_applies_mode_on_create(tmp_path) -> None:
    """New index files should be created with the requested mode."""
    dest = tmp_path / "repositories.json"
    previous_umask = os.umask(0)
    try:
        VersionIndex().write_file(dest, mode=0o600)
    finally:
        os.umask(previous_umask)

    assert stat.S_IMODE(dest.stat().st_mode) == 0o600


def test_write_file_fails_for_missing_directory(tmp_path) -> None:
    """Writes into a missing directory should surface as IO errors."""
    with pytest.raises(IndexIOError):
        VersionIndex().write_file(tmp_path / "no-such-dir" / "repositories.json")

    assert True


def test_load_index_buffer_accepts_text() -> None:
    """Buffer loading should accept decoded text as well as bytes."""
    index = load_index_buffer('{"a": {"1.0.0": "d"}}')

    assert index.get("a", "1.0.0") == "d"
