"""Tests for the per-project blob store."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from contextdb.errors import BlobNotFoundError, InvalidProjectNameError, StorageError
from contextdb.storage.blobs import BlobStore, validate_project_name
from contextdb.storage.hashing import content_hash


@pytest.fixture
def blobs(tmp_path):
    return BlobStore(tmp_path / "projects")


def _key(data: bytes = b"payload") -> str:
    return content_hash(data)


def test_put_and_get(blobs):
    key = _key()
    blobs.put("p1", key, b"compressed")
    assert blobs.get("p1", key) == b"compressed"


def test_layout(blobs, tmp_path):
    key = _key()
    path = blobs.put("p1", key, b"x")
    assert path == tmp_path / "projects" / "p1" / key
    assert path.read_bytes() == b"x"


def test_put_leaves_no_temp_files(blobs, tmp_path):
    blobs.put("p1", _key(), b"x")
    names = [p.name for p in (tmp_path / "projects" / "p1").iterdir()]
    assert names == [_key()]


def test_put_same_bytes_keeps_file(blobs):
    key = _key()
    path = blobs.put("p1", key, b"same")
    mtime = path.stat().st_mtime_ns
    with patch("contextdb.storage.blobs.os.replace") as replace:
        blobs.put("p1", key, b"same")
    replace.assert_not_called()
    assert path.stat().st_mtime_ns == mtime
    assert blobs.get("p1", key) == b"same"


def test_put_replaces_damaged_blob(blobs):
    key = _key()
    path = blobs.put("p1", key, b"good frame")
    path.write_bytes(b"good fr")
    blobs.put("p1", key, b"good frame")
    assert blobs.get("p1", key) == b"good frame"
    assert [p.name for p in path.parent.iterdir()] == [key]


def test_exists(blobs):
    key = _key()
    assert not blobs.exists("p1", key)
    blobs.put("p1", key, b"x")
    assert blobs.exists("p1", key)


def test_get_missing_raises_not_found(blobs):
    with pytest.raises(BlobNotFoundError):
        blobs.get("p1", _key())


def test_projects_are_separate(blobs):
    key = _key()
    blobs.put("p1", key, b"x")
    with pytest.raises(BlobNotFoundError):
        blobs.get("p2", key)


def test_failed_publish_cleans_up(blobs, tmp_path):
    key = _key()
    with patch("contextdb.storage.blobs.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(StorageError):
            blobs.put("p1", key, b"x")
    assert not blobs.exists("p1", key)
    assert list((tmp_path / "projects" / "p1").iterdir()) == []


@pytest.mark.parametrize("bad", ["abc", "../../etc/passwd", "A" * 64])
def test_rejects_non_hash_keys(blobs, bad):
    with pytest.raises(ValueError):
        blobs.put("p1", bad, b"x")


@pytest.mark.parametrize("name", ["", ".", "..", "a/b", "../escape", "a\\b", "a\x00b"])
def test_invalid_project_names(name):
    with pytest.raises(InvalidProjectNameError):
        validate_project_name(name)


@pytest.mark.parametrize(
    "name", ["p1", "my-api", "web_app.v2", "A", "-x", ".hidden", "has space", "caf\u00e9"]
)
def test_valid_project_names(name):
    assert validate_project_name(name) == name


def test_ensure_project_dir(blobs, tmp_path):
    d = blobs.ensure_project_dir("p1")
    assert d.is_dir()
    assert d == tmp_path / "projects" / "p1"
