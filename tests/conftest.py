"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from contextdb.db.connection import Database
from contextdb.db.schema import initialize
from contextdb.store import ContextDB


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep CONTEXTDB_* variables from the developer's shell out of tests."""
    monkeypatch.delenv("CONTEXTDB_HOME", raising=False)
    monkeypatch.delenv("CONTEXTDB_COMPRESSION_LEVEL", raising=False)


@pytest.fixture
def tmp_db(tmp_path):
    """File-based catalog in tmp_path with schema initialized, closed after test."""
    db = Database(tmp_path / "contextdb.db")
    conn = db.connect()
    initialize(conn)
    yield conn
    conn.close()


@pytest.fixture
def home(tmp_path):
    """Store base directory (not yet created)."""
    return tmp_path / "home"


@pytest.fixture
def src_dir(tmp_path):
    """Source tree root for ingested files."""
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def store(home):
    """Open ContextDB under *home*, closed after test."""
    db = ContextDB(home)
    yield db
    db.close()
