"""Tests for the forward-only migration runner."""

from __future__ import annotations

import sqlite3

import pytest

from contextdb.db.connection import Database
from contextdb.db.migrations import MIGRATIONS, current_version, run_migrations
from contextdb.db.schema import CURRENT_VERSION, initialize


def _fresh_conn(tmp_path):
    """Open a new connection without running migrations."""
    db = Database(tmp_path / "test.db")
    return db.connect()


def _table_exists(conn, name: str) -> bool:
    return conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (name,)
    ).fetchone() is not None


# --- Bootstrap ---

def test_run_migrations_creates_schema_version(tmp_path):
    conn = _fresh_conn(tmp_path)
    run_migrations(conn)
    assert _table_exists(conn, "schema_version")
    conn.close()


def test_run_migrations_records_version(tmp_path):
    conn = _fresh_conn(tmp_path)
    run_migrations(conn)
    assert current_version(conn) == MIGRATIONS[-1][0] == CURRENT_VERSION
    conn.close()


# --- Idempotency ---

def test_run_migrations_idempotent(tmp_path):
    conn = _fresh_conn(tmp_path)
    run_migrations(conn)
    run_migrations(conn)
    count = conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0]
    assert count == len(MIGRATIONS)
    conn.close()


def test_initialize_delegates_to_migrations(tmp_path):
    conn = _fresh_conn(tmp_path)
    initialize(conn)
    assert current_version(conn) == CURRENT_VERSION
    conn.close()


# --- Tables created ---

@pytest.mark.parametrize("table", ["projects", "files", "index_entries"])
def test_run_migrations_creates_tables(tmp_path, table):
    conn = _fresh_conn(tmp_path)
    run_migrations(conn)
    assert _table_exists(conn, table)
    conn.close()


def test_files_unique_per_project_path(tmp_db):
    tmp_db.execute("INSERT INTO projects (name, source_root) VALUES ('p', '/src')")
    tmp_db.execute(
        "INSERT INTO files (project_id, path, content_hash, compressed_size) VALUES (1, 'a.py', 'h', 1)"
    )
    with pytest.raises(sqlite3.IntegrityError):
        tmp_db.execute(
            "INSERT INTO files (project_id, path, content_hash, compressed_size) VALUES (1, 'a.py', 'h2', 2)"
        )


def test_index_entries_require_file(tmp_db):
    with pytest.raises(sqlite3.IntegrityError):
        tmp_db.execute(
            "INSERT INTO index_entries (file_id, line_number, line_content) VALUES (999, 1, 'x')"
        )
