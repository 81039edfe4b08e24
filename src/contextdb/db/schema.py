"""Catalog schema DDL and initialization."""

from __future__ import annotations

import sqlite3

_CREATE_SCHEMA_VERSION = """
CREATE TABLE IF NOT EXISTS schema_version (
    version     INTEGER NOT NULL,
    applied_at  DATETIME NOT NULL DEFAULT (datetime('now'))
)
"""

# One row per registered project; name is the upsert key.
_CREATE_PROJECTS = """
CREATE TABLE IF NOT EXISTS projects (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL UNIQUE,
    source_root TEXT NOT NULL,
    created_at  DATETIME NOT NULL DEFAULT (datetime('now')),
    updated_at  DATETIME NOT NULL DEFAULT (datetime('now'))
);
"""

# path is relative to the project's source_root (or the bare file name).
# content_hash is a weak reference into the blob store.
_CREATE_FILES = """
CREATE TABLE IF NOT EXISTS files (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id      INTEGER NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
    path            TEXT NOT NULL,
    content_hash    TEXT NOT NULL,
    compressed_size INTEGER NOT NULL,
    created_at      DATETIME NOT NULL DEFAULT (datetime('now')),
    UNIQUE (project_id, path)
);
"""

_CREATE_INDEX_ENTRIES = """
CREATE TABLE IF NOT EXISTS index_entries (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    file_id         INTEGER NOT NULL REFERENCES files(id) ON DELETE CASCADE,
    line_number     INTEGER NOT NULL,
    line_content    TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_index_entries_file
    ON index_entries(file_id, line_number);
"""

CURRENT_VERSION = 1


def initialize(conn: sqlite3.Connection) -> None:
    """Initialize the catalog schema via the migration runner (idempotent)."""
    from contextdb.db.migrations import run_migrations

    run_migrations(conn)
