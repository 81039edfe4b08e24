"""Forward-only migration runner for the catalog schema."""

from __future__ import annotations

import sqlite3

from contextdb.db.schema import (
    _CREATE_FILES,
    _CREATE_INDEX_ENTRIES,
    _CREATE_PROJECTS,
    _CREATE_SCHEMA_VERSION,
)

_V1_SQL = _CREATE_PROJECTS + _CREATE_FILES + _CREATE_INDEX_ENTRIES

# Append-only. Each entry: (version: int, sql: str).
# executescript() issues an implicit COMMIT before running.
MIGRATIONS: list[tuple[int, str]] = [
    (1, _V1_SQL),
]


def current_version(conn: sqlite3.Connection) -> int:
    """Return the highest applied migration version (0 on a fresh database)."""
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] if row[0] is not None else 0


def run_migrations(conn: sqlite3.Connection) -> None:
    """Apply all pending migrations in ascending version order.

    Idempotent: safe to call on a database at any version.
    """
    conn.execute(_CREATE_SCHEMA_VERSION)
    conn.commit()

    current = current_version(conn)

    for version, sql in MIGRATIONS:
        if version > current:
            conn.executescript(sql)
            conn.execute(
                "INSERT INTO schema_version (version) VALUES (?)", (version,)
            )
            conn.commit()
