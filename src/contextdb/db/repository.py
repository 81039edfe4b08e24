"""Repository pattern for all catalog operations.

Single interface for: projects, file records, line index entries and
substring search. Multi-statement writes run inside transaction() so a
reader never observes a file whose index is half rewritten.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from contextdb.db.models import FileRecord, IndexEntry, LineMatch, Project, ProjectStats


class Repository:
    """Data access layer for all catalog entities.

    Wraps an open sqlite3.Connection in autocommit mode (see
    contextdb.db.connection.Database). The connection is owned by the caller
    and must be closed after use.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialise with an open database connection.

        Args:
            conn: An open sqlite3.Connection with the schema initialised
                (see contextdb.db.schema.initialize).
        """
        self._conn = conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed statements as one IMMEDIATE transaction.

        Nested use joins the outer transaction; only the outermost block
        commits or rolls back.
        """
        if self._conn.in_transaction:
            yield
            return
        self._conn.execute("BEGIN IMMEDIATE")
        try:
            yield
        except BaseException:
            self._conn.execute("ROLLBACK")
            raise
        self._conn.execute("COMMIT")

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def upsert_project(self, name: str, source_root: str) -> Project:
        """Insert a project, or refresh source_root/updated_at if *name* exists.

        The row id and created_at of an existing project are preserved, so
        its file records stay attached.
        """
        with self.transaction():
            self._conn.execute(
                """
                INSERT INTO projects (name, source_root) VALUES (?, ?)
                ON CONFLICT(name) DO UPDATE SET
                    source_root = excluded.source_root,
                    updated_at = datetime('now')
                """,
                (name, source_root),
            )
            row = self._conn.execute(
                "SELECT id, name, source_root, created_at, updated_at FROM projects WHERE name = ?",
                (name,),
            ).fetchone()
        return _row_to_project(row)

    def get_project(self, name: str) -> Project | None:
        """Return a project by name, or None if not registered."""
        row = self._conn.execute(
            "SELECT id, name, source_root, created_at, updated_at FROM projects WHERE name = ?",
            (name,),
        ).fetchone()
        return _row_to_project(row) if row else None

    def list_projects(self) -> list[Project]:
        """Return all projects ordered by name."""
        rows = self._conn.execute(
            "SELECT id, name, source_root, created_at, updated_at FROM projects ORDER BY name"
        ).fetchall()
        return [_row_to_project(r) for r in rows]

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def upsert_file(
        self, project_id: int, path: str, content_hash: str, compressed_size: int
    ) -> int:
        """Insert or refresh the file record for (*project_id*, *path*).

        Returns:
            The file id (unchanged for an existing record).
        """
        with self.transaction():
            self._conn.execute(
                """
                INSERT INTO files (project_id, path, content_hash, compressed_size)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(project_id, path) DO UPDATE SET
                    content_hash = excluded.content_hash,
                    compressed_size = excluded.compressed_size
                """,
                (project_id, path, content_hash, compressed_size),
            )
            row = self._conn.execute(
                "SELECT id FROM files WHERE project_id = ? AND path = ?",
                (project_id, path),
            ).fetchone()
        return row["id"]

    def get_file(self, project_id: int, path: str) -> FileRecord | None:
        row = self._conn.execute(
            """
            SELECT id, project_id, path, content_hash, compressed_size, created_at
            FROM files WHERE project_id = ? AND path = ?
            """,
            (project_id, path),
        ).fetchone()
        return _row_to_file(row) if row else None

    def list_files(self, project_id: int) -> list[FileRecord]:
        """Return the project's file records ordered by path."""
        rows = self._conn.execute(
            """
            SELECT id, project_id, path, content_hash, compressed_size, created_at
            FROM files WHERE project_id = ? ORDER BY path
            """,
            (project_id,),
        ).fetchall()
        return [_row_to_file(r) for r in rows]

    # ------------------------------------------------------------------
    # Index entries
    # ------------------------------------------------------------------

    def replace_index_entries(self, file_id: int, lines: Iterable[str]) -> int:
        """Replace every index entry of *file_id* with *lines* (1-based).

        Returns:
            Number of entries inserted.
        """
        rows = [(file_id, n, line) for n, line in enumerate(lines, start=1)]
        with self.transaction():
            self._conn.execute("DELETE FROM index_entries WHERE file_id = ?", (file_id,))
            self._conn.executemany(
                "INSERT INTO index_entries (file_id, line_number, line_content) VALUES (?, ?, ?)",
                rows,
            )
        return len(rows)

    def list_index_entries(self, file_id: int) -> list[IndexEntry]:
        rows = self._conn.execute(
            """
            SELECT id, file_id, line_number, line_content
            FROM index_entries WHERE file_id = ? ORDER BY line_number
            """,
            (file_id,),
        ).fetchall()
        return [
            IndexEntry(
                id=r["id"],
                file_id=r["file_id"],
                line_number=r["line_number"],
                line_content=r["line_content"],
            )
            for r in rows
        ]

    def count_index_entries(self, file_id: int) -> int:
        return self._conn.execute(
            "SELECT COUNT(*) FROM index_entries WHERE file_id = ?", (file_id,)
        ).fetchone()[0]

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search_lines(self, project_id: int, query: str, limit: int) -> list[LineMatch]:
        """Return lines of *project_id* containing *query*, ordered by (path, line).

        instr() is a case-sensitive literal substring test; LIKE would fold
        ASCII case and treat '%' and '_' in the query as wildcards.
        """
        rows = self._conn.execute(
            """
            SELECT f.path, e.line_number, e.line_content, f.content_hash
            FROM index_entries e
            JOIN files f ON e.file_id = f.id
            WHERE f.project_id = ? AND instr(e.line_content, ?) > 0
            ORDER BY f.path, e.line_number
            LIMIT ?
            """,
            (project_id, query, limit),
        ).fetchall()
        return [
            LineMatch(
                file_path=r["path"],
                line_number=r["line_number"],
                line_content=r["line_content"],
                content_hash=r["content_hash"],
            )
            for r in rows
        ]

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def project_stats(self, project: Project) -> ProjectStats:
        files, compressed = self._conn.execute(
            "SELECT COUNT(*), COALESCE(SUM(compressed_size), 0) FROM files WHERE project_id = ?",
            (project.id,),
        ).fetchone()
        lines = self._conn.execute(
            """
            SELECT COUNT(*) FROM index_entries e
            JOIN files f ON e.file_id = f.id
            WHERE f.project_id = ?
            """,
            (project.id,),
        ).fetchone()[0]
        return ProjectStats(project=project, files=files, lines=lines, compressed_bytes=compressed)


# ------------------------------------------------------------------
# Row → model helpers
# ------------------------------------------------------------------

def _row_to_project(row: sqlite3.Row) -> Project:
    return Project(
        id=row["id"],
        name=row["name"],
        source_root=row["source_root"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_file(row: sqlite3.Row) -> FileRecord:
    return FileRecord(
        id=row["id"],
        project_id=row["project_id"],
        path=row["path"],
        content_hash=row["content_hash"],
        compressed_size=row["compressed_size"],
        created_at=row["created_at"],
    )
