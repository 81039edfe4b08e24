"""ContextDB — the library surface: register, ingest, search, list_projects.

One ContextDB owns one catalog connection for its lifetime and scopes a
transaction per multi-step write. It performs no terminal or stream I/O, so
the CLI and any other adapter can be layered on top of it unchanged.

On-disk layout under *base_dir*::

    contextdb.db                      catalog (projects, files, index_entries)
    projects/<name>/<sha256>          zstd-compressed file content
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

from contextdb.config import ContextDBConfig
from contextdb.db.connection import Database
from contextdb.db.models import Project, ProjectStats
from contextdb.db.repository import Repository
from contextdb.db.schema import initialize
from contextdb.errors import ProjectNotFoundError, StorageError
from contextdb.ingest.pipeline import IngestReport, Ingester
from contextdb.search.engine import MAX_RESULTS, SearchEngine, SearchResult
from contextdb.storage.blobs import BlobStore, validate_project_name
from contextdb.storage.codec import DEFAULT_LEVEL, ContentCodec

DB_NAME = "contextdb.db"
PROJECTS_DIR = "projects"


class ContextDB:
    """Per-project content store with a searchable line index."""

    def __init__(
        self,
        base_dir: Path | str,
        *,
        compression_level: int = DEFAULT_LEVEL,
        max_results: int = MAX_RESULTS,
    ) -> None:
        """Open (or create) the store under *base_dir*.

        Raises:
            StorageError: If the directory or catalog cannot be created.
        """
        self.base_dir = Path(base_dir)
        self.projects_dir = self.base_dir / PROJECTS_DIR
        try:
            self.projects_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create store at '{self.base_dir}': {exc}") from exc

        self._conn = Database(self.base_dir / DB_NAME).connect()
        try:
            with _catalog_errors():
                initialize(self._conn)
        except StorageError:
            self._conn.close()
            raise

        self._repo = Repository(self._conn)
        self._blobs = BlobStore(self.projects_dir)
        codec = ContentCodec(compression_level)
        self._ingester = Ingester(self._repo, self._blobs, codec)
        self._engine = SearchEngine(self._repo, self._blobs, codec, max_results=max_results)

    @classmethod
    def from_config(cls, cfg: ContextDBConfig) -> ContextDB:
        return cls(
            cfg.base_dir,
            compression_level=cfg.storage.compression_level,
            max_results=cfg.search.max_results,
        )

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> ContextDB:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Project registry
    # ------------------------------------------------------------------

    def register(self, name: str, source_root: Path | str) -> None:
        """Register *name* with *source_root*, or update an existing project.

        *source_root* is stored resolved, so later ingests do not depend on
        the working directory.

        Raises:
            InvalidProjectNameError: If *name* is not a safe directory name.
        """
        validate_project_name(name)
        self._blobs.ensure_project_dir(name)
        with _catalog_errors():
            self._repo.upsert_project(name, str(Path(source_root).expanduser().resolve()))

    def list_projects(self) -> list[str]:
        with _catalog_errors():
            return [p.name for p in self._repo.list_projects()]

    def get_project(self, name: str) -> Project:
        """Return the project registered as *name*.

        Raises:
            ProjectNotFoundError: If no such project exists.
        """
        with _catalog_errors():
            project = self._repo.get_project(name)
        if project is None:
            raise ProjectNotFoundError(name)
        return project

    def project_stats(self, name: str) -> ProjectStats:
        project = self.get_project(name)
        with _catalog_errors():
            return self._repo.project_stats(project)

    # ------------------------------------------------------------------
    # Ingest
    # ------------------------------------------------------------------

    def ingest(self, project_name: str, paths: Iterable[Path | str]) -> int:
        """Ingest *paths* into *project_name*; return how many were ingested."""
        return self.ingest_files(project_name, paths).count

    def ingest_files(self, project_name: str, paths: Iterable[Path | str]) -> IngestReport:
        """Ingest *paths* and return the full report, including skipped files.

        Raises:
            ProjectNotFoundError: If *project_name* is not registered.
            StorageError: If the catalog or blob directory fails.
        """
        project = self.get_project(project_name)
        with _catalog_errors():
            return self._ingester.ingest(project, paths)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(
        self, project_name: str, query: str, want_full_context: bool = False
    ) -> list[SearchResult]:
        """Return lines of *project_name* containing *query* (case-sensitive).

        Raises:
            ProjectNotFoundError: If *project_name* is not registered.
        """
        project = self.get_project(project_name)
        with _catalog_errors():
            return self._engine.search(project, query, want_full_context)


@contextmanager
def _catalog_errors() -> Iterator[None]:
    """Re-raise sqlite3 errors as StorageError."""
    try:
        yield
    except sqlite3.Error as exc:
        raise StorageError(f"Catalog operation failed: {exc}") from exc
