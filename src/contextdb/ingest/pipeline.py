"""Ingestion pipeline: read → hash → compress → archive → index.

Best-effort per file: a path that cannot be read as UTF-8 text is skipped
and reported, the rest of the batch continues. Catalog and blob-store
failures propagate and abort the batch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from contextdb.db.models import Project
from contextdb.db.repository import Repository
from contextdb.storage.blobs import BlobStore
from contextdb.storage.codec import ContentCodec
from contextdb.storage.hashing import content_hash

logger = logging.getLogger(__name__)


@dataclass
class SkippedFile:
    """A path that was left out of an ingest batch, with the reason."""

    path: str
    reason: str


@dataclass
class IngestReport:
    """Outcome of one ingest batch.

    Attributes:
        project: Name of the target project.
        ingested: Catalog paths of the files that were archived and indexed.
        skipped: Input paths that could not be read.
        lines: Total index entries written across the batch.
    """

    project: str
    ingested: list[str] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    lines: int = 0

    @property
    def count(self) -> int:
        return len(self.ingested)


def split_lines(text: str) -> list[str]:
    """Split *text* into index lines.

    Lines end at '\\n'; a trailing '\\r' is dropped, and a final newline
    does not add an empty last line. str.splitlines() is not used because
    it also breaks on form feeds and Unicode separators.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def relative_path(path: Path, source_root: str | Path) -> str:
    """Return the catalog path for *path*.

    Files under *source_root* keep their POSIX path relative to it; anything
    else falls back to the bare file name.
    """
    resolved = path.resolve()
    try:
        rel = resolved.relative_to(Path(source_root).resolve())
    except ValueError:
        return path.name
    if rel == Path("."):
        return path.name
    return rel.as_posix()


def read_text(path: Path) -> str:
    """Read *path* as strict UTF-8 (no newline translation).

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the bytes are not valid UTF-8.
    """
    return path.read_bytes().decode("utf-8")


class Ingester:
    """Archive and index files into one project."""

    def __init__(self, repo: Repository, blobs: BlobStore, codec: ContentCodec) -> None:
        self._repo = repo
        self._blobs = blobs
        self._codec = codec

    def ingest(self, project: Project, paths: Iterable[Path | str]) -> IngestReport:
        """Ingest every readable path in *paths* into *project*."""
        report = IngestReport(project=project.name)
        for raw_path in paths:
            path = Path(raw_path)
            try:
                text = read_text(path)
            except (OSError, UnicodeDecodeError) as exc:
                reason = _skip_reason(exc)
                logger.warning("Skipping %s: %s", path, reason)
                report.skipped.append(SkippedFile(path=str(path), reason=reason))
                continue

            rel, n_lines = self._ingest_text(project, path, text)
            report.ingested.append(rel)
            report.lines += n_lines

        logger.info(
            "Ingested %d file(s) into '%s' (%d skipped)",
            report.count,
            project.name,
            len(report.skipped),
        )
        return report

    def _ingest_text(self, project: Project, path: Path, text: str) -> tuple[str, int]:
        data = text.encode("utf-8")
        digest = content_hash(data)
        compressed = self._codec.compress(text)

        # Blob first: a crash after this leaves an orphan blob, never a
        # catalog row pointing at a missing blob.
        self._blobs.put(project.name, digest, compressed)

        rel = relative_path(path, project.source_root)
        with self._repo.transaction():
            file_id = self._repo.upsert_file(project.id, rel, digest, len(compressed))
            n_lines = self._repo.replace_index_entries(file_id, split_lines(text))

        logger.debug("Indexed %s as %s (%d lines, %s)", path, rel, n_lines, digest[:12])
        return rel, n_lines


def _skip_reason(exc: Exception) -> str:
    if isinstance(exc, UnicodeDecodeError):
        return "not valid UTF-8 text"
    if isinstance(exc, FileNotFoundError):
        return "file not found"
    if isinstance(exc, IsADirectoryError):
        return "is a directory"
    if isinstance(exc, PermissionError):
        return "permission denied"
    return str(exc)
