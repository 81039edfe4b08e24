"""Literal substring search over a project's line index.

No tokenization and no ranking: a line matches iff the query occurs in it
verbatim (case-sensitive). With full context requested, each match carries
the decompressed file it came from; a missing or corrupt blob degrades that
one result to ``full_context=None`` instead of failing the search.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from contextdb.db.models import Project
from contextdb.db.repository import Repository
from contextdb.errors import BlobNotFoundError, CorruptBlobError
from contextdb.storage.blobs import BlobStore
from contextdb.storage.codec import ContentCodec

logger = logging.getLogger(__name__)

MAX_RESULTS = 100


@dataclass
class SearchResult:
    """A matching line, optionally with the full text of its file.

    Attributes:
        file_path: Catalog path of the file (relative to the project root).
        line_number: 1-based line number.
        line_content: The matching line.
        full_context: Whole decompressed file, or None when not requested or
            not recoverable.
    """

    file_path: str
    line_number: int
    line_content: str
    full_context: str | None = None


class SearchEngine:
    """Evaluate substring queries against the catalog."""

    def __init__(
        self,
        repo: Repository,
        blobs: BlobStore,
        codec: ContentCodec,
        max_results: int = MAX_RESULTS,
    ) -> None:
        if not 1 <= max_results <= MAX_RESULTS:
            raise ValueError(f"max_results must be in [1, {MAX_RESULTS}], got {max_results}")
        self._repo = repo
        self._blobs = blobs
        self._codec = codec
        self.max_results = max_results

    def search(
        self, project: Project, query: str, want_full_context: bool = False
    ) -> list[SearchResult]:
        """Return up to ``max_results`` lines of *project* containing *query*.

        Results are ordered by (file path, line number).
        """
        matches = self._repo.search_lines(project.id, query, self.max_results)
        hydrated: dict[str, str | None] = {}
        results: list[SearchResult] = []
        for match in matches:
            full_context = None
            if want_full_context:
                if match.content_hash not in hydrated:
                    hydrated[match.content_hash] = self._load_context(
                        project.name, match.content_hash
                    )
                full_context = hydrated[match.content_hash]
            results.append(
                SearchResult(
                    file_path=match.file_path,
                    line_number=match.line_number,
                    line_content=match.line_content,
                    full_context=full_context,
                )
            )
        return results

    def _load_context(self, project: str, content_hash: str) -> str | None:
        try:
            return self._codec.decompress(self._blobs.get(project, content_hash))
        except (BlobNotFoundError, CorruptBlobError) as exc:
            logger.warning("No full context for blob %s: %s", content_hash, exc)
            return None
