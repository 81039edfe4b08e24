"""contextdb — per-project content store with a searchable line index."""

from contextdb.errors import (
    BlobNotFoundError,
    ContextDBError,
    CorruptBlobError,
    InvalidProjectNameError,
    NotFoundError,
    ProjectNotFoundError,
    StorageError,
)
from contextdb.ingest.pipeline import IngestReport, SkippedFile
from contextdb.search.engine import MAX_RESULTS, SearchResult
from contextdb.store import ContextDB

__all__ = [
    "BlobNotFoundError",
    "ContextDB",
    "ContextDBError",
    "CorruptBlobError",
    "IngestReport",
    "InvalidProjectNameError",
    "MAX_RESULTS",
    "NotFoundError",
    "ProjectNotFoundError",
    "SearchResult",
    "SkippedFile",
    "StorageError",
]
