"""contextdb ingest pipeline — path expansion, archiving, line indexing."""

from contextdb.ingest.pipeline import IngestReport, Ingester, SkippedFile, split_lines
from contextdb.ingest.sources import expand_paths

__all__ = [
    "IngestReport",
    "Ingester",
    "SkippedFile",
    "expand_paths",
    "split_lines",
]
