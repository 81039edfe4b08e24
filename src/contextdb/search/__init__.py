"""contextdb search — literal substring queries with context hydration."""

from contextdb.search.engine import MAX_RESULTS, SearchEngine, SearchResult

__all__ = ["MAX_RESULTS", "SearchEngine", "SearchResult"]
