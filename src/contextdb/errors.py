"""Exception hierarchy shared by every contextdb layer.

Storage-layer failures (sqlite3.Error, OSError) are wrapped in StorageError
with the original exception chained. Per-file read failures during ingest
are not exceptions at all; they are reported as SkippedFile entries.
"""

from __future__ import annotations


class ContextDBError(Exception):
    """Base class for all contextdb errors."""


class NotFoundError(ContextDBError, LookupError):
    """A referenced project or blob does not exist."""


class ProjectNotFoundError(NotFoundError):
    """No project is registered under the given name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Project '{name}' is not registered.")
        self.name = name


class BlobNotFoundError(NotFoundError):
    """No blob is stored under the given project/hash key."""

    def __init__(self, project: str, content_hash: str) -> None:
        super().__init__(f"No blob '{content_hash}' in project '{project}'.")
        self.project = project
        self.content_hash = content_hash


class CorruptBlobError(ContextDBError):
    """Stored bytes could not be decoded back into text."""


class StorageError(ContextDBError):
    """The catalog or the blob directory is unreachable or unwritable."""


class InvalidProjectNameError(ContextDBError, ValueError):
    """Project name cannot be used as a single directory component."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid project name {name!r}: must be a single path component "
            "(not empty, not '.' or '..', no '/' or '\\')."
        )
        self.name = name
