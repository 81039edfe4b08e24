"""Per-project content-addressed blob store.

Layout: {root}/{project}/{content_hash}

Blobs are published atomically: bytes go to a hidden temp file in the same
directory and are moved onto the final key with os.replace(), so a crash
never leaves a partial blob under a real key. Blobs are never deleted.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path

from contextdb.errors import BlobNotFoundError, InvalidProjectNameError, StorageError
from contextdb.storage.hashing import is_content_hash

_RESERVED_NAMES: frozenset[str] = frozenset([".", ".."])
_FORBIDDEN_CHARS: tuple[str, ...] = ("/", "\\", "\x00")


def validate_project_name(name: str) -> str:
    """Return *name* unchanged, or raise InvalidProjectNameError.

    Names become a directory under the blob root, so they must be a single
    path component: not empty, not '.' or '..', and free of separators.
    """
    if not name or name in _RESERVED_NAMES or any(c in name for c in _FORBIDDEN_CHARS):
        raise InvalidProjectNameError(name)
    return name


class BlobStore:
    """Compressed file archive keyed by (project, content hash)."""

    def __init__(self, root: Path | str) -> None:
        """
        Args:
            root: Directory holding one subdirectory per project
                (``<base>/projects``).
        """
        self.root = Path(root)

    def project_dir(self, project: str) -> Path:
        return self.root / validate_project_name(project)

    def ensure_project_dir(self, project: str) -> Path:
        """Create the project's blob directory if missing and return it."""
        directory = self.project_dir(project)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create blob directory '{directory}': {exc}") from exc
        return directory

    def path_for(self, project: str, content_hash: str) -> Path:
        if not is_content_hash(content_hash):
            raise ValueError(f"Not a content hash: {content_hash!r}")
        return self.project_dir(project) / content_hash

    def exists(self, project: str, content_hash: str) -> bool:
        return self.path_for(project, content_hash).is_file()

    def put(self, project: str, content_hash: str, data: bytes) -> Path:
        """Publish *data* under *content_hash*.

        A key that already holds exactly *data* is left alone; any other
        file at the key (truncated, corrupt) is replaced.

        Returns:
            Path of the published blob.

        Raises:
            StorageError: If the blob cannot be written.
        """
        blob_path = self.path_for(project, content_hash)
        if self._holds(blob_path, data):
            return blob_path

        directory = self.ensure_project_dir(project)
        tmp_path = directory / f".{content_hash}.{uuid.uuid4().hex}.tmp"
        try:
            with tmp_path.open("wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, blob_path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Cannot write blob '{blob_path}': {exc}") from exc
        return blob_path

    def get(self, project: str, content_hash: str) -> bytes:
        """Return the stored bytes for *content_hash*.

        Raises:
            BlobNotFoundError: If no blob exists under the key.
            StorageError: If the blob exists but cannot be read.
        """
        blob_path = self.path_for(project, content_hash)
        try:
            return blob_path.read_bytes()
        except FileNotFoundError as exc:
            raise BlobNotFoundError(project, content_hash) from exc
        except OSError as exc:
            raise StorageError(f"Cannot read blob '{blob_path}': {exc}") from exc

    @staticmethod
    def _holds(blob_path: Path, data: bytes) -> bool:
        try:
            return blob_path.read_bytes() == data
        except OSError:
            return False
