"""Content hashing — the blob key format.

Blob keys are lowercase hex SHA-256 digests of the file bytes. The algorithm
is part of the on-disk layout: changing it orphans every stored blob.
"""

from __future__ import annotations

import hashlib
import re

HASH_ALGORITHM = "sha256"

_HASH_RE: re.Pattern[str] = re.compile(r"[0-9a-f]{64}")


def content_hash(content: bytes) -> str:
    """Return the hex SHA-256 digest of *content*."""
    return hashlib.sha256(content).hexdigest()


def is_content_hash(value: str) -> bool:
    """True if *value* is shaped like a key produced by content_hash()."""
    return _HASH_RE.fullmatch(value) is not None
