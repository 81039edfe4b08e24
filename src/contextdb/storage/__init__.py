"""contextdb storage layer — hashing, compression, blob archive."""

from contextdb.storage.blobs import BlobStore, validate_project_name
from contextdb.storage.codec import DEFAULT_LEVEL, ContentCodec
from contextdb.storage.hashing import HASH_ALGORITHM, content_hash, is_content_hash

__all__ = [
    "BlobStore",
    "ContentCodec",
    "DEFAULT_LEVEL",
    "HASH_ALGORITHM",
    "content_hash",
    "is_content_hash",
    "validate_project_name",
]
