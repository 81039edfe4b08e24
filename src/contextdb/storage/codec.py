"""Zstandard codec for archived file content."""

from __future__ import annotations

import zstandard as zstd

from contextdb.errors import CorruptBlobError

DEFAULT_LEVEL = 3
MIN_LEVEL = 1
MAX_LEVEL = 22


class ContentCodec:
    """Compress text to zstd frames and back.

    Frames carry their content size, so ``decompress()`` detects truncated
    or padded input instead of returning partial text.
    """

    def __init__(self, level: int = DEFAULT_LEVEL) -> None:
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            raise ValueError(
                f"compression level must be in [{MIN_LEVEL}, {MAX_LEVEL}], got {level}"
            )
        self.level = level
        self._cctx = zstd.ZstdCompressor(level=level, write_content_size=True)
        self._dctx = zstd.ZstdDecompressor()

    def compress(self, text: str) -> bytes:
        return self._cctx.compress(text.encode("utf-8"))

    def decompress(self, data: bytes) -> str:
        """Return the text stored in *data*.

        Raises:
            CorruptBlobError: If *data* is not a complete zstd frame or does
                not decode to UTF-8.
        """
        if not data:
            raise CorruptBlobError("Blob is empty")
        try:
            raw = self._dctx.decompress(data)
        except zstd.ZstdError as exc:
            raise CorruptBlobError(f"Blob is not a valid zstd frame: {exc}") from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptBlobError(f"Blob does not contain UTF-8 text: {exc}") from exc
