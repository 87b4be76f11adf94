"""zlib compression with size-bounded decompression."""

from __future__ import annotations

import enum
import zlib

__all__ = ["CompressionResult", "CompressionError", "compress", "decompress"]


class CompressionResult(enum.Enum):
    """Outcome of a compression operation; the value is its description."""

    SUCCESS = "success"
    INVALID_LEVEL = "invalid compression level"
    COMPRESSION_FAILED = "compression operation failed"
    DECOMPRESSION_FAILED = "decompression operation failed"
    BUFFER_TOO_SMALL = "buffer too small for operation"
    INVALID_DATA = "invalid compressed data"

    def __str__(self) -> str:
        return self.value


class CompressionError(Exception):
    """Raised when compressing or decompressing fails."""

    def __init__(self, result: CompressionResult) -> None:
        super().__init__(result.value)
        self.result = result


def compress(data: bytes, level: int = 6) -> bytes:
    """Compress ``data`` into a zlib stream at ``level`` (0 to 9)."""
    if not 0 <= level <= 9:
        raise CompressionError(CompressionResult.INVALID_LEVEL)
    try:
        return zlib.compress(bytes(data), level)
    except zlib.error as exc:
        raise CompressionError(CompressionResult.COMPRESSION_FAILED) from exc


def decompress(data: bytes, original_size: int) -> bytes:
    """Inflate a zlib stream whose output must fit in ``original_size`` bytes."""
    if original_size < 0:
        raise ValueError("original_size must not be negative")
    inflater = zlib.decompressobj()
    try:
        # One byte of headroom tells "fits exactly" apart from "overflows".
        output = inflater.decompress(bytes(data), original_size + 1)
    except zlib.error as exc:
        raise CompressionError(CompressionResult.INVALID_DATA) from exc
    if len(output) > original_size:
        raise CompressionError(CompressionResult.BUFFER_TOO_SMALL)
    if not inflater.eof:
        raise CompressionError(CompressionResult.INVALID_DATA)
    return output