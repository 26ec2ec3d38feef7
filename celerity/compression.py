"""Detection, compression and decompression of zlib and gzip payloads."""

from __future__ import annotations

import zlib
from enum import Enum
from typing import SupportsBytes

_ZLIB_WINDOW_BITS = 15
_GZIP_WINDOW_BITS = _ZLIB_WINDOW_BITS + 16
_MEMORY_LEVEL = 8


class CompressionType(Enum):
    """The container formats recognised for compressed payloads."""

    GZIP = "gzip"
    ZLIB = "zlib"
    NONE = "none"


def _window_bits(compression_type: CompressionType) -> int:
    if compression_type is CompressionType.GZIP:
        return _GZIP_WINDOW_BITS
    return _ZLIB_WINDOW_BITS


def detect_compression_type(data: bytes | bytearray | SupportsBytes) -> CompressionType:
    """Guess the format of ``data`` from its first two bytes."""
    raw = bytes(data)
    if len(raw) >= 2:
        first, second = raw[0], raw[1]
        if first == 0x1F and second == 0x8B:
            return CompressionType.GZIP
        if first & 0x0F == 0x08 and ((first << 8) | second) % 31 == 0:
            return CompressionType.ZLIB
    return CompressionType.NONE


def compress(
    data: bytes | bytearray | SupportsBytes, compression_type: CompressionType
) -> bytes:
    """Compress ``data`` in the given format; NONE returns it unchanged."""
    raw = bytes(data)
    if compression_type is CompressionType.NONE:
        return raw
    compressor = zlib.compressobj(
        zlib.Z_DEFAULT_COMPRESSION,
        zlib.DEFLATED,
        _window_bits(compression_type),
        _MEMORY_LEVEL,
        zlib.Z_DEFAULT_STRATEGY,
    )
    return compressor.compress(raw) + compressor.flush(zlib.Z_FINISH)


def decompress(data: bytes | bytearray | SupportsBytes) -> bytes:
    """Decompress ``data`` if it looks like zlib or gzip, else return it unchanged.

    Raises ValueError if the stream is corrupt or ends before it is complete.
    """
    raw = bytes(data)
    compression_type = detect_compression_type(raw)
    if compression_type is CompressionType.NONE:
        return raw
    decompressor = zlib.decompressobj(_window_bits(compression_type))
    try:
        output = decompressor.decompress(raw)
    except zlib.error as err:
        raise ValueError(f"inflate failed: {err}") from err
    if not decompressor.eof:
        raise ValueError("inflate failed: compressed stream is incomplete")
    return output