"""
Body compression for negotiated content encodings.

gzip uses the gzip container; deflate is a raw deflate stream (no zlib
header) at compression level 6.
"""

"""
Copyright 2025 Chris Bunting
File: compression.py | Purpose: gzip/deflate body codecs
@author Chris Bunting | @version 1.0.0

CHANGELOG:
2025-09-02 - Chris Bunting: Initial implementation
"""

import gzip
import zlib

from ..core.negotiator import GZIP, DEFLATE

DEFLATE_LEVEL = 6


class CompressionError(Exception):
    """Raised when a body cannot be decompressed"""
    pass


def compress(data: bytes, encoding: str) -> bytes:
    """Compress ``data`` for a negotiated encoding; other values pass through."""
    if encoding == GZIP:
        return gzip.compress(data)
    if encoding == DEFLATE:
        compressor = zlib.compressobj(DEFLATE_LEVEL, zlib.DEFLATED, -zlib.MAX_WBITS)
        return compressor.compress(data) + compressor.flush()
    return data


def decompress(data: bytes, encoding: str) -> bytes:
    """Reverse ``compress``.

    Raises:
        CompressionError: If the data is not valid for the encoding
    """
    try:
        if encoding == GZIP:
            return gzip.decompress(data)
        if encoding == DEFLATE:
            return zlib.decompress(data, -zlib.MAX_WBITS)
    except (OSError, EOFError, zlib.error) as e:
        raise CompressionError(f"Cannot decode {encoding} body: {e}") from e
    return data
