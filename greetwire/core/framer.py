"""
Message framing for raw HTTP byte streams.

This module decides when the bytes read from a stream make up one complete
message:
- Accumulates bounded-size chunks into a growing buffer
- Detects the CRLFCRLF header terminator
- Completes the body from the declared Content-Length

A chunk shorter than the read size is treated as end of stream. There is no
other EOF signal, so a peer that stalls mid-message is cut short; framing is
best-effort under network delay.
"""

import asyncio
from typing import Optional

HEADER_TERMINATOR = b"\r\n\r\n"
BUFFER_SIZE = 2048


def declared_content_length(head: bytes) -> int:
    """Return the first Content-Length found in a message head.

    Args:
        head: Raw header block, without the terminator

    Returns:
        The declared length, or 0 when the header is missing or unparsable
    """
    for line in head.decode("latin1").split("\r\n"):
        if line.lower().startswith("content-length:"):
            try:
                length = int(line.split(":", 1)[1].strip())
            except ValueError:
                return 0
            return max(length, 0)
    return 0


class MessageFramer:
    """Incremental framer fed one chunk at a time.

    Attributes:
        buffer_size: Capacity of a single read; shorter chunks end the message
        done: True once no more reading is needed
    """

    def __init__(self, buffer_size: int = BUFFER_SIZE):
        if buffer_size < 1:
            raise ValueError("Buffer size must be at least 1")
        self.buffer_size = buffer_size
        self.done = False
        self._buffer = bytearray()
        self._header_end: Optional[int] = None
        self._declared_length = 0

    @property
    def data(self) -> bytes:
        """Bytes accumulated so far."""
        return bytes(self._buffer)

    @property
    def headers_complete(self) -> bool:
        return self._header_end is not None

    def feed(self, chunk: bytes) -> bool:
        """Add a chunk read from the stream.

        Args:
            chunk: Bytes from a single read; empty means the peer closed

        Returns:
            True when the caller should stop reading
        """
        if self.done:
            return True
        if not chunk:
            self.done = True
            return True

        self._buffer.extend(chunk)

        if self._header_end is None:
            index = self._buffer.find(HEADER_TERMINATOR)
            if index != -1:
                self._header_end = index
                self._declared_length = declared_content_length(bytes(self._buffer[:index]))

        if self._header_end is not None:
            received = len(self._buffer) - self._header_end - len(HEADER_TERMINATOR)
            if self._declared_length == 0 or received >= self._declared_length:
                self.done = True

        if len(chunk) < self.buffer_size:
            self.done = True

        return self.done


async def read_message(reader: asyncio.StreamReader, buffer_size: int = BUFFER_SIZE) -> bytes:
    """Read one message from a stream.

    Args:
        reader: Anything with an awaitable ``read(n)``
        buffer_size: Maximum bytes requested per read

    Returns:
        The accumulated bytes, possibly a partial message if the peer
        closed early
    """
    framer = MessageFramer(buffer_size)
    while not framer.done:
        chunk = await reader.read(buffer_size)
        framer.feed(chunk)
    return framer.data
