"""Streaming UTF-8 encoder for decoded UTF-16 or UTF-32 text."""

import io
from typing import Iterator, Optional

from .buffer import ArrayBuffer

# The number of bytes needed to encode any character as UTF-8.
MAX_UTF8_ENCODED_LEN = 4

BOM = "\ufeff"


class UTF8Encoder(io.RawIOBase):
    """
    A readable UTF-8 byte stream over an iterator of characters.

    Pairs with ``UTF16Decoder`` or ``UTF32Decoder``. If the source text
    starts with a byte order mark, the encoder skips it and reading begins
    with the actual text content.

    Reads may request any number of bytes. When a character does not fit in
    the caller's buffer, its remaining bytes are kept and emitted first by
    the next read.
    """

    def __init__(self, source: Iterator[str]):
        super().__init__()
        self.source = source
        self._remainder = ArrayBuffer(MAX_UTF8_ENCODED_LEN)
        self._started = False

    def readable(self) -> bool:
        return True

    def _next_char(self) -> Optional[str]:
        ch = next(self.source, None)
        if not self._started:
            self._started = True
            if ch == BOM:
                ch = next(self.source, None)
        return ch

    def readinto(self, b) -> int:
        view = memoryview(b).cast("B")
        size = len(view)
        written = 0

        # First, emit the remainder of any character from a previous read.
        if not self._remainder.is_empty():
            written = self._remainder.readinto(view)
            if not self._remainder.is_empty():
                return written

        # Second, encode as much as we can directly into the destination.
        while size - written >= MAX_UTF8_ENCODED_LEN:
            ch = self._next_char()
            if ch is None:
                return written
            data = ch.encode("utf-8")
            view[written : written + len(data)] = data
            written += len(data)

        # Finally, fill the remaining space, keeping the tail of any
        # character that does not fit for the next read.
        while written < size:
            ch = self._next_char()
            if ch is None:
                return written
            data = ch.encode("utf-8")
            emit_len = min(len(data), size - written)
            view[written : written + emit_len] = data[:emit_len]
            written += emit_len
            if written == size:
                self._remainder.set(data[emit_len:])

        return written
