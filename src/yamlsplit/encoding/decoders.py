"""Streaming UTF-16 and UTF-32 decoders.

Both decoders are iterators over single-character strings. A decoding error
is raised from ``__next__`` without exhausting the iterator, so a caller may
keep pulling characters after an ``EncodingError``.
"""

from enum import Enum
from typing import BinaryIO, Optional, Tuple

from .errors import EncodingError, TruncatedInputError


class Endianness(Enum):
    """The byte order of UTF-16 or UTF-32 text."""

    BIG = "big"
    LITTLE = "little"

    def decode_unit(self, data: bytes) -> int:
        return int.from_bytes(data, self.value)


def read_unit(source: BinaryIO, size: int) -> bytes:
    """
    Read exactly ``size`` bytes from ``source``.

    Returns an empty string when the source is already at end of input, and
    raises ``TruncatedInputError`` when it ends partway through the unit.
    """
    data = source.read(size)
    if not data or len(data) == size:
        return data
    chunks = [data]
    got = len(data)
    while got < size:
        more = source.read(size - got)
        if not more:
            raise TruncatedInputError(got, size * 8)
        chunks.append(more)
        got += len(more)
    return b"".join(chunks)


class UTF16Decoder:
    """A streaming UTF-16 decoder."""

    UNIT_LEN = 2

    def __init__(self, source: BinaryIO, endianness: Endianness):
        self.source = source
        self.endianness = endianness
        self.pos = 0
        # A code unit read ahead while looking for a trailing surrogate,
        # along with its byte offset.
        self._pending: Optional[Tuple[int, int]] = None

    def __iter__(self):
        return self

    def _next_unit(self) -> Optional[Tuple[int, int]]:
        pos = self.pos
        try:
            data = read_unit(self.source, self.UNIT_LEN)
        except TruncatedInputError:
            raise TruncatedInputError(pos, 16) from None
        if not data:
            return None
        self.pos += len(data)
        return self.endianness.decode_unit(data), pos

    def __next__(self) -> str:
        if self._pending is not None:
            lead, pos = self._pending
            self._pending = None
        else:
            unit = self._next_unit()
            if unit is None:
                raise StopIteration
            lead, pos = unit

        if not 0xD800 <= lead <= 0xDFFF:
            return chr(lead)

        if lead >= 0xDC00:
            # A trailing surrogate with no leading surrogate.
            raise EncodingError(lead, pos, 16)

        unit = self._next_unit()
        if unit is None:
            raise TruncatedInputError(self.pos, 16)
        trail, trail_pos = unit
        if not 0xDC00 <= trail <= 0xDFFF:
            # Retry this unit as a leading unit on the next call.
            self._pending = unit
            raise EncodingError(trail, trail_pos, 16)

        return chr(0x10000 + ((lead - 0xD800) << 10 | (trail - 0xDC00)))


class UTF32Decoder:
    """A streaming UTF-32 decoder."""

    UNIT_LEN = 4

    def __init__(self, source: BinaryIO, endianness: Endianness):
        self.source = source
        self.endianness = endianness
        self.pos = 0

    def __iter__(self):
        return self

    def __next__(self) -> str:
        pos = self.pos
        try:
            data = read_unit(self.source, self.UNIT_LEN)
        except TruncatedInputError:
            raise TruncatedInputError(pos, 32) from None
        if not data:
            raise StopIteration
        self.pos += len(data)

        unit = self.endianness.decode_unit(data)
        if 0xD800 <= unit <= 0xDFFF or unit > 0x10FFFF:
            raise EncodingError(unit, pos, 32)
        return chr(unit)
