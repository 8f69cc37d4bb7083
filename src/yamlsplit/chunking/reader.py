"""A byte reader that remembers what it has read, addressed by stream offset."""

import io
from typing import BinaryIO


class CaptureReader(io.RawIOBase):
    """
    Wraps a byte stream and captures every byte read through it.

    ``capture_start_pos`` is the offset in the underlying stream of the first
    captured byte. The captured bytes always cover
    ``[capture_start_pos, captured_end)``, where ``captured_end`` equals the
    total number of bytes read so far.
    """

    def __init__(self, reader: BinaryIO):
        super().__init__()
        self.reader = reader
        self.capture = bytearray()
        self.capture_start_pos = 0

    @property
    def captured_end(self) -> int:
        return self.capture_start_pos + len(self.capture)

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        data = self.reader.read(size)
        if data:
            self.capture += data
        return data

    def readinto(self, b) -> int:
        data = self.reader.read(len(b))
        b[: len(data)] = data
        self.capture += data
        return len(data)

    def _offset(self, pos: int) -> int:
        assert self.capture_start_pos <= pos <= self.captured_end, (
            f"position {pos} is outside the captured range "
            f"[{self.capture_start_pos}, {self.captured_end}]"
        )
        return pos - self.capture_start_pos

    def trim_to_start(self, pos: int) -> None:
        """Discard captured bytes before stream offset ``pos``."""
        excess = self._offset(pos)
        del self.capture[:excess]
        self.capture_start_pos = pos

    def take_to_end(self, pos: int) -> bytes:
        """Return and discard captured bytes before stream offset ``pos``."""
        take_len = self._offset(pos)
        chunk = bytes(self.capture[:take_len])
        del self.capture[:take_len]
        self.capture_start_pos = pos
        return chunk
