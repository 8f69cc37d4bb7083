"""Small fixed-size byte buffer shared by the transcoder components."""

import io


class ArrayBuffer(io.RawIOBase):
    """
    A reusable fixed-size buffer with one-way read and write support.

    The backing array is logically divided into three contiguous sections:

    - the *read* section, whose contents were consumed by previous reads;
    - the *unread* section, which future reads produce from;
    - the *unwritten* section, which future writes populate.

    Writes append to the unread section and shrink the unwritten section.
    Space in the read section is never reclaimed automatically; use ``set``
    to empty and reinitialize the buffer.
    """

    def __init__(self, size: int):
        super().__init__()
        self.size = size
        self._buf = bytearray(size)
        self._pos = 0
        self._len = 0

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def unread(self) -> bytes:
        """Return the unread portion of the buffer."""
        return bytes(self._buf[self._pos : self._len])

    def is_empty(self) -> bool:
        """Return whether the buffer has no unread content."""
        return self._pos == self._len

    def remaining(self) -> int:
        """Return the size of the unwritten section."""
        return self.size - self._len

    def set(self, data: bytes = b"") -> None:
        """Empty the buffer, optionally refilling it with unread bytes."""
        assert len(data) <= self.size, (
            f"called ArrayBuffer.set with {len(data)} bytes "
            f"on an ArrayBuffer of size {self.size}"
        )
        self._buf[: len(data)] = data
        self._pos = 0
        self._len = len(data)

    def readinto(self, b) -> int:
        n = min(self._len - self._pos, len(b))
        b[:n] = self._buf[self._pos : self._pos + n]
        self._pos += n
        return n

    def write(self, b) -> int:
        n = min(self.remaining(), len(b))
        self._buf[self._len : self._len + n] = bytes(b[:n])
        self._len += n
        return n
