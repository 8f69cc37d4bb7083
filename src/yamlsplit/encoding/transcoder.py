"""Reads a YAML 1.2 stream as UTF-8 regardless of its source encoding."""

import io
from typing import BinaryIO

from ..core.logging import log
from .buffer import ArrayBuffer
from .decoders import Endianness, UTF16Decoder, UTF32Decoder
from .detect import DETECT_LEN, Encoding, detect
from .encoder import UTF8Encoder


class ChainReader(io.RawIOBase):
    """Reads from ``first`` until it is exhausted, then from ``second``."""

    def __init__(self, first: BinaryIO, second: BinaryIO):
        super().__init__()
        self.first = first
        self.second = second
        self._first_done = False

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if len(b) == 0:
            return 0
        if not self._first_done:
            n = self.first.readinto(b)
            if n:
                return n
            self._first_done = True
        return _readinto(self.second, b)


def _readinto(source: BinaryIO, b) -> int:
    if hasattr(source, "readinto"):
        return source.readinto(b) or 0
    data = source.read(len(b))
    b[: len(data)] = data
    return len(data)


def _buffered(reader: BinaryIO) -> BinaryIO:
    if isinstance(reader, io.RawIOBase):
        return io.BufferedReader(reader)
    return reader


class Transcoder(io.RawIOBase):
    """
    Reads a YAML 1.2 stream as UTF-8 regardless of its source encoding.

    For UTF-16 and UTF-32 sources the stream is transparently re-encoded to
    UTF-8 and an initial byte order mark is stripped. UTF-8 sources are read
    directly.

    Detection and re-encoding behavior for arbitrary (non-YAML) text inputs
    is not well-defined.
    """

    def __init__(self, reader: BinaryIO, encoding: Encoding):
        super().__init__()
        self.encoding = encoding
        if encoding is Encoding.UTF8:
            self._inner = reader
        else:
            endianness = (
                Endianness.BIG
                if encoding in (Encoding.UTF16BE, Encoding.UTF32BE)
                else Endianness.LITTLE
            )
            decoder_cls = (
                UTF16Decoder
                if encoding in (Encoding.UTF16BE, Encoding.UTF16LE)
                else UTF32Decoder
            )
            self._inner = UTF8Encoder(decoder_cls(_buffered(reader), endianness))

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> "Transcoder":
        """
        Create a transcoder by detecting the encoding from the first bytes.

        Up to ``DETECT_LEN`` bytes are read into a prefix buffer, which is
        replayed ahead of the rest of ``reader`` so no input is lost.
        """
        prefix = ArrayBuffer(DETECT_LEN)
        while prefix.remaining():
            data = reader.read(prefix.remaining())
            if not data:
                break
            prefix.write(data)

        encoding = detect(prefix.unread())
        log.debug(
            "transcoder.detected",
            encoding=encoding.value,
            prefix=prefix.unread().hex(),
        )
        return cls(ChainReader(prefix, reader), encoding)

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        return _readinto(self._inner, b)
