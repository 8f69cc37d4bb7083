"""
Parser events with byte offsets into the canonical UTF-8 stream.

The event source is PyYAML's pure-Python parser. PyYAML marks count
characters, so the adapter decodes the same bytes alongside the parser and
translates character indexes back into byte offsets for the events the
chunker acts on.
"""

from __future__ import annotations

import codecs
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable, Deque, Iterator, Optional, Protocol, Tuple

import yaml
from yaml.error import MarkedYAMLError
from yaml.parser import Parser
from yaml.reader import Reader, ReaderError
from yaml.scanner import Scanner

from .errors import LocatedProblem, ParseError


class EventKind(Enum):
    STREAM_START = "stream-start"
    STREAM_END = "stream-end"
    DOCUMENT_START = "document-start"
    DOCUMENT_END = "document-end"
    OTHER = "other"


_KINDS = {
    yaml.StreamStartEvent: EventKind.STREAM_START,
    yaml.StreamEndEvent: EventKind.STREAM_END,
    yaml.DocumentStartEvent: EventKind.DOCUMENT_START,
    yaml.DocumentEndEvent: EventKind.DOCUMENT_END,
}


@dataclass(frozen=True)
class ParserEvent:
    """
    A parser event located in the canonical stream.

    Only stream and document events carry offsets; ``start`` and ``end`` are
    ``None`` for every other kind.
    """

    kind: EventKind
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def offset(self) -> Optional[int]:
        """The boundary position: the end of a document end, else the start."""
        if self.kind is EventKind.DOCUMENT_END:
            return self.end
        return self.start


class EventSource(Protocol):
    def __iter__(self) -> Iterator[ParserEvent]: ...

    def __next__(self) -> ParserEvent: ...

    def close(self) -> None: ...


EventSourceFactory = Callable[[BinaryIO], EventSource]


class TextPositions:
    """
    Maps character indexes of a UTF-8 stream to byte offsets.

    Bytes are fed in as they are read. Text before the most recently
    translated index is discarded, so indexes must be translated in
    non-decreasing order.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")("surrogateescape")
        # (first character index, first byte offset, text)
        self._segments: Deque[Tuple[int, int, str]] = deque()
        self.chars = 0
        self.bytes = 0

    def feed(self, data: bytes) -> None:
        text = self._decoder.decode(data, final=not data)
        if text:
            self._segments.append((self.chars, self.bytes, text))
            self.chars += len(text)
            self.bytes += len(text.encode("utf-8", "surrogateescape"))

    def byte_offset(self, index: int) -> int:
        """Translate a character index into a byte offset."""
        while self._segments:
            char_start, _, text = self._segments[0]
            if index < char_start + len(text):
                break
            self._segments.popleft()

        if not self._segments:
            if index != self.chars:
                raise LookupError(f"character index {index} is not available")
            return self.bytes

        char_start, byte_start, text = self._segments[0]
        if index < char_start:
            raise LookupError(f"character index {index} was already discarded")
        head = text[: index - char_start]
        return byte_start + len(head.encode("utf-8", "surrogateescape"))


class _TrackedStream:
    """The narrow read interface handed to PyYAML."""

    def __init__(self, reader: BinaryIO, positions: TextPositions):
        self.reader = reader
        self.positions = positions
        self.name = getattr(reader, "name", "<stream>")

    def read(self, size: int) -> bytes:
        data = self.reader.read(size)
        self.positions.feed(data)
        return data


class _EventParser(Reader, Scanner, Parser):
    def __init__(self, stream):
        Reader.__init__(self, stream)
        Scanner.__init__(self)
        Parser.__init__(self)

    def determine_encoding(self):
        # The stream is always canonical UTF-8; never sniff a UTF-16 BOM.
        while not self.eof and (self.raw_buffer is None or len(self.raw_buffer) < 2):
            self.update_raw()
        self.raw_decode = codecs.utf_8_decode
        self.encoding = "utf-8"
        self.update(1)


class PyYAMLEventSource:
    """
    Pull-based YAML parser events with byte offsets.

    The parser is created on the first pull, so read failures surface from
    ``next()``, and disposed when the stream ends or ``close`` is called.
    """

    def __init__(self, reader: BinaryIO):
        self.positions = TextPositions()
        self._stream = _TrackedStream(reader, self.positions)
        self._parser: Optional[_EventParser] = None
        self._closed = False

    def __iter__(self) -> "PyYAMLEventSource":
        return self

    def __next__(self) -> ParserEvent:
        if self._closed:
            raise StopIteration
        try:
            if self._parser is None:
                self._parser = _EventParser(self._stream)
            if not self._parser.check_event():
                event = None
            else:
                event = self._parser.get_event()
        except MarkedYAMLError as exc:
            raise self._marked_error(exc) from exc
        except ReaderError as exc:
            raise self._reader_error(exc) from exc

        if event is None:
            self.close()
            raise StopIteration
        return self._translate(event)

    def close(self) -> None:
        if self._parser is not None:
            self._parser.dispose()
            self._parser = None
        self._closed = True

    def _translate(self, event: yaml.events.Event) -> ParserEvent:
        kind = _KINDS.get(type(event), EventKind.OTHER)
        if kind is EventKind.OTHER:
            return ParserEvent(kind)
        return ParserEvent(
            kind,
            start=self.positions.byte_offset(event.start_mark.index),
            end=self.positions.byte_offset(event.end_mark.index),
        )

    def _locate(self, description: Optional[str], mark) -> Optional[LocatedProblem]:
        if description is None:
            return None
        if mark is None:
            return LocatedProblem(description)
        try:
            pos: Optional[int] = self.positions.byte_offset(mark.index)
        except LookupError:
            pos = None
        return LocatedProblem(
            description, pos=pos, line=mark.line + 1, column=mark.column + 1
        )

    def _marked_error(self, exc: MarkedYAMLError) -> ParseError:
        # The context mark precedes the problem mark, so translate it first.
        context = self._locate(exc.context, exc.context_mark)
        problem = self._locate(exc.problem, exc.problem_mark)
        return ParseError(problem=problem, context=context)

    def _reader_error(self, exc: ReaderError) -> ParseError:
        if exc.encoding == "unicode":
            # PyYAML reports non-printable characters by character index.
            description = f"special characters are not allowed (#x{exc.character:04x})"
            try:
                pos: Optional[int] = self.positions.byte_offset(exc.position)
            except LookupError:
                pos = None
        else:
            description = (
                f"'{exc.encoding}' codec can't decode byte "
                f"#x{exc.character:02x}: {exc.reason}"
            )
            pos = exc.position
        return ParseError(problem=LocatedProblem(description, pos=pos))
