"""
Splits a canonical UTF-8 YAML stream into the exact bytes of each document.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator, NamedTuple, Optional

from ..core.logging import log
from .errors import LocatedProblem, ParseError
from .events import (
    EventKind,
    EventSource,
    EventSourceFactory,
    ParserEvent,
    PyYAMLEventSource,
)
from .reader import CaptureReader


class Chunk(NamedTuple):
    """The bytes of one document and their span in the canonical stream."""

    data: bytes
    start: int
    end: int
    index: int = 0

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")


def _next_event(events: EventSource) -> ParserEvent:
    try:
        return next(events)
    except StopIteration:
        raise ParseError(
            LocatedProblem("event stream ended before the end of the YAML stream")
        ) from None


class Chunker:
    """
    Iterates over the documents of a YAML stream as raw byte chunks.

    The chunker owns a ``CaptureReader`` over ``reader`` and is its only
    consumer: the event source reads through it, and document boundaries
    reported by the event source select the captured bytes to return.
    Material between documents (directives handled by the parser, comments,
    whitespace) is discarded.

    Use as a context manager, or call ``close``, to release the parser
    before the stream is exhausted.
    """

    def __init__(
        self,
        reader: BinaryIO,
        event_source: EventSourceFactory = PyYAMLEventSource,
    ):
        self.reader = CaptureReader(reader)
        self._events: Optional[EventSource] = event_source(self.reader)
        self._count = 0

    def __iter__(self) -> Iterator[Chunk]:
        return self

    def __next__(self) -> Chunk:
        if self._events is None:
            raise StopIteration
        try:
            chunk = self._next_chunk(self._events)
        except Exception:
            self.close()
            raise
        if chunk is None:
            self.close()
            raise StopIteration
        return chunk

    def __enter__(self) -> "Chunker":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the event source. Further iteration yields nothing."""
        if self._events is not None:
            self._events.close()
            self._events = None

    def _next_chunk(self, events: EventSource) -> Optional[Chunk]:
        while True:
            event = _next_event(events)

            if event.kind is EventKind.STREAM_END:
                log.debug(
                    "chunker.stream_end",
                    documents=self._count,
                    pos=event.start,
                )
                return None

            if event.kind is EventKind.DOCUMENT_START:
                self.reader.trim_to_start(event.offset)
            elif event.kind is EventKind.DOCUMENT_END:
                start = self.reader.capture_start_pos
                data = self.reader.take_to_end(event.offset)
                chunk = Chunk(data, start, event.offset, self._count)
                self._count += 1
                log.debug(
                    "chunker.document",
                    index=chunk.index,
                    start=chunk.start,
                    end=chunk.end,
                    bytes=len(data),
                )
                return chunk


def iter_boundaries(
    reader: BinaryIO,
    event_source: EventSourceFactory = PyYAMLEventSource,
) -> Iterator[ParserEvent]:
    """
    Yield the document start and end events of a YAML stream.

    Unlike ``Chunker`` this does not capture any document bytes, so it only
    reports where each document begins and ends.
    """
    events = event_source(reader)
    try:
        while True:
            event = _next_event(events)
            if event.kind is EventKind.STREAM_END:
                return
            if event.kind in (EventKind.DOCUMENT_START, EventKind.DOCUMENT_END):
                yield event
    finally:
        events.close()
