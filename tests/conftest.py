"""Global test configuration for yamlsplit tests."""

import codecs
import io
from typing import Iterable, List

import pytest

from yamlsplit.chunking import EventKind, ParserEvent
from yamlsplit.encoding import Encoding

BOMS = {
    Encoding.UTF8: codecs.BOM_UTF8,
    Encoding.UTF16BE: codecs.BOM_UTF16_BE,
    Encoding.UTF16LE: codecs.BOM_UTF16_LE,
    Encoding.UTF32BE: codecs.BOM_UTF32_BE,
    Encoding.UTF32LE: codecs.BOM_UTF32_LE,
}


def encode_as(text: str, encoding: Encoding, bom: bool = False) -> bytes:
    """Encode text in the given encoding, optionally behind a byte order mark."""
    data = text.encode(encoding.value)
    return BOMS[encoding] + data if bom else data


class TrickleReader(io.RawIOBase):
    """A byte source that returns at most ``step`` bytes per read."""

    def __init__(self, data: bytes, step: int = 1):
        super().__init__()
        self._data = io.BytesIO(data)
        self.step = step
        self.reads: List[int] = []

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        chunk = self._data.read(min(len(b), self.step))
        b[: len(chunk)] = chunk
        self.reads.append(len(chunk))
        return len(chunk)


class FailingReader(io.RawIOBase):
    """Returns ``data`` and then raises ``OSError`` on the next read."""

    def __init__(self, data: bytes = b"", message: str = "disk on fire"):
        super().__init__()
        self._data = io.BytesIO(data)
        self.message = message

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        chunk = self._data.read(len(b))
        if not chunk:
            raise OSError(self.message)
        b[: len(chunk)] = chunk
        return len(chunk)


class ScriptedEventSource:
    """
    Replays a fixed list of events, reading the stream as it goes.

    Each event is preceded by reading the stream up to the event's end,
    the way a parser must have consumed the bytes before reporting them.
    """

    def __init__(self, reader, events: Iterable[ParserEvent]):
        self.reader = reader
        self.events = list(events)
        self.closed = False
        self._consumed = 0

    def __iter__(self):
        return self

    def __next__(self) -> ParserEvent:
        if not self.events:
            raise StopIteration
        event = self.events.pop(0)
        if event.kind is EventKind.STREAM_END:
            while self.reader.read(4096):
                pass
        elif event.end is not None:
            target = event.end
            while self._consumed < target:
                data = self.reader.read(target - self._consumed)
                if not data:
                    break
                self._consumed += len(data)
        return event

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """Run every test in an empty directory so no config file is discovered."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "YAMLSPLIT_ENCODING",
        "YAMLSPLIT_OUTPUT_FORMAT",
        "YAMLSPLIT_READ_SIZE",
        "LOG_FORMAT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    yield tmp_path


@pytest.fixture
def scripted_events():
    """Factory for chunker event sources replaying the given events."""
    created: List[ScriptedEventSource] = []

    def factory(*events: ParserEvent):
        def build(reader):
            source = ScriptedEventSource(reader, events)
            created.append(source)
            return source

        build.created = created  # type: ignore[attr-defined]
        return build

    return factory


@pytest.fixture
def encode():
    return encode_as


@pytest.fixture
def trickle_reader():
    return TrickleReader


@pytest.fixture
def failing_reader():
    return FailingReader
