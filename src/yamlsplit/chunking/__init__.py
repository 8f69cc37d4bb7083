"""
Document chunking for canonical UTF-8 YAML streams.

Decoupled from the parser: any event source reporting document boundaries
as byte offsets can drive the chunker.
"""

from .chunker import Chunk, Chunker, iter_boundaries
from .errors import LocatedProblem, ParseError
from .events import EventKind, ParserEvent, PyYAMLEventSource, TextPositions
from .reader import CaptureReader

__all__ = [
    "CaptureReader",
    "Chunk",
    "Chunker",
    "EventKind",
    "LocatedProblem",
    "ParseError",
    "ParserEvent",
    "PyYAMLEventSource",
    "TextPositions",
    "iter_boundaries",
]
