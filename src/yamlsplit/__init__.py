"""
yaml-split: split YAML streams into the exact bytes of each document.

Streams in UTF-8, UTF-16 or UTF-32 are transcoded to UTF-8 first, so every
document comes back as UTF-8 text with its original formatting intact.
"""

from .chunking import Chunk, Chunker, ParseError, iter_boundaries
from .encoding import Encoding, EncodingError, Transcoder, TruncatedInputError, detect

__version__ = "0.1.0"

__all__ = [
    "Chunk",
    "Chunker",
    "Encoding",
    "EncodingError",
    "ParseError",
    "Transcoder",
    "TruncatedInputError",
    "__version__",
    "detect",
    "iter_boundaries",
]
