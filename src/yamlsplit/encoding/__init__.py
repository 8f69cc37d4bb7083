"""
Streaming text encoding support for YAML 1.2 streams.

This package provides:
- Encoding detection from the leading bytes of a stream
- Streaming UTF-16 and UTF-32 decoders with positioned errors
- A streaming UTF-8 encoder that strips a leading byte order mark
- A transcoder that presents any supported stream as UTF-8
"""

from .buffer import ArrayBuffer
from .decoders import Endianness, UTF16Decoder, UTF32Decoder
from .detect import DETECT_LEN, Encoding, detect
from .encoder import MAX_UTF8_ENCODED_LEN, UTF8Encoder
from .errors import EncodingError, TruncatedInputError
from .transcoder import ChainReader, Transcoder

__all__ = [
    "ArrayBuffer",
    "ChainReader",
    "DETECT_LEN",
    "Encoding",
    "EncodingError",
    "Endianness",
    "MAX_UTF8_ENCODED_LEN",
    "Transcoder",
    "TruncatedInputError",
    "UTF16Decoder",
    "UTF32Decoder",
    "UTF8Encoder",
    "detect",
]
