"""Encoding detection for YAML 1.2 streams."""

from enum import Enum

# The desired length of the prefix for encoding detection.
DETECT_LEN = 4


class Encoding(str, Enum):
    """The possible text encodings of a valid YAML 1.2 stream."""

    UTF8 = "utf-8"
    UTF16BE = "utf-16-be"
    UTF16LE = "utf-16-le"
    UTF32BE = "utf-32-be"
    UTF32LE = "utf-32-le"

    @classmethod
    def from_name(cls, name: str) -> "Encoding":
        """Look up an encoding by a user-supplied name like ``utf16le``."""
        key = name.strip().lower().replace("_", "").replace("-", "")
        for encoding in cls:
            if encoding.value.replace("-", "") == key:
                return encoding
        raise ValueError(f"Unsupported encoding: {name}")


def detect(prefix: bytes) -> Encoding:
    """
    Detect the text encoding of a YAML 1.2 stream from its leading bytes.

    The algorithm is defined in section 5.2 of the YAML 1.2.2 specification
    (https://yaml.org/spec/1.2.2/#52-character-encodings) and relies on a
    valid stream beginning with either a byte order mark or an ASCII
    character. Behavior for non-YAML inputs is not well-defined.

    Up to 4 bytes of the prefix are examined. If the prefix is shorter than
    4 bytes but the stream is longer, the result may be incorrect.

    Args:
        prefix: The first bytes of the stream.

    Returns:
        The detected encoding, UTF-8 when nothing else matches.
    """
    if len(prefix) >= 4:
        b0, b1, b2, b3 = prefix[:4]
        if (b0, b1, b2, b3) == (0x00, 0x00, 0xFE, 0xFF) or (b0, b1, b2) == (0, 0, 0):
            return Encoding.UTF32BE
        if (b0, b1, b2, b3) == (0xFF, 0xFE, 0x00, 0x00) or (b1, b2, b3) == (0, 0, 0):
            return Encoding.UTF32LE
    if len(prefix) >= 2:
        b0, b1 = prefix[:2]
        if (b0, b1) == (0xFE, 0xFF) or b0 == 0:
            return Encoding.UTF16BE
        if (b0, b1) == (0xFF, 0xFE) or b1 == 0:
            return Encoding.UTF16LE
    return Encoding.UTF8
