"""Errors raised while decoding UTF-16 and UTF-32 streams."""


class EncodingError(ValueError):
    """An invalid or unexpected code unit at a known byte offset."""

    def __init__(self, unit: int, pos: int, bits: int):
        self.unit = unit
        self.pos = pos
        self.bits = bits
        super().__init__(
            f"invalid or unexpected UTF-{bits} code unit {unit:#x} at byte {pos}"
        )


class TruncatedInputError(EOFError):
    """The input ended in the middle of a code unit or surrogate pair."""

    def __init__(self, pos: int, bits: int):
        self.pos = pos
        self.bits = bits
        super().__init__(f"unexpected end of UTF-{bits} stream at byte {pos}")
