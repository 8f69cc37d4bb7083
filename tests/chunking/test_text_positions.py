"""Tests for character index to byte offset translation."""

import pytest

from yamlsplit.chunking import TextPositions


def positions_for(*pieces: bytes) -> TextPositions:
    positions = TextPositions()
    for piece in pieces:
        positions.feed(piece)
    return positions


class TestTextPositions:
    """Test byte offsets for ASCII, multi-byte and malformed text."""

    def test_ascii(self):
        positions = positions_for(b"hello")
        assert [positions.byte_offset(i) for i in range(6)] == [0, 1, 2, 3, 4, 5]

    def test_multibyte(self):
        positions = positions_for("aé€😀b".encode("utf-8"))
        assert [positions.byte_offset(i) for i in range(6)] == [0, 1, 3, 6, 10, 11]

    def test_character_split_across_feeds(self):
        """A character cut between two reads is located after both arrive."""
        positions = positions_for(b"a\xc3", b"\xa9b")
        assert positions.chars == 3
        assert positions.bytes == 4
        assert positions.byte_offset(2) == 3

    def test_end_of_input(self):
        positions = positions_for(b"ab", b"")
        assert positions.byte_offset(2) == 2

    def test_invalid_bytes_count_as_one_character(self):
        positions = positions_for(b"\xffa")
        assert positions.byte_offset(1) == 1
        assert positions.byte_offset(2) == 2

    def test_unavailable_index(self):
        positions = positions_for(b"ab")
        with pytest.raises(LookupError, match="not available"):
            positions.byte_offset(5)

    def test_discarded_index(self):
        """Translating an index prunes the text before it."""
        positions = positions_for(b"ab", b"cd")
        assert positions.byte_offset(3) == 3
        with pytest.raises(LookupError, match="already discarded"):
            positions.byte_offset(1)

    def test_repeated_index(self):
        positions = positions_for("é".encode("utf-8"), b"x")
        assert positions.byte_offset(1) == 2
        assert positions.byte_offset(1) == 2
