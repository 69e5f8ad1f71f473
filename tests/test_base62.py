"""Unit tests for the fixed-width base62 codec."""

import os

import pytest

from ksuid.core.errors import InvalidCharacterError, InvalidLengthError
from ksuid.utils import base62


class TestAlphabet:
    """Tests for alphabet ordering."""

    def test_alphabet_order(self):
        """Digits, then uppercase, then lowercase."""
        assert base62.ALPHABET[:10] == "0123456789"
        assert base62.ALPHABET[10:36] == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        assert base62.ALPHABET[36:] == "abcdefghijklmnopqrstuvwxyz"

    def test_alphabet_sorted_by_codepoint(self):
        """Character order matches codepoint order."""
        assert list(base62.ALPHABET) == sorted(base62.ALPHABET)
        assert base62.BASE == 62


class TestEncodedLength:
    """Tests for encoded_length()."""

    @pytest.mark.parametrize("byte_count,expected", [(0, 0), (1, 2), (4, 6), (16, 22), (20, 27)])
    def test_lengths(self, byte_count, expected):
        """Length covers the full value space of the buffer."""
        assert base62.encoded_length(byte_count) == expected


class TestEncode:
    """Tests for encode()."""

    def test_reference_vector(self, reference_bytes, reference_string):
        """Matches segmentio/ksuid output."""
        assert base62.encode(reference_bytes) == reference_string

    def test_zero_buffer(self):
        """All-zero buffer is all zero characters."""
        assert base62.encode(bytes(20)) == "0" * 27

    def test_max_buffer(self):
        """All-0xFF buffer still fits in 27 characters."""
        assert base62.encode(b"\xff" * 20) == "aWgEPTl1tmebfsQzFP4bxwgy80V"

    def test_single_bytes(self):
        """Small values are left-padded."""
        assert base62.encode(b"\x00") == "00"
        assert base62.encode(bytes([61])) == "0z"
        assert base62.encode(bytes([62])) == "10"
        assert base62.encode(b"\xff") == "47"

    def test_leading_zero_bytes_keep_length(self):
        """Leading zero bytes never shorten the output."""
        for zeros in range(20):
            data = bytes(zeros) + b"\x01" * (20 - zeros)
            assert len(base62.encode(data)) == 27

    def test_explicit_length(self):
        """Explicit length pads further."""
        assert base62.encode(b"\xff", 5) == "00047"

    def test_explicit_length_too_short(self):
        """Explicit length smaller than the value raises."""
        with pytest.raises(InvalidLengthError):
            base62.encode(b"\xff", 1)


class TestDecode:
    """Tests for decode()."""

    def test_reference_vector(self, reference_bytes, reference_string):
        """Decodes segmentio/ksuid output."""
        assert base62.decode(reference_string, 20) == reference_bytes

    def test_pads_leading_zero_bytes(self):
        """Short values are left-padded with zero bytes."""
        assert base62.decode("47", 4) == b"\x00\x00\x00\xff"
        assert base62.decode("", 2) == b"\x00\x00"

    def test_random_round_trip(self):
        """decode(encode(b)) == b for random buffers."""
        for _ in range(200):
            data = os.urandom(20)
            assert base62.decode(base62.encode(data), 20) == data

    def test_string_round_trip(self):
        """encode(decode(s)) == s for canonical strings."""
        for text in ("000000pryYUMiBILyxOCoroLz6w", "02GY99XXwBHbeBundUPJoqYpvet",
                     "04X6IIDacKaayM4WWom0flpf3mY", "aWgEPTl1tmebfsQzFP4bxwgy80V"):
            assert base62.encode(base62.decode(text, 20)) == text

    @pytest.mark.parametrize("bad", ["!", "_", "-", " ", "é"])
    def test_invalid_character(self, bad):
        """Out-of-alphabet characters raise with character and position."""
        text = "1srOrx2ZWZ" + bad + "pBUvZwXKQmoEYga2"
        with pytest.raises(InvalidCharacterError) as exc_info:
            base62.decode(text, 20)
        assert exc_info.value.character == bad
        assert exc_info.value.position == 10
        assert isinstance(exc_info.value, ValueError)

    def test_overflow(self):
        """Values wider than the buffer raise."""
        with pytest.raises(InvalidLengthError):
            base62.decode("48", 1)
        with pytest.raises(InvalidLengthError):
            base62.decode("aWgEPTl1tmebfsQzFP4bxwgy80W", 20)
        with pytest.raises(InvalidLengthError):
            base62.decode("z" * 27, 20)

    def test_overflow_reports_character_counts(self):
        """Overflow errors compare characters with characters."""
        with pytest.raises(InvalidLengthError) as exc_info:
            base62.decode("z" * 27, 20)
        assert exc_info.value.expected == 27
        assert exc_info.value.actual == 27

    def test_validate(self):
        """validate() accepts the alphabet and names the first bad character."""
        base62.validate(base62.ALPHABET)
        base62.validate("")
        with pytest.raises(InvalidCharacterError) as exc_info:
            base62.validate("abc-def_")
        assert exc_info.value.character == "-"
        assert exc_info.value.position == 3

    def test_sort_order_matches_bytes(self):
        """String order of fixed-length encodings equals byte order."""
        buffers = sorted(os.urandom(20) for _ in range(100))
        encoded = [base62.encode(buffer) for buffer in buffers]
        assert encoded == sorted(encoded)
