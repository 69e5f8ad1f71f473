"""
Fixed-width base62 codec.

Byte buffers are treated as big-endian unsigned integers and converted by
long division over the bytes, so the width of the buffer never depends on a
native integer type. Output is left-padded with the zero character so every
buffer of a given width encodes to the same length.
"""

import math

from ksuid.core.errors import InvalidCharacterError, InvalidLengthError

# Digits, then uppercase, then lowercase: matches ASCII order so string
# comparison agrees with numeric comparison.
ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)

_VALUES = {char: index for index, char in enumerate(ALPHABET)}


def encoded_length(byte_count):
    """Number of base62 characters needed for any buffer of byte_count bytes."""
    if byte_count <= 0:
        return 0
    return math.ceil(byte_count * 8 / math.log2(BASE))


def _divmod_bytes(digits, divisor):
    """Divide a big-endian digit list (base 256) in place of a bigint.

    Returns (quotient digits without leading zeros, remainder).
    """
    quotient = []
    remainder = 0
    for byte in digits:
        acc = (remainder << 8) | byte
        q, remainder = divmod(acc, divisor)
        if quotient or q:
            quotient.append(q)
    return quotient, remainder


def encode(data, length=None):
    """Encode bytes as a zero-padded base62 string."""
    target = encoded_length(len(data)) if length is None else length

    digits = list(data)
    while digits and digits[0] == 0:
        digits.pop(0)

    chars = []
    while digits:
        digits, remainder = _divmod_bytes(digits, BASE)
        chars.append(ALPHABET[remainder])

    if len(chars) > target:
        raise InvalidLengthError(
            f"Value needs {len(chars)} base62 characters, only {target} allowed",
            expected=target, actual=len(chars))

    return "".join(reversed(chars)).rjust(target, ALPHABET[0])


def validate(text):
    """Raise InvalidCharacterError for the first character outside the alphabet."""
    for position, char in enumerate(text):
        if char not in _VALUES:
            raise InvalidCharacterError(char, position)


def decode(text, width):
    """Decode a base62 string into exactly width big-endian bytes."""
    buf = bytearray(width)
    for position, char in enumerate(text):
        carry = _VALUES.get(char)
        if carry is None:
            raise InvalidCharacterError(char, position)

        # buf = buf * 62 + digit, least significant byte first
        for index in range(width - 1, -1, -1):
            carry += buf[index] * BASE
            buf[index] = carry & 0xFF
            carry >>= 8

        if carry:
            raise InvalidLengthError(
                f"Base62 value {text!r} does not fit in {width} bytes",
                expected=encoded_length(width), actual=len(text))

    return bytes(buf)
