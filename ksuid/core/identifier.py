"""
KSUID - K-Sortable Unique Identifier.

Time-sortable, globally unique IDs without coordination.
Standard format: 4 bytes timestamp + 16 bytes random = 27 char base62 string.
Millisecond format: 5 bytes timestamp + 15 bytes random, same string length.

The first four bytes of both formats hold seconds since KSUID_EPOCH, so a
KsuidMs is also a valid standard KSUID. Its fifth byte counts 4ms steps
within that second.
"""

import operator
import os
from datetime import datetime, timezone
from enum import Enum
from functools import total_ordering
from typing import Optional, Protocol

from ksuid.core.errors import InvalidLengthError, RandomSourceError, TimestampRangeError
from ksuid.internal.logging import get_logger
from ksuid.utils import base62
from ksuid.utils.timestamp import datetime_to_millis, millis_to_datetime, now_millis, now_seconds

# KSUID epoch: 2014-05-13T16:53:20Z
KSUID_EPOCH = 1400000000
TOTAL_BYTES = 20
STRING_LENGTH = base62.encoded_length(TOTAL_BYTES)
MAX_TIMESTAMP_RAW = 0xFFFFFFFF


class KsuidLike(Protocol):
    """Capabilities shared by every KSUID variant."""

    TIMESTAMP_BYTES: int
    PAYLOAD_BYTES: int

    @classmethod
    def new(cls, timestamp: Optional[datetime] = None, payload: Optional[bytes] = None) -> "KsuidLike":
        ...

    @classmethod
    def from_seconds(cls, seconds: Optional[int] = None, payload: Optional[bytes] = None) -> "KsuidLike":
        ...

    @classmethod
    def from_bytes(cls, buffer: bytes) -> "KsuidLike":
        ...

    @classmethod
    def from_base62(cls, text: str) -> "KsuidLike":
        ...

    def timestamp(self) -> datetime:
        ...

    def timestamp_seconds(self) -> int:
        ...

    def payload(self) -> bytes:
        ...

    def bytes(self) -> bytes:
        ...

    def to_base62(self) -> str:
        ...


def _as_int(value, name):
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}") from None


def _as_bytes(buffer):
    # memoryview rejects ints, which bytes() would turn into zero-filled buffers
    return memoryview(buffer).tobytes()


def _random_payload(size):
    try:
        return os.urandom(size)
    except (NotImplementedError, OSError) as exc:
        get_logger().debug("Secure random source unavailable", error=exc, size=size)
        raise RandomSourceError("Secure random source unavailable",
                                context={"size": size}, cause=exc) from exc


def _build_payload(payload, size):
    if payload is None:
        return _random_payload(size)
    payload = _as_bytes(payload)
    if len(payload) != size:
        raise InvalidLengthError(f"Payload must be {size} bytes, got {len(payload)}",
                                 expected=size, actual=len(payload))
    return payload


def _seconds_offset(unix_seconds):
    """Seconds since KSUID_EPOCH, rejecting values the 32-bit field cannot hold."""
    offset = unix_seconds - KSUID_EPOCH
    if offset < 0:
        raise TimestampRangeError(f"Timestamp {unix_seconds} precedes the KSUID epoch {KSUID_EPOCH}",
                                  timestamp=unix_seconds)
    if offset > MAX_TIMESTAMP_RAW:
        raise TimestampRangeError(f"Timestamp {unix_seconds} is past the last representable second",
                                  timestamp=unix_seconds)
    return offset


@total_ordering
class _KsuidBase:
    """Immutable 20-byte buffer with the behaviour common to both variants."""

    __slots__ = ("_bytes",)

    TIMESTAMP_BYTES = 0
    PAYLOAD_BYTES = 0

    def __init__(self, buffer):
        buffer = _as_bytes(buffer)
        if len(buffer) != TOTAL_BYTES:
            raise InvalidLengthError(f"KSUID must be {TOTAL_BYTES} bytes, got {len(buffer)}",
                                     expected=TOTAL_BYTES, actual=len(buffer))
        object.__setattr__(self, "_bytes", buffer)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_bytes(cls, buffer):
        """Reinterpret exactly TOTAL_BYTES bytes as a KSUID."""
        return cls(buffer)

    @classmethod
    def from_base62(cls, text):
        """Parse the fixed-length base62 rendering."""
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        base62.validate(text)
        if len(text) != STRING_LENGTH:
            raise InvalidLengthError(f"KSUID string must be {STRING_LENGTH} characters, got {len(text)}",
                                     expected=STRING_LENGTH, actual=len(text))
        return cls(base62.decode(text, TOTAL_BYTES))

    parse = from_base62

    @classmethod
    def nil(cls):
        return cls(bytes(TOTAL_BYTES))

    @classmethod
    def max(cls):
        return cls(b"\xff" * TOTAL_BYTES)

    def timestamp_seconds(self):
        """Unix seconds. Both layouts keep whole seconds in the first four bytes."""
        return int.from_bytes(self._bytes[:4], "big") + KSUID_EPOCH

    def payload(self):
        return self._bytes[self.TIMESTAMP_BYTES:]

    def bytes(self):
        return self._bytes

    def to_base62(self):
        return base62.encode(self._bytes, STRING_LENGTH)

    def __bytes__(self):
        return self._bytes

    def __str__(self):
        return self.to_base62()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_base62()!r})"

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._bytes == other._bytes

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._bytes < other._bytes

    def __hash__(self):
        return hash(self._bytes)

    def __reduce__(self):
        return (type(self), (self._bytes,))

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        from ksuid.core.serialization import ksuid_core_schema
        return ksuid_core_schema(cls)


class Ksuid(_KsuidBase):
    """Standard KSUID with one second resolution."""

    __slots__ = ()

    TIMESTAMP_BYTES = 4
    PAYLOAD_BYTES = 16

    @classmethod
    def new(cls, timestamp=None, payload=None):
        """Create from a datetime (default now) and payload (default random)."""
        seconds = None if timestamp is None else datetime_to_millis(timestamp) // 1_000
        return cls.from_seconds(seconds, payload)

    @classmethod
    def from_seconds(cls, seconds=None, payload=None):
        """Create from Unix seconds (default now)."""
        if seconds is None:
            seconds = now_seconds()
        seconds = _as_int(seconds, "seconds")
        return cls.new_raw(_seconds_offset(seconds), payload)

    @classmethod
    def new_raw(cls, timestamp, payload=None):
        """Create from the raw seconds offset since KSUID_EPOCH."""
        timestamp = _as_int(timestamp, "timestamp")
        if not 0 <= timestamp <= MAX_TIMESTAMP_RAW:
            raise TimestampRangeError(f"Raw timestamp {timestamp} does not fit in 32 bits",
                                      timestamp=timestamp)
        payload = _build_payload(payload, cls.PAYLOAD_BYTES)
        return cls(timestamp.to_bytes(cls.TIMESTAMP_BYTES, "big") + payload)

    @property
    def variant(self):
        return Variant.STANDARD

    def timestamp_raw(self):
        return int.from_bytes(self._bytes[:self.TIMESTAMP_BYTES], "big")

    def timestamp(self):
        return datetime.fromtimestamp(self.timestamp_seconds(), tz=timezone.utc)


class KsuidMs(_KsuidBase):
    """KSUID trading one payload byte for 4ms timestamp resolution."""

    __slots__ = ()

    TIMESTAMP_BYTES = 5
    PAYLOAD_BYTES = 15
    MAX_TIMESTAMP_RAW = (1 << 40) - 1

    @classmethod
    def new(cls, timestamp=None, payload=None):
        millis = None if timestamp is None else datetime_to_millis(timestamp)
        return cls.from_millis(millis, payload)

    @classmethod
    def from_seconds(cls, seconds=None, payload=None):
        millis = None if seconds is None else _as_int(seconds, "seconds") * 1_000
        return cls.from_millis(millis, payload)

    @classmethod
    def from_millis(cls, millis=None, payload=None):
        """Create from Unix milliseconds (default now)."""
        if millis is None:
            millis = now_millis()
        millis = _as_int(millis, "millis")
        seconds, millis = divmod(millis, 1_000)
        return cls.new_raw((_seconds_offset(seconds) << 8) | (millis >> 2), payload)

    @classmethod
    def new_raw(cls, timestamp, payload=None):
        """Create from the raw 40-bit value: seconds offset << 8 | 4ms steps."""
        timestamp = _as_int(timestamp, "timestamp")
        if not 0 <= timestamp <= cls.MAX_TIMESTAMP_RAW:
            raise TimestampRangeError(f"Raw timestamp {timestamp} does not fit in 40 bits",
                                      timestamp=timestamp)
        payload = _build_payload(payload, cls.PAYLOAD_BYTES)
        return cls(timestamp.to_bytes(cls.TIMESTAMP_BYTES, "big") + payload)

    @property
    def variant(self):
        return Variant.MILLIS

    def timestamp_raw(self):
        return int.from_bytes(self._bytes[:self.TIMESTAMP_BYTES], "big")

    def timestamp_millis(self):
        """Unix milliseconds. Step counts above 249 wrap within the second."""
        raw = self.timestamp_raw()
        return ((raw >> 8) + KSUID_EPOCH) * 1_000 + ((raw & 0xFF) << 2) % 1_000

    def timestamp(self):
        return millis_to_datetime(self.timestamp_millis())


class Variant(Enum):
    STANDARD = "standard"
    MILLIS = "millis"

    @property
    def cls(self):
        return Ksuid if self is Variant.STANDARD else KsuidMs

    @classmethod
    def from_name(cls, name):
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        key = _VARIANT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown KSUID variant: {name!r}") from None


_VARIANT_ALIASES = {"ms": "millis", "millisecond": "millis", "milliseconds": "millis", "seconds": "standard"}


def parse(text, variant=Variant.STANDARD):
    """Parse a base62 string as the given variant."""
    return Variant.from_name(variant).cls.from_base62(text)
