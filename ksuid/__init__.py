"""K-Sortable Unique Identifiers."""

from ksuid.core.errors import (
    InvalidCharacterError,
    InvalidLengthError,
    KsuidError,
    RandomSourceError,
    TimestampRangeError,
)
from ksuid.core.identifier import (
    KSUID_EPOCH,
    STRING_LENGTH,
    TOTAL_BYTES,
    Ksuid,
    KsuidLike,
    KsuidMs,
    Variant,
    parse,
)
from ksuid.utils.ksuid import generate_ksuid

__version__ = "0.1.0"

__all__ = [
    "KSUID_EPOCH",
    "STRING_LENGTH",
    "TOTAL_BYTES",
    "Ksuid",
    "KsuidLike",
    "KsuidMs",
    "Variant",
    "parse",
    "generate_ksuid",
    "KsuidError",
    "InvalidLengthError",
    "InvalidCharacterError",
    "TimestampRangeError",
    "RandomSourceError",
]
