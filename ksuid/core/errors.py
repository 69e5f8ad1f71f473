"""KSUID errors with structured context."""


class KsuidError(Exception):
    """Base error carrying a context dict and an optional cause."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.context = context or {}
        self.cause = cause


class InvalidLengthError(KsuidError, ValueError):
    """Buffer, payload or string has the wrong width."""

    def __init__(self, message, expected=None, actual=None, **kwargs):
        context = kwargs.pop("context", {})
        if expected is not None:
            context["expected"] = expected
        if actual is not None:
            context["actual"] = actual
        super().__init__(message, context=context, **kwargs)

    @property
    def expected(self):
        return self.context.get("expected")

    @property
    def actual(self):
        return self.context.get("actual")


class InvalidCharacterError(KsuidError, ValueError):
    """Base62 input contains a character outside the alphabet."""

    def __init__(self, character, position, **kwargs):
        context = kwargs.pop("context", {})
        context["character"] = character
        context["position"] = position
        super().__init__(f"Invalid base62 character {character!r} at position {position}",
                         context=context, **kwargs)

    @property
    def character(self):
        return self.context["character"]

    @property
    def position(self):
        return self.context["position"]


class TimestampRangeError(KsuidError, ValueError):
    """Timestamp does not fit the unsigned timestamp field."""

    def __init__(self, message, timestamp=None, **kwargs):
        context = kwargs.pop("context", {})
        if timestamp is not None:
            context["timestamp"] = timestamp
        super().__init__(message, context=context, **kwargs)

    @property
    def timestamp(self):
        return self.context.get("timestamp")


class RandomSourceError(KsuidError):
    """The operating system could not supply secure random bytes."""
