"""Exception hierarchy shared by providers, feed assembly and the CLI."""

from __future__ import annotations


class SocialActivityError(Exception):
    """Base exception for social-activity."""


class ConfigError(SocialActivityError):
    """Raised when a required setting is missing or invalid."""


class TransportError(SocialActivityError):
    """Raised when a provider response cannot be fetched or decoded."""


class StoreError(SocialActivityError):
    """Raised when feed output cannot be persisted."""


class SchemaError(SocialActivityError):
    """Raised when a single provider record does not have the expected shape."""


class MissingFieldError(SchemaError):
    """Raised when a dotted path is absent from a payload or is not a string."""

    def __init__(self, path: str, segment: str | None = None) -> None:
        self.path = path
        self.segment = segment or path
        if self.segment != path:
            message = f"Invalid key supplied ({path}, missing '{self.segment}'). Ignoring!"
        else:
            message = f"Invalid key supplied ({path}). Ignoring!"
        super().__init__(message)


class UnsupportedEventError(SchemaError):
    """Raised for event types or sub-actions outside the supported set."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unsupported event ({value}). Ignoring!")


class TimestampParseError(SocialActivityError):
    """Raised when a provider timestamp does not match its expected format."""

    def __init__(self, value: object, fmt: str) -> None:
        self.value = value
        self.fmt = fmt
        super().__init__(f"Timestamp {value!r} does not match format {fmt!r}.")
