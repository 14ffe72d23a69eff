"""Errors raised by the MapQuest bindings."""


class MapQuestError(RuntimeError):
    """Base class for errors raised by the MapQuest bindings."""


class ParseError(MapQuestError, ValueError):
    """Raised when a request URL cannot be built from the configured base URL."""


class DecodeError(MapQuestError, ValueError):
    """Raised when a response body is not valid JSON or has an unexpected shape."""
