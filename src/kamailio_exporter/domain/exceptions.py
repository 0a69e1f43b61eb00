"""
Exporter Exceptions.

Only InvalidConfiguration is fatal to the process. Every ScrapeError is
scoped to one scrape cycle and recovered by the orchestrator.
"""

from __future__ import annotations

from typing import Optional


class ExporterError(Exception):
    """Base class for all exporter errors."""


class InvalidConfiguration(ExporterError):
    """Raised when the exporter configuration is invalid."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class UnknownMethod(InvalidConfiguration):
    """Raised when a method is not registered in the catalog."""

    def __init__(self, method: str) -> None:
        super().__init__(f'unknown method "{method}"', field="methods")
        self.method = method


class ScrapeError(ExporterError):
    """A failure that aborts one scrape cycle."""

    def __init__(self, message: str, method: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.method = method


class TransportError(ScrapeError):
    """Connect, read, write, timeout or framing failure."""


class RemoteError(ScrapeError):
    """The server answered a method with an explicit error."""

    def __init__(self, code: int, message: str, method: str = "") -> None:
        super().__init__(
            f'invalid response for method "{method}": [{code}] {message}', method
        )
        self.code = code
        self.message = message


class MalformedResponse(ScrapeError):
    """The response did not match the shape expected for its method."""


class FieldDecodeError(MalformedResponse):
    """A decoded field could not be coerced to the requested shape."""

    def __init__(self, key: str, expected: str, actual: str) -> None:
        super().__init__(f'field "{key}": expected {expected}, got {actual}')
        self.key = key
        self.expected = expected
        self.actual = actual


class MissingSetID(MalformedResponse):
    """A dispatcher set was returned without its ID."""

    def __init__(self, method: str = "dispatcher.list") -> None:
        super().__init__(f"missing set ID while parsing {method}", method)
