"""Exception hierarchy for the InfluxDB HTTP client."""

from __future__ import annotations


class InfluxDbError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, error: str) -> None:
        super().__init__(error)
        self.error = error

    def __str__(self) -> str:
        return self.error


class InvalidQueryError(InfluxDbError):
    """Raised when a query cannot be built (e.g. a write query without fields)."""


class ProtocolError(InfluxDbError):
    """Raised when the HTTP exchange with the server fails."""


class DeserializationError(InfluxDbError):
    """Raised when a response body cannot be decoded or parsed."""


class DatabaseError(InfluxDbError):
    """Raised when the server reports an error in the response body."""
