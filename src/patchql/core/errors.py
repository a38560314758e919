"""Exceptions raised by the query layer.

Every error is reported to the immediate caller. Transports translate them
into request errors; nothing here is retried.
"""

from __future__ import annotations


class QueryError(RuntimeError):
    """Base exception for failures while answering a query."""


class CursorDecodeError(QueryError):
    """Raised when a pagination cursor cannot be decoded."""


class InvalidCursorEncodingError(CursorDecodeError):
    """Raised when a cursor is not valid base64 text."""


class TruncatedCursorError(CursorDecodeError):
    """Raised when a cursor decodes to fewer than eight bytes."""


class ConflictingCursorsError(QueryError):
    """Raised when both ``before`` and ``after`` are supplied."""

    def __init__(self) -> None:
        super().__init__("before and after can't be set at the same time")


class InvalidPageSizeError(QueryError):
    """Raised when the requested page size is not a positive integer."""


class NotFoundError(QueryError):
    """Raised when a key string does not resolve to a known record."""


class NoResultsFoundError(QueryError):
    """Raised when a search matches zero rows.

    This is a reported condition, not a system fault.
    """

    def __init__(self) -> None:
        super().__init__("No results found")


class UnsupportedOperationError(QueryError):
    """Raised by capability points that are declared but not implemented."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not supported")


class PoolClosedError(QueryError):
    """Raised when acquiring a connection handle from a closed pool."""
