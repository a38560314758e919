"""Shared API dependencies and error translation."""

from typing import Annotated

from fastapi import Depends, HTTPException, status

from patchql.core.errors import (
    ConflictingCursorsError,
    CursorDecodeError,
    InvalidPageSizeError,
    NoResultsFoundError,
    NotFoundError,
    PoolClosedError,
    QueryError,
    UnsupportedOperationError,
)
from patchql.db.pool import ConnectionPool, get_connection_pool
from patchql.services.thread_service import ThreadQueryService

_STATUS_BY_ERROR: tuple[tuple[type[QueryError], int], ...] = (
    (CursorDecodeError, status.HTTP_400_BAD_REQUEST),
    (ConflictingCursorsError, status.HTTP_400_BAD_REQUEST),
    (InvalidPageSizeError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NoResultsFoundError, status.HTTP_404_NOT_FOUND),
    (UnsupportedOperationError, status.HTTP_501_NOT_IMPLEMENTED),
    (PoolClosedError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def get_pool() -> ConnectionPool:
    """Return the shared connection pool."""
    return get_connection_pool()


def get_thread_service(
    pool: Annotated[ConnectionPool, Depends(get_pool)],
) -> ThreadQueryService:
    """Return a thread query service bound to the shared pool."""
    return ThreadQueryService(pool)


# Type alias for thread service dependency
ThreadServiceDep = Annotated[ThreadQueryService, Depends(get_thread_service)]


def http_error(err: QueryError) -> HTTPException:
    """Translate a query error into an HTTP error response.

    Args:
        err: Error raised by the query layer

    Returns:
        HTTPException carrying the error message as its detail
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(err, error_type):
            return HTTPException(status_code=status_code, detail=str(err))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(err))
