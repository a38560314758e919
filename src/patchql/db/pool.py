"""Bounded pool of connection handles for the query engine."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session, sessionmaker

from patchql.core.errors import PoolClosedError
from patchql.core.settings import settings
from patchql.db import SessionLocal
from patchql.repositories.sql import SqlThreadStore

__all__ = ["ConnectionPool", "close_connection_pool", "get_connection_pool"]

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Hands out one session-backed store per in-flight query.

    At most ``size`` handles are out at once. :meth:`acquire` blocks without
    a timeout until a handle is free; cancellation belongs to the caller.
    """

    def __init__(self, session_factory: sessionmaker[Session], size: int) -> None:
        if size < 1:
            raise ValueError("Pool size must be at least 1")
        self.size = size
        self._session_factory = session_factory
        self._slots = threading.BoundedSemaphore(size)
        self._closed = False
        logger.info("Connection pool ready with %d handles", size)

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def acquire(self) -> Iterator[SqlThreadStore]:
        """Hold a handle for the duration of the ``with`` block.

        The session is closed and the slot released on every exit path.

        Raises:
            PoolClosedError: If the pool has been closed.
        """
        if self._closed:
            raise PoolClosedError("Connection pool is closed")
        self._slots.acquire()
        try:
            if self._closed:
                raise PoolClosedError("Connection pool is closed")
            session = self._session_factory()
            try:
                yield SqlThreadStore(session)
            finally:
                session.close()
        finally:
            self._slots.release()

    def close(self) -> None:
        """Refuse further acquisitions. Handles already out finish normally."""
        self._closed = True
        logger.info("Connection pool closed")


class _PoolSingleton:
    """Singleton wrapper for the application connection pool."""

    _instance: ConnectionPool | None = None

    @classmethod
    def get_instance(cls) -> ConnectionPool:
        """Get or create the pool bound to the configured database."""
        if cls._instance is None or cls._instance.closed:
            cls._instance = ConnectionPool(SessionLocal, settings.db_pool_size)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Close and forget the current pool."""
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None


def get_connection_pool() -> ConnectionPool:
    """Return the singleton connection pool."""
    return _PoolSingleton.get_instance()


def close_connection_pool() -> None:
    """Close the singleton connection pool if one was created."""
    _PoolSingleton.reset()
