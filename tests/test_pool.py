"""Tests for the bounded connection pool."""

import threading

import pytest

from patchql.core.errors import PoolClosedError
from patchql.db.pool import ConnectionPool
from patchql.repositories.sql import SqlThreadStore


def test_acquire_yields_a_sql_store(session_factory) -> None:
    pool = ConnectionPool(session_factory, size=1)
    with pool.acquire() as store:
        assert isinstance(store, SqlThreadStore)
        assert store.author_ids(["@nobody"]) == []


def test_slot_is_released_when_the_block_raises(session_factory) -> None:
    pool = ConnectionPool(session_factory, size=1)
    with pytest.raises(RuntimeError), pool.acquire():
        raise RuntimeError("query failed")

    # A leaked slot would block forever here.
    with pool.acquire() as store:
        assert store is not None


def test_acquire_blocks_until_a_handle_is_free(session_factory) -> None:
    pool = ConnectionPool(session_factory, size=1)
    acquired = threading.Event()

    def worker() -> None:
        with pool.acquire():
            acquired.set()

    with pool.acquire():
        thread = threading.Thread(target=worker)
        thread.start()
        assert not acquired.wait(0.2)
    assert acquired.wait(5)
    thread.join(5)


def test_closed_pool_refuses_handles(session_factory) -> None:
    pool = ConnectionPool(session_factory, size=1)
    pool.close()
    assert pool.closed
    with pytest.raises(PoolClosedError), pool.acquire():
        pass


def test_pool_size_must_be_positive(session_factory) -> None:
    with pytest.raises(ValueError):
        ConnectionPool(session_factory, size=0)


def test_in_memory_store_serialises_access(memory_store) -> None:
    with memory_store.acquire() as store:
        assert store is memory_store
        assert memory_store._lock.locked()
    assert not memory_store._lock.locked()
