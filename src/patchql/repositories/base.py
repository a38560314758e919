"""Store interface consumed by the thread query engine."""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol

from patchql.query.predicate import Predicate

__all__ = ["AuthorResolver", "StoreProvider", "ThreadRow", "ThreadStore"]


@dataclass(frozen=True)
class ThreadRow:
    """Identifier and sequence number of a matched thread root."""

    key_id: int
    flume_seq: int | None


class AuthorResolver(Protocol):
    """Lookups into the author and contact graph."""

    def author_ids(self, authors: Sequence[str]) -> list[int]:
        """Return internal ids of the known authors among ``authors``."""
        ...

    def followed_author_ids(self, authors: Sequence[str]) -> list[int]:
        """Return ids of authors followed (state 1) by any of ``authors``."""
        ...


class ThreadStore(AuthorResolver, Protocol):
    """Read access to the thread relation and the key table."""

    def thread_rows(self, predicate: Predicate, limit: int) -> list[ThreadRow]:
        """Return distinct rows matching ``predicate``, newest sequence first."""
        ...

    def message_key_id(self, key: str) -> int | None:
        """Return the internal message id for ``key`` or ``None``."""
        ...


class StoreProvider(Protocol):
    """Hands out store handles for the duration of a single query."""

    def acquire(self) -> AbstractContextManager[ThreadStore]:
        """Block until a handle is free and hold it for the ``with`` block."""
        ...
