"""In-memory thread store used for tests and local experiments.

Rows are plain dictionaries keyed by :class:`ThreadField` values and filtered
with :func:`patchql.query.predicate.evaluate`, so it answers the same
predicates as :class:`patchql.repositories.sql.SqlThreadStore`.
"""
from __future__ import annotations

import itertools
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from patchql.models.author import CONTACT_STATE_FOLLOWING
from patchql.models.message import CONTENT_TYPE_POST
from patchql.query.predicate import Predicate, evaluate
from patchql.repositories.base import ThreadRow

__all__ = ["InMemoryThreadStore"]


class InMemoryThreadStore:
    """Thread store holding its rows in process memory."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self.authors: dict[str, int] = {}
        self.keys: dict[str, int] = {}
        self.message_ids: set[int] = set()
        self.contacts: list[tuple[int, int, int]] = []
        self.threads: list[dict[str, Any]] = []

    @contextmanager
    def acquire(self) -> Iterator[InMemoryThreadStore]:
        """Hold the store exclusively for the duration of the block."""
        with self._lock:
            yield self

    def add_author(self, author: str) -> int:
        """Register ``author`` and return its internal id."""
        if author not in self.authors:
            self.authors[author] = next(self._ids)
        return self.authors[author]

    def add_contact(self, author: str, contact: str, state: int = CONTACT_STATE_FOLLOWING) -> None:
        """Record an edge from ``author`` to ``contact``."""
        self.contacts.append((self.add_author(author), self.add_author(contact), state))

    def add_key(self, key: str, *, with_message: bool = True) -> int:
        """Register a message key, optionally with a joined message row."""
        if key not in self.keys:
            self.keys[key] = next(self._ids)
        key_id = self.keys[key]
        if with_message:
            self.message_ids.add(key_id)
        return key_id

    def add_thread(
        self,
        key_id: int,
        flume_seq: int | None,
        *,
        author_id: int | None = None,
        reply_author_id: int | None = None,
        root_key_id: int | None = None,
        content_type: str | None = CONTENT_TYPE_POST,
        is_decrypted: bool = False,
    ) -> None:
        """Append a row to the thread relation."""
        self.threads.append(
            {
                "key_id": key_id,
                "flume_seq": flume_seq,
                "author_id": author_id,
                "reply_author_id": reply_author_id,
                "root_key_id": root_key_id,
                "content_type": content_type,
                "is_decrypted": is_decrypted,
            }
        )

    def author_ids(self, authors: Sequence[str]) -> list[int]:
        return [self.authors[author] for author in authors if author in self.authors]

    def followed_author_ids(self, authors: Sequence[str]) -> list[int]:
        followers = {self.authors[author] for author in authors if author in self.authors}
        return [
            contact_id
            for author_id, contact_id, state in self.contacts
            if author_id in followers and state == CONTACT_STATE_FOLLOWING
        ]

    def thread_rows(self, predicate: Predicate, limit: int) -> list[ThreadRow]:
        rows = {
            ThreadRow(row["key_id"], row["flume_seq"])
            for row in self.threads
            if evaluate(predicate, row)
        }
        # NULL sequence numbers sort last, as in the SQL store.
        ordered = sorted(
            rows,
            key=lambda row: (row.flume_seq is not None, row.flume_seq or 0),
            reverse=True,
        )
        return ordered[:limit]

    def message_key_id(self, key: str) -> int | None:
        key_id = self.keys.get(key)
        if key_id is None or key_id not in self.message_ids:
            return None
        return key_id
