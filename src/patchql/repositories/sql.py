"""SQLAlchemy-backed thread store."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from patchql.models import Author, Contact, Key, Message, Thread
from patchql.models.author import CONTACT_STATE_FOLLOWING
from patchql.query.predicate import Predicate, ThreadField, to_sql
from patchql.repositories.base import ThreadRow

__all__ = ["SqlThreadStore"]

_THREAD_COLUMNS = {field: getattr(Thread, field.value) for field in ThreadField}


class SqlThreadStore:
    """Thin wrapper around database access for thread search."""

    def __init__(self, session: Session) -> None:
        """Initialize the store with a SQLAlchemy session."""
        self.session = session

    def author_ids(self, authors: Sequence[str]) -> list[int]:
        """Return internal ids of the known authors among ``authors``."""
        if not authors:
            return []
        stmt = select(Author.id).where(Author.author.in_(authors))
        return list(self.session.scalars(stmt))

    def followed_author_ids(self, authors: Sequence[str]) -> list[int]:
        """Return ids of authors followed by any of ``authors``."""
        if not authors:
            return []
        stmt = (
            select(Contact.contact_author_id)
            .join(Author, Author.id == Contact.author_id)
            .where(
                Author.author.in_(authors),
                Contact.state == CONTACT_STATE_FOLLOWING,
            )
        )
        return list(self.session.scalars(stmt))

    def thread_rows(self, predicate: Predicate, limit: int) -> list[ThreadRow]:
        """Return distinct thread rows matching ``predicate``, newest first."""
        stmt = (
            select(Thread.key_id, Thread.flume_seq)
            .where(to_sql(predicate, _THREAD_COLUMNS))
            .distinct()
            .order_by(Thread.flume_seq.desc().nulls_last())
            .limit(limit)
        )
        return [ThreadRow(key_id, flume_seq) for key_id, flume_seq in self.session.execute(stmt)]

    def message_key_id(self, key: str) -> int | None:
        """Return the message id joined to ``key`` in the key table."""
        stmt = (
            select(Message.key_id)
            .join(Key, Message.key_id == Key.id)
            .where(Key.key == key)
            .limit(1)
        )
        return self.session.scalars(stmt).first()
