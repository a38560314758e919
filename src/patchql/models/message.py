"""SQLAlchemy models for message keys, messages and the thread read model."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from patchql.db.session import Base

CONTENT_TYPE_POST = "post"


class Key(Base):
    """Maps an external message key string to the internal id space."""

    __tablename__ = "keys"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(Text, unique=True, nullable=False)


class Message(Base):
    """A single entry of the append-only log."""

    __tablename__ = "messages"

    key_id: Mapped[int] = mapped_column(Integer, ForeignKey("keys.id"), primary_key=True)
    # Offset in the append-only log; strictly increasing, never reused.
    flume_seq: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
    seq: Mapped[int | None] = mapped_column(Integer, nullable=True)
    received_time: Mapped[float | None] = mapped_column(nullable=True)
    asserted_time: Mapped[float | None] = mapped_column(nullable=True)
    root_key_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fork_key_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("authors.id"),
        nullable=True,
    )
    content_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_decrypted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Thread(Base):
    """Denormalised thread rows used by thread search.

    One row exists per (thread root, reply author) pair, so a root with
    several repliers appears several times. Readers deduplicate on
    ``(key_id, flume_seq)``.
    """

    __tablename__ = "threads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key_id: Mapped[int] = mapped_column(Integer, nullable=False)
    flume_seq: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    author_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reply_author_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    root_key_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    content_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_decrypted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_threads_flume_seq", "flume_seq"),)
