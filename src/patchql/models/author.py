"""SQLAlchemy models for authors and the contact graph."""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from patchql.db.session import Base

# Contact states as written by the log ingester.
CONTACT_STATE_FOLLOWING = 1
CONTACT_STATE_NEUTRAL = 0
CONTACT_STATE_BLOCKING = -1


class Author(Base):
    """Identity keyed by its external public-key string."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author: Mapped[str] = mapped_column(Text, unique=True, nullable=False)


class Contact(Base):
    """Directed edge from an author to someone they follow or block."""

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("authors.id"), nullable=False)
    contact_author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("authors.id"),
        nullable=False,
    )
    state: Mapped[int] = mapped_column(Integer, nullable=False, default=CONTACT_STATE_NEUTRAL)
