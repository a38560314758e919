"""SQLAlchemy models for the patchql read layer."""

from .author import Author, Contact
from .message import Key, Message, Thread

__all__ = [
    "Author", "Contact",
    "Key", "Message", "Thread",
]
