"""Thread store implementations."""

from .base import AuthorResolver, StoreProvider, ThreadRow, ThreadStore
from .memory import InMemoryThreadStore
from .sql import SqlThreadStore

__all__ = [
    "AuthorResolver", "StoreProvider", "ThreadRow", "ThreadStore",
    "InMemoryThreadStore",
    "SqlThreadStore",
]
