"""Query services for the patchql application."""

from .cursor import decode_cursor, encode_cursor
from .pagination import ThreadPage, assemble_connection, paginate_threads
from .thread_service import ThreadQueryService

__all__ = [
    "decode_cursor", "encode_cursor",
    "ThreadPage", "assemble_connection", "paginate_threads",
    "ThreadQueryService",
]
