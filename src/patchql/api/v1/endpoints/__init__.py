"""API endpoint modules for version 1."""

from .posts import router as posts_router
from .threads import router as threads_router

__all__ = [
    "posts_router",
    "threads_router",
]
