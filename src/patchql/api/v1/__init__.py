"""Version 1 API endpoints."""

from .endpoints import posts_router, threads_router

__all__ = [
    "posts_router",
    "threads_router",
]
