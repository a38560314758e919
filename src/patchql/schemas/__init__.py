"""
Pydantic schemas for query arguments and response shapes.

These schemas are shared by the GraphQL and REST transports.
"""

from .thread import (
    OrderBy,
    PageInfo,
    PostResponse,
    Privacy,
    ThreadConnection,
    ThreadResponse,
    ThreadSelectors,
)

__all__ = [
    "OrderBy", "Privacy",
    "PageInfo", "ThreadConnection",
    "PostResponse", "ThreadResponse",
    "ThreadSelectors",
]
