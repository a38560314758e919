"""Thread search Pydantic schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Privacy(str, Enum):
    """Which side of the public/private partition a search covers."""

    PUBLIC = "public"
    PRIVATE = "private"
    ALL = "all"


class OrderBy(str, Enum):
    """Requested ordering of search results."""

    RECEIVED = "received"
    ASSERTED = "asserted"
    CAUSAL = "causal"


class ThreadSelectors(BaseModel):
    """Optional search criteria; a thread matches if it satisfies any of them."""

    roots_authored_by: list[str] | None = Field(
        None,
        description="Threads whose root is authored by one of these authors",
    )
    roots_authored_by_someone_followed_by: list[str] | None = Field(
        None,
        description="Threads whose root is authored by someone these authors follow",
    )
    has_replies_authored_by: list[str] | None = Field(
        None,
        description="Threads with replies by one of these authors",
    )
    has_replies_authored_by_someone_followed_by: list[str] | None = Field(
        None,
        description="Threads with replies by someone these authors follow",
    )
    # Accepted for interface compatibility; not consulted by the filter.
    mentions_authors: list[str] | None = None
    mentions_channels: list[str] | None = None

    model_config = ConfigDict(frozen=True)


class PageInfo(BaseModel):
    """Pagination metadata for a page of results."""

    start_cursor: str | None
    end_cursor: str
    has_next_page: bool


class ThreadConnection(BaseModel):
    """A page of matched thread ids returned by thread search."""

    page_size: int
    thread_keys: list[int]
    page_info: PageInfo


class PostResponse(BaseModel):
    """A post identified by its internal message id."""

    key_id: int


class ThreadResponse(BaseModel):
    """A thread identified by its root post."""

    root: PostResponse
    order_by: OrderBy = OrderBy.RECEIVED
