"""GraphQL schema for thread search and lookups.

Service calls block on the connection pool, so resolvers hand them to the
Starlette thread pool rather than running them on the event loop.
"""

import logging
from typing import Annotated

import strawberry
from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from patchql.api.graphql.context import GraphQLContext
from patchql.api.graphql.types import (
    AuthorType,
    OrderByEnum,
    PostType,
    PrivacyEnum,
    ThreadConnectionType,
    ThreadType,
)
from patchql.core.errors import UnsupportedOperationError
from patchql.core.settings import settings
from patchql.schemas.thread import ThreadSelectors

__all__ = ["Query", "schema"]

logger = logging.getLogger(__name__)

AuthorsArg = Annotated[
    list[str] | None,
    strawberry.argument(description="Public keys of authors"),
]


@strawberry.type(description="Root query type")
class Query:
    """GraphQL Query resolvers."""

    @strawberry.field(description="Find a thread by the key string of the root message.")
    async def thread(
        self,
        info: Info[GraphQLContext, None],
        root_id: str,
        order_by: OrderByEnum = OrderByEnum.RECEIVED,
    ) -> ThreadType:
        thread = await run_in_threadpool(info.context.service.thread, root_id, order_by)
        return ThreadType.from_key_id(thread.root.key_id)

    @strawberry.field(
        description=(
            "Search for threads that match _any_ of the selectors. If "
            "`rootsAuthoredBy` **and** `hasRepliesAuthoredBy` are used, you get "
            "threads where _either_ is true. The selectors are logically OR'd, "
            "**not** AND'd."
        )
    )
    async def threads(
        self,
        info: Info[GraphQLContext, None],
        before: str | None = None,
        after: str | None = None,
        page_size: int = settings.default_page_size,
        privacy: PrivacyEnum = PrivacyEnum.PUBLIC,
        roots_authored_by: AuthorsArg = None,
        roots_authored_by_someone_followed_by: AuthorsArg = None,
        has_replies_authored_by: AuthorsArg = None,
        has_replies_authored_by_someone_followed_by: AuthorsArg = None,
        mentions_authors: AuthorsArg = None,
        mentions_channels: list[str] | None = None,
        order_by: OrderByEnum = OrderByEnum.RECEIVED,
    ) -> ThreadConnectionType:
        selectors = ThreadSelectors(
            roots_authored_by=roots_authored_by,
            roots_authored_by_someone_followed_by=roots_authored_by_someone_followed_by,
            has_replies_authored_by=has_replies_authored_by,
            has_replies_authored_by_someone_followed_by=has_replies_authored_by_someone_followed_by,
            mentions_authors=mentions_authors,
            mentions_channels=mentions_channels,
        )
        connection = await run_in_threadpool(
            lambda: info.context.service.threads(
                before=before,
                after=after,
                page_size=page_size,
                privacy=privacy,
                selectors=selectors,
                order_by=order_by,
            )
        )
        return ThreadConnectionType.from_schema(connection)

    @strawberry.field(description="Find a post by key string.")
    async def post(self, info: Info[GraphQLContext, None], id: str) -> PostType:
        post = await run_in_threadpool(info.context.service.post, id)
        return PostType(key_id=post.key_id)

    @strawberry.field(description="Search for posts that match certain filters.")
    def posts(
        self,
        query: str | None = None,
        privacy: PrivacyEnum = PrivacyEnum.PUBLIC,
        authored_by: str | None = None,
        referenced_by_authors: str | None = None,
        mentions_authors: list[str] | None = None,
        mentions_channels: list[str] | None = None,
        order_by: OrderByEnum = OrderByEnum.RECEIVED,
    ) -> list[PostType]:
        raise UnsupportedOperationError("posts")

    @strawberry.field(description="Find an author by their public key string.")
    def author(self, id: str) -> AuthorType:
        raise UnsupportedOperationError("author")

    @strawberry.field(description="Search for an author by a query string.")
    def authors(
        self,
        query: str,
        exclude_if_blocked_by: list[str] | None = None,
        include_descriptions: bool = False,
    ) -> list[AuthorType]:
        raise UnsupportedOperationError("authors")

    @strawberry.field(description="Find all the message types we know about")
    def message_types(self) -> list[str]:
        raise UnsupportedOperationError("messageTypes")

    @strawberry.field(description="Find all messages by type")
    def messages_by_type(self, message_type: str) -> str:
        raise UnsupportedOperationError("messagesByType")

    @strawberry.field(description="Find a message by key string")
    def message(self, id: str) -> str:
        raise UnsupportedOperationError("message")


schema = strawberry.Schema(query=Query)

logger.debug("GraphQL schema created")
