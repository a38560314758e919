"""Strawberry types for the GraphQL query surface."""

import strawberry

from patchql.schemas.thread import OrderBy, PageInfo, Privacy, ThreadConnection

OrderByEnum = strawberry.enum(
    OrderBy,
    name="OrderBy",
    description="Order threads by received time, asserted time or causal ordering",
)
PrivacyEnum = strawberry.enum(
    Privacy,
    name="Privacy",
    description="Find public, private or all threads",
)


@strawberry.type(name="Post", description="A message, identified by its internal id")
class PostType:
    key_id: int


@strawberry.type(name="Thread", description="A root post and the conversation below it")
class ThreadType:
    root: PostType

    @classmethod
    def from_key_id(cls, key_id: int) -> "ThreadType":
        return cls(root=PostType(key_id=key_id))


@strawberry.type(name="Author", description="An author, identified by public key")
class AuthorType:
    id: str


@strawberry.type(name="PageInfo", description="Cursors for fetching neighbouring pages")
class PageInfoType:
    start_cursor: str | None
    end_cursor: str
    has_next_page: bool

    @classmethod
    def from_schema(cls, page_info: PageInfo) -> "PageInfoType":
        return cls(
            start_cursor=page_info.start_cursor,
            end_cursor=page_info.end_cursor,
            has_next_page=page_info.has_next_page,
        )


@strawberry.type(name="ThreadConnection", description="One page of thread search results")
class ThreadConnectionType:
    page_size: int
    thread_ids: list[int]
    page_info: PageInfoType

    @strawberry.field(description="Threads of this page, newest first")
    def nodes(self) -> list[ThreadType]:
        return [ThreadType.from_key_id(key_id) for key_id in self.thread_ids]

    @classmethod
    def from_schema(cls, connection: ThreadConnection) -> "ThreadConnectionType":
        return cls(
            page_size=connection.page_size,
            thread_ids=list(connection.thread_keys),
            page_info=PageInfoType.from_schema(connection.page_info),
        )
