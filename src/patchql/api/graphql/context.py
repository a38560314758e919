"""Request context handed to GraphQL resolvers."""

from strawberry.fastapi import BaseContext

from patchql.api.v1.dependencies import ThreadServiceDep
from patchql.services.thread_service import ThreadQueryService


class GraphQLContext(BaseContext):
    """Carries the thread query service for the current request."""

    def __init__(self, service: ThreadQueryService) -> None:
        super().__init__()
        self.service = service


async def get_graphql_context(service: ThreadServiceDep) -> GraphQLContext:
    """Build the resolver context from FastAPI dependencies."""
    return GraphQLContext(service)
