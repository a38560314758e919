"""GraphQL router for FastAPI integration."""

from strawberry.fastapi import GraphQLRouter

from patchql.api.graphql.context import get_graphql_context
from patchql.api.graphql.schema import schema
from patchql.core.settings import settings

graphql_router = GraphQLRouter(
    schema,
    context_getter=get_graphql_context,
    graphql_ide="graphiql" if settings.graphiql_enabled else None,
)
