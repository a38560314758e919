"""GraphQL transport for the query layer."""

from .router import graphql_router
from .schema import schema

__all__ = ["graphql_router", "schema"]
