"""
Strawberry schema and FastAPI router for the users GraphQL API.
"""

import logging
from typing import List, Optional

import strawberry
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from .context import get_context
from .resolvers import Mutation, Query

logger = logging.getLogger(__name__)


class ChatterSchema(strawberry.Schema):
    def process_errors(
        self,
        errors: List[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        for error in errors:
            status = (error.extensions or {}).get("status")
            # Query validation failures and application client errors
            if error.original_error is None or (status is not None and status < 500):
                logger.warning(f"GraphQL {status or 400}: {error.message} (path: {error.path})")
            else:
                logger.error(f"GraphQL error: {error.message} (path: {error.path})", exc_info=error.original_error)


schema = ChatterSchema(query=Query, mutation=Mutation)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context)
