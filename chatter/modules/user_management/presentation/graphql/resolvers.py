# 📄 File: chatter/modules/user_management/presentation/graphql/resolvers.py
# 🧭 Purpose (Layman Explanation):
# The GraphQL questions and actions clients can send about users: create an account, list
# accounts, look one up, change one, or remove one. Everything except signing up needs a login.
# 🧪 Purpose (Technical Summary):
# Strawberry Query and Mutation roots delegating to UsersService. Session checks go through the
# request context; application exceptions become GraphQL errors carrying the error code.
# 🔗 Dependencies:
# strawberry-graphql, graphql-core, UsersService, core exceptions
# 🔄 Connected Modules / Calls From:
# graphql/schema.py

import logging
from contextlib import contextmanager
from typing import Iterator, List

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from chatter.shared.core.exceptions import ChatterException

from .context import ChatterContext
from .types import CreateUserInput, UpdateUserInput, User

logger = logging.getLogger(__name__)

ChatterInfo = Info[ChatterContext, None]


@contextmanager
def graphql_errors() -> Iterator[None]:
    """Re-raise application exceptions as GraphQL errors with their code in ``extensions``."""
    try:
        yield
    except ChatterException as e:
        raise GraphQLError(
            e.message,
            original_error=e,
            extensions={
                "code": e.error_code,
                "status": e.status_code,
                "details": e.details,
            },
        ) from e


@strawberry.type
class Query:
    @strawberry.field
    async def users(self, info: ChatterInfo) -> List[User]:
        with graphql_errors():
            info.context.require_user()
            users = await info.context.users_service.find_all()
        return [User.from_entity(user) for user in users]

    @strawberry.field
    async def user(self, info: ChatterInfo, id: strawberry.ID) -> User:
        with graphql_errors():
            info.context.require_user()
            user = await info.context.users_service.find_one(str(id))
        return User.from_entity(user)


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_user(self, info: ChatterInfo, create_user_input: CreateUserInput) -> User:
        with graphql_errors():
            user = await info.context.users_service.create(
                email=create_user_input.email,
                password=create_user_input.password,
            )
        return User.from_entity(user)

    @strawberry.mutation
    async def update_user(self, info: ChatterInfo, update_user_input: UpdateUserInput) -> User:
        with graphql_errors():
            info.context.require_user()
            user = await info.context.users_service.update(
                str(update_user_input.id),
                email=update_user_input.email,
                password=update_user_input.password,
            )
        return User.from_entity(user)

    @strawberry.mutation
    async def remove_user(self, info: ChatterInfo, id: strawberry.ID) -> User:
        with graphql_errors():
            info.context.require_user()
            user = await info.context.users_service.remove(str(id))
        return User.from_entity(user)
