# 📄 File: chatter/modules/user_management/presentation/graphql/types.py
# 🧭 Purpose (Layman Explanation):
# Describes the shape of a user as GraphQL clients see it: only the ID and the email, never the password.
# 🧪 Purpose (Technical Summary):
# Strawberry object and input types. The ``User`` type is built from the domain API mapping
# (``project_user``), so its fields are exactly the allow-listed ones.
# 🔗 Dependencies:
# strawberry-graphql, user domain model
# 🔄 Connected Modules / Calls From:
# graphql/resolvers.py

from typing import Optional

import strawberry

from ...domain.models.user import User as UserEntity
from ...domain.models.user import project_user


@strawberry.type
class User:
    id: strawberry.ID = strawberry.field(name="_id")
    email: str

    @classmethod
    def from_entity(cls, user: UserEntity) -> "User":
        projected = project_user(user)
        return cls(id=strawberry.ID(projected["_id"]), email=projected["email"])


@strawberry.input
class CreateUserInput:
    email: str
    password: str


@strawberry.input
class UpdateUserInput:
    id: strawberry.ID
    email: Optional[str] = None
    password: Optional[str] = None
