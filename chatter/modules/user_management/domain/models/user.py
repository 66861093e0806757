# 📄 File: chatter/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in Chatter: an ID, an email address and a scrambled (hashed) password.
# It also decides which of those details may ever be shown to the outside world.
# 🧪 Purpose (Technical Summary):
# User entity on top of the shared Entity base, with two explicit mappings: storage (every field,
# including the password hash) and API (allow-listed fields only). Also holds the input models
# used to validate account creation and updates.
# 🔗 Dependencies:
# pydantic (EmailStr via email-validator), chatter.shared.infrastructure.database.entity
# 🔄 Connected Modules / Calls From:
# user_service.py, auth_service.py, user_repository.py, auth API, GraphQL types

from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr

from chatter.shared.infrastructure.database.entity import Entity

# Fields that may leave the service; password_hash is never among them
USER_API_FIELDS = ("id", "email")


class User(Entity):
    """
    User domain model.

    Storage mapping is ``to_document()`` / ``model_validate(document)`` and
    carries every field. Use ``project_user`` for anything client-facing.
    """

    email: str
    password_hash: str


def project_user(user: User) -> Dict[str, Any]:
    """API mapping: allow-listed fields only, identifier as a hex string under ``_id``."""
    projected: Dict[str, Any] = {}
    for field in USER_API_FIELDS:
        if field == "id":
            projected["_id"] = str(user.id)
        else:
            projected[field] = getattr(user, field)
    return projected


class UserCreateData(BaseModel):
    """Account creation input."""

    email: EmailStr
    password: str


class UserUpdateData(BaseModel):
    """Partial account update input; only fields explicitly set are applied."""

    email: Optional[EmailStr] = None
    password: Optional[str] = None
