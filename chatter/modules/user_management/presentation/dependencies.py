# 📄 File: chatter/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands each web request the tools it needs (the users service, the session checker) and reads
# the login cookie so endpoints can tell who is calling.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency factories wiring UsersService and AuthService from ``app.state``, plus the
# cookie helpers shared by the REST auth endpoints and the GraphQL context.
# 🔗 Dependencies:
# FastAPI, motor, user_management domain services and repository binding
# 🔄 Connected Modules / Calls From:
# presentation/api/auth.py, presentation/graphql/context.py

import logging
from typing import Optional

from fastapi import Depends, Request, Response
from motor.motor_asyncio import AsyncIOMotorDatabase

from chatter.shared.core.security import PasswordHasher

from ..domain.services.auth_service import AUTH_COOKIE_NAME, AuthService, CookieDirective
from ..domain.services.user_service import UsersService
from ..infrastructure.database.user_repository import build_user_repository

logger = logging.getLogger(__name__)


# =========================================================================
# SERVICE DEPENDENCIES
# =========================================================================

def get_database(request: Request) -> AsyncIOMotorDatabase:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("MongoDB database not initialized")
    return database


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_users_service(
    database: AsyncIOMotorDatabase = Depends(get_database),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> UsersService:
    return UsersService(build_user_repository(database), password_hasher)


# =========================================================================
# SESSION COOKIE
# =========================================================================

def get_session_token(request: Request) -> Optional[str]:
    """Raw value of the session cookie, or None when absent or cleared."""
    return request.cookies.get(AUTH_COOKIE_NAME) or None


def apply_cookie(response: Response, directive: CookieDirective) -> None:
    """Translate a CookieDirective into a Set-Cookie header."""
    response.set_cookie(
        key=directive.name,
        value=directive.value,
        httponly=directive.http_only,
        expires=directive.expires,
    )
