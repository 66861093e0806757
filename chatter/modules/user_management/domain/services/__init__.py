from .auth_service import (
    AUTH_COOKIE_NAME,
    AuthService,
    CookieDirective,
    LoginResult,
    SessionIdentity,
)
from .user_service import UsersService

__all__ = [
    "AUTH_COOKIE_NAME",
    "AuthService",
    "CookieDirective",
    "LoginResult",
    "SessionIdentity",
    "UsersService",
]
