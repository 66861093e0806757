# 📄 File: chatter/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Hands out the signed "Authentication" cookie when someone logs in, clears it when they log out,
# and checks a cookie on later requests to see who is calling and whether the session is still valid.
# 🧪 Purpose (Technical Summary):
# Stateless session manager. Issues HS-signed JWTs ({_id, email, iat, exp}) through python-jose,
# describes the cookie to set as a CookieDirective, and verifies tokens with distinct errors for
# tampered and expired sessions. Time comes from an injectable clock.
# 🔗 Dependencies:
# python-jose, User domain model, core exceptions, SecurityLogger
# 🔄 Connected Modules / Calls From:
# auth API (login/logout), GraphQL context (session verification), presentation dependencies

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from chatter.shared.core.exceptions import InvalidSignatureError, TokenExpiredError
from chatter.shared.utils.logging import SecurityLogger

from ..models.user import User

logger = logging.getLogger(__name__)
security_logger = SecurityLogger(logger)

AUTH_COOKIE_NAME = "Authentication"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CookieDirective:
    """Instruction to the transport layer describing a cookie to set."""

    name: str
    value: str
    http_only: bool
    expires: datetime


@dataclass(frozen=True)
class LoginResult:
    token: str
    cookie: CookieDirective


@dataclass(frozen=True)
class SessionIdentity:
    """Identity recovered from a verified session token."""

    user_id: str
    email: str
    issued_at: datetime
    expires_at: datetime


class AuthService:
    """
    Issues and verifies cookie session tokens.

    Tokens are self-contained; nothing is stored server-side, so logout only
    instructs the client to drop its cookie and cannot revoke a copied token.

    Args:
        secret: Signing key
        algorithm: HMAC algorithm (HS256, HS384 or HS512)
        expiration_seconds: Default session lifetime
        clock: Source of the current aware UTC time
    """

    def __init__(
        self,
        secret: str,
        algorithm: str,
        expiration_seconds: int,
        clock: Optional[Clock] = None,
    ):
        if expiration_seconds <= 0:
            raise ValueError("expiration_seconds must be positive")
        self._secret = secret
        self.algorithm = algorithm
        self.expiration_seconds = expiration_seconds
        self.clock = clock or utc_now

    def login(self, user: User, expiration_seconds: Optional[int] = None) -> LoginResult:
        """
        Issue a session token for an already verified user.

        Credentials are not checked here; see ``UsersService.verify_user``.
        """
        lifetime = expiration_seconds if expiration_seconds is not None else self.expiration_seconds
        if lifetime <= 0:
            raise ValueError("expiration_seconds must be positive")

        issued_at = self.clock().replace(microsecond=0)
        expires_at = issued_at + timedelta(seconds=lifetime)

        payload = {
            "_id": str(user.id),
            "email": user.email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)

        security_logger.log_authentication(
            user_id=str(user.id),
            event_type="login",
            success=True,
            extra={"expires_at": expires_at.isoformat()},
        )

        return LoginResult(
            token=token,
            cookie=CookieDirective(
                name=AUTH_COOKIE_NAME,
                value=token,
                http_only=True,
                expires=expires_at,
            ),
        )

    def logout(self) -> CookieDirective:
        """Directive that overwrites the session cookie with an empty, already expired value."""
        security_logger.log_authentication(user_id=None, event_type="logout", success=True)
        return CookieDirective(
            name=AUTH_COOKIE_NAME,
            value="",
            http_only=True,
            expires=self.clock(),
        )

    def verify(self, token: str) -> SessionIdentity:
        """
        Validate a session token and return the identity it carries.

        Raises:
            InvalidSignatureError: If the token is malformed, tampered or foreign
            TokenExpiredError: If the token is at or past its expiry
        """
        if not token:
            raise InvalidSignatureError("Session token is missing")

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            security_logger.log_authentication(None, "verify", False, reason="expired")
            raise TokenExpiredError() from e
        except JWTError as e:
            security_logger.log_authentication(None, "verify", False, reason="invalid")
            raise InvalidSignatureError() from e

        try:
            user_id = str(payload["_id"])
            email = str(payload["email"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
        except (KeyError, TypeError, ValueError) as e:
            security_logger.log_authentication(None, "verify", False, reason="incomplete payload")
            raise InvalidSignatureError("Session token payload is incomplete") from e

        # Service clock is authoritative; the token is dead at exp exactly
        if self.clock() >= expires_at:
            security_logger.log_authentication(user_id, "verify", False, reason="expired")
            raise TokenExpiredError()

        return SessionIdentity(
            user_id=user_id,
            email=email,
            issued_at=issued_at,
            expires_at=expires_at,
        )
