"""GraphQL context: carries the services and the session cookie into resolvers."""

from typing import Optional

from fastapi import Depends
from strawberry.fastapi import BaseContext

from chatter.shared.core.exceptions import AuthenticationError
from chatter.shared.utils.logging import user_id_var

from ...domain.services.auth_service import AuthService, SessionIdentity
from ...domain.services.user_service import UsersService
from ..dependencies import get_auth_service, get_session_token, get_users_service


class ChatterContext(BaseContext):
    """Context passed to every GraphQL resolver."""

    def __init__(
        self,
        users_service: UsersService,
        auth_service: AuthService,
        session_token: Optional[str],
    ) -> None:
        super().__init__()
        self.users_service = users_service
        self.auth_service = auth_service
        self.session_token = session_token
        self._session: Optional[SessionIdentity] = None

    def require_user(self) -> SessionIdentity:
        """
        Verify the request's session cookie, once per request.

        Raises:
            AuthenticationError: If no session cookie was sent
            InvalidSignatureError: If the cookie was tampered with
            TokenExpiredError: If the session has expired
        """
        if self._session is None:
            if self.session_token is None:
                raise AuthenticationError("Authentication cookie is missing")
            self._session = self.auth_service.verify(self.session_token)
            user_id_var.set(self._session.user_id)
        return self._session


async def get_context(
    users_service: UsersService = Depends(get_users_service),
    auth_service: AuthService = Depends(get_auth_service),
    session_token: Optional[str] = Depends(get_session_token),
) -> ChatterContext:
    return ChatterContext(users_service, auth_service, session_token)
