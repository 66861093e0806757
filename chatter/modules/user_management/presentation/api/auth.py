# 📄 File: chatter/modules/user_management/presentation/api/auth.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for logging in and logging out. Logging in checks the email and password
# and gives the browser a login cookie; logging out replaces that cookie with an empty one.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router for cookie-based session management. Login delegates the credential check to
# UsersService.verify_user and token issuance to AuthService.login; logout applies the clearing
# directive. Errors propagate to the application exception handlers.
#
# 🔗 Dependencies:
# - FastAPI router, Response
# - presentation/dependencies.py (service wiring, cookie helpers)
# - presentation/api/schemas.py
#
# 🔄 Connected Modules / Calls From:
# - chatter/main.py (router inclusion under /auth)

"""
Authentication API Endpoints

- POST /login: Email/password check, sets the ``Authentication`` cookie
- POST /logout: Clears the ``Authentication`` cookie
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from ...domain.models.user import project_user
from ...domain.services.auth_service import AuthService
from ...domain.services.user_service import UsersService
from ..dependencies import apply_cookie, get_auth_service, get_users_service
from .schemas import LoginRequest, LoginResponse, LogoutResponse

logger = logging.getLogger(__name__)

auth_router = APIRouter()


@auth_router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in with email and password",
    responses={
        200: {"description": "Session cookie set"},
        401: {"description": "Credentials are not valid"},
    },
)
async def login(
    credentials: LoginRequest,
    response: Response,
    users_service: UsersService = Depends(get_users_service),
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    user = await users_service.verify_user(credentials.email, credentials.password)
    result = auth_service.login(user)
    apply_cookie(response, result.cookie)

    logger.info(f"User logged in: {user.id}")
    return LoginResponse(success=True, user=project_user(user))


@auth_router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Log out by clearing the session cookie",
)
async def logout(
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> LogoutResponse:
    apply_cookie(response, auth_service.logout())
    return LogoutResponse(success=True)
