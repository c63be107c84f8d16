"""
Menu API — Admin Login Route
==============================

What:  POST /api/admin-login. Checks the posted credentials through the
       Authenticator dependency and sets the admin session cookie.
"""

import logging

from fastapi import APIRouter, Depends, Response

from menu_api.exceptions import AuthenticationError
from menu_api.schemas.dish import AdminLoginRequest, AdminLoginResponse, ErrorResponse
from menu_api.services.auth_base import Authenticator
from menu_api.services.auth_service import get_authenticator, set_admin_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Admin"])


@router.post(
    "/admin-login",
    response_model=AdminLoginResponse,
    responses={
        200: {"description": "Credentials accepted; session cookie set"},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Mock admin login",
)
async def admin_login(
    credentials: AdminLoginRequest,
    response: Response,
    authenticator: Authenticator = Depends(get_authenticator),
) -> AdminLoginResponse:
    if not await authenticator.authenticate(credentials.email, credentials.password):
        raise AuthenticationError()

    set_admin_session_cookie(response)
    logger.info("Admin login succeeded for %s", credentials.email)
    return AdminLoginResponse()
