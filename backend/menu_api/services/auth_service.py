"""
Menu API — Mock Admin Authentication
======================================

What:  Hardcoded-credential authenticator and the admin session cookie.
How:   The configured ADMIN_EMAIL / ADMIN_PASSWORD pair is compared with
       hmac.compare_digest. A successful login sets an unsigned
       `admin_session=true` cookie.

This is a placeholder gate for the admin UI. It stores no credentials,
hashes nothing and keeps no server-side session.
"""

import hmac
import logging

from fastapi import Response

from menu_api.config import settings
from menu_api.services.auth_base import Authenticator

logger = logging.getLogger(__name__)

SESSION_MARKER = "true"


class HardcodedCredentialAuthenticator(Authenticator):
    """Accepts exactly one email/password pair."""

    def __init__(self, email: str, password: str):
        self._email = email
        self._password = password

    async def authenticate(self, email: str, password: str) -> bool:
        # Both comparisons always run.
        email_ok = hmac.compare_digest(email.strip().lower().encode(), self._email.lower().encode())
        password_ok = hmac.compare_digest(password.encode(), self._password.encode())
        if not (email_ok and password_ok):
            logger.warning("Rejected admin login for %s", email)
            return False
        return True


def get_authenticator() -> Authenticator:
    """FastAPI dependency returning the configured authenticator."""
    return HardcodedCredentialAuthenticator(settings.admin_email, settings.admin_password)


def set_admin_session_cookie(response: Response) -> None:
    response.set_cookie(
        key=settings.admin_cookie_name,
        value=SESSION_MARKER,
        max_age=settings.admin_cookie_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.admin_cookie_secure,
        path="/",
    )
