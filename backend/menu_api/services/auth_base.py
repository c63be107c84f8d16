"""
Menu API — Abstract Authenticator Interface
=============================================

What:  Contract for verifying admin credentials.
How:   Concrete implementations inherit from Authenticator and implement
       authenticate(). The admin login route depends on this interface only,
       so replacing the mock with real credential verification does not touch
       the route or the dish service.

Implementations:
    - HardcodedCredentialAuthenticator: one configured email/password pair
"""

from abc import ABC, abstractmethod


class Authenticator(ABC):
    """Verifies an email/password pair."""

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> bool:
        """
        Check whether the credentials identify an admin.

        Returns:
            True on a match, False otherwise. Implementations should not raise
            for wrong credentials; the caller turns False into a 401.
        """
        ...
