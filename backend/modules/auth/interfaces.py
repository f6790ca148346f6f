"""
Authentication module interface.

The API layer depends on IAuthService, not on AuthService. The identity
provider itself is external: this module verifies its tokens and reads
the ``users`` table, nothing more.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import AuthenticatedUser, UserProfile


@runtime_checkable
class IAuthService(Protocol):
    """Token verification and user lookups."""

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Verify a bearer token and return the user it identifies.

        The returned user's ``id`` is the acting user for every appliance
        operation in the request.

        Raises:
            AuthenticationError: Token is missing, invalid or expired, or
                no signing secret is configured
        """
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Row of the users table with this ID, or None."""
        ...

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        """Row of the users table with this email, or None."""
        ...
