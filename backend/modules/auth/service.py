"""
Authentication service implementation.

Validates Supabase JWT tokens and looks up users in the ``users`` table.
"""

from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import Settings, get_settings
from shared.database import get_supabase_client

from .interfaces import IAuthService
from .models import AuthenticatedUser, JWTPayload, UserProfile
from .repository import UserRepository
from .exceptions import (
    AuthNotConfiguredError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the Supabase
    database for user lookups.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        users: Optional[UserRepository] = None,
    ):
        self._settings = settings or get_settings()
        self._users = users

    @property
    def users(self) -> UserRepository:
        """User repository, created on first use so token checks need no database."""
        if self._users is None:
            self._users = UserRepository(get_supabase_client())
        return self._users

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        jwt_payload = JWTPayload(**payload)

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email or "",
            name=jwt_payload.display_name(),
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
        )

    async def get_user_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Get a user's profile by their ID."""
        return self.users.get_by_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        """Get a user's profile by their email."""
        return self.users.get_by_email(email)
