"""
Authentication module.

Verifies bearer tokens issued by the external identity provider and
reads user rows.

Public API:
- IAuthService: Interface for auth operations
- AuthenticatedUser: Minimal user info from JWT
- UserProfile: Row of the users table
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import AuthenticatedUser, UserProfile, JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthNotConfiguredError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthenticatedUser",
    "UserProfile",
    "JWTPayload",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthNotConfiguredError",
]
