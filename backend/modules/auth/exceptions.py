"""
Authentication module exceptions.

All of them are AuthenticationError subclasses; api.middleware.auth turns
any of them into a 401 carrying the exception message.
"""

from shared.exceptions import AuthenticationError


class InvalidTokenError(AuthenticationError):
    """Bearer token is malformed, badly signed or for another audience."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class AuthNotConfiguredError(AuthenticationError):
    """SUPABASE_JWT_SECRET is unset, so no token can be verified."""

    def __init__(self, message: str = "Server authentication not configured"):
        super().__init__(message, code="AUTH_NOT_CONFIGURED")
