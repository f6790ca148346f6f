"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)

    def display_name(self) -> str:
        """Name from user metadata, else the email local part, else 'User'."""
        name = self.user_metadata.get("name")
        if name:
            return str(name)
        if self.email:
            return self.email.split("@")[0]
        return "User"


class UserProfile(BaseModel):
    """A row of the ``users`` table."""

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


__all__ = ["AuthenticatedUser", "JWTPayload", "UserProfile"]
