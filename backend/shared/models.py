"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Resolved from a verified bearer token by the auth module and made
    available to route handlers via dependency injection. Its ``id`` is the
    acting-user identity every appliance operation is scoped to.
    """

    id: str = Field(..., description="User ID (UUID from the identity provider)")
    email: str = Field(..., description="User's email address")
    name: str = Field(default="User", description="Display name")

    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
