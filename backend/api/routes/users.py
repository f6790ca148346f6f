"""
User-related endpoints.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.models import AuthenticatedUser
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """Identity of the calling user."""

    id: str
    email: str
    name: str


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> UserProfileResponse:
    """
    Get the current user's identity.

    Requires authentication.
    """
    return UserProfileResponse(id=user.id, email=user.email, name=user.name)
