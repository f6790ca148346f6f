"""
User repository for the ``users`` table.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import UserProfile


class UserRepository(BaseRepository[UserProfile]):
    """Read access to user rows."""

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        result = self._db.table("users").select("*").eq("id", user_id).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def get_by_email(self, email: str) -> Optional[UserProfile]:
        result = self._db.table("users").select("*").eq("email", email).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def get_id_by_email(self, email: str) -> Optional[str]:
        """ID of the user registered with `email`, or None."""
        profile = self.get_by_email(email)
        return profile.id if profile else None

    def _map_to_profile(self, data: dict[str, Any]) -> UserProfile:
        """Map database row to UserProfile model."""
        return UserProfile(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name") or data["email"].split("@")[0],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
