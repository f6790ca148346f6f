"""
Base repository class for database access.

Repositories wrap the Supabase client and return plain rows or models.
Store errors (postgrest APIError, httpx errors) propagate to the service,
which decides whether a failure reads as "not found" or is raised.
"""

from typing import TypeVar, Generic

from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses reach the store through ``self._db`` and are parameterized
    by the row or model type they yield.

    Example:
        class ApplianceRepository(BaseRepository[dict[str, Any]]):
            def get_row(self, appliance_id: str, acting_user_id: Optional[str]):
                query = self._db.table("appliances").select("*").eq("id", appliance_id)
                result = scope_to_owner(query, acting_user_id).limit(1).execute()
                return result.data[0] if result.data else None
    """

    def __init__(self, db: Client) -> None:
        self._db = db
