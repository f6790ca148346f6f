"""
Appliance repository for database access.

Encapsulates all Supabase queries for the appliance tables:
- appliances
- support_contacts
- maintenance_tasks
- linked_documents

Rows are returned as plain dicts; assembly into models happens in the
service. Every method that touches ``appliances`` takes the acting user ID
and applies ownership scoping. Child tables are always filtered by their
parent ``appliance_id`` so a child ID from another appliance never matches.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .ownership import scope_to_owner

APPLIANCES_TABLE = "appliances"
SUPPORT_CONTACTS_TABLE = "support_contacts"
MAINTENANCE_TASKS_TABLE = "maintenance_tasks"
LINKED_DOCUMENTS_TABLE = "linked_documents"

CHILD_TABLES = (
    SUPPORT_CONTACTS_TABLE,
    MAINTENANCE_TASKS_TABLE,
    LINKED_DOCUMENTS_TABLE,
)

AGGREGATE_SELECT = (
    "*, support_contacts(*), maintenance_tasks(*), linked_documents(*)"
)


class ApplianceRepository(BaseRepository[dict[str, Any]]):
    """
    Repository for appliance rows and their children.

    Store errors (postgrest ``APIError``, httpx transport errors) propagate
    unchanged; the service decides how to surface them.
    """

    # -------------------------------------------------------------------------
    # Appliance rows
    # -------------------------------------------------------------------------

    def list_rows(self, acting_user_id: Optional[str] = None) -> list[dict[str, Any]]:
        """
        Fetch appliance rows with embedded children, newest first.

        Args:
            acting_user_id: Restrict to this owner's rows when given.
        """
        query = self._db.table(APPLIANCES_TABLE).select(AGGREGATE_SELECT)
        query = scope_to_owner(query, acting_user_id)
        result = query.order("created_at", desc=True).execute()
        return result.data or []

    def get_row(
        self,
        appliance_id: str,
        acting_user_id: Optional[str] = None,
    ) -> Optional[dict[str, Any]]:
        """Fetch one appliance row with embedded children, or None."""
        query = self._db.table(APPLIANCES_TABLE).select(AGGREGATE_SELECT).eq("id", appliance_id)
        query = scope_to_owner(query, acting_user_id)
        result = query.limit(1).execute()
        if not result.data:
            return None
        return result.data[0]

    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        """Insert an appliance row and return it as stored."""
        result = self._db.table(APPLIANCES_TABLE).insert(data).execute()
        return result.data[0]

    def update(
        self,
        appliance_id: str,
        data: dict[str, Any],
        acting_user_id: Optional[str] = None,
    ) -> Optional[dict[str, Any]]:
        """
        Update an appliance row.

        Returns:
            The updated row, or None when no row matched id (and owner).
        """
        query = self._db.table(APPLIANCES_TABLE).update(data).eq("id", appliance_id)
        query = scope_to_owner(query, acting_user_id)
        result = query.execute()
        if not result.data:
            return None
        return result.data[0]

    def delete(self, appliance_id: str, acting_user_id: Optional[str] = None) -> bool:
        """
        Delete an appliance row.

        Returns:
            True if a row was removed. Children go with it via ON DELETE CASCADE.
        """
        query = self._db.table(APPLIANCES_TABLE).delete().eq("id", appliance_id)
        query = scope_to_owner(query, acting_user_id)
        result = query.execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Child rows
    # -------------------------------------------------------------------------

    def insert_child(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a row into one of the child tables."""
        _check_child_table(table)
        result = self._db.table(table).insert(data).execute()
        return result.data[0]

    def update_child(
        self,
        table: str,
        appliance_id: str,
        child_id: str,
        data: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        """Update a child row belonging to ``appliance_id``; None if no match."""
        _check_child_table(table)
        result = (
            self._db.table(table)
            .update(data)
            .eq("id", child_id)
            .eq("appliance_id", appliance_id)
            .execute()
        )
        if not result.data:
            return None
        return result.data[0]

    def delete_child(self, table: str, appliance_id: str, child_id: str) -> bool:
        """Delete a child row belonging to ``appliance_id``."""
        _check_child_table(table)
        result = (
            self._db.table(table)
            .delete()
            .eq("id", child_id)
            .eq("appliance_id", appliance_id)
            .execute()
        )
        return bool(result.data)


def _check_child_table(table: str) -> None:
    if table not in CHILD_TABLES:
        raise ValueError(f"Not an appliance child table: {table}")
