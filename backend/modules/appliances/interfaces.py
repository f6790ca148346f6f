"""
Appliances module interface.

The API layer depends on IApplianceService for all appliance operations.
Every method takes an optional ``acting_user_id``. When given, the call
only sees and affects appliances owned by that user; an appliance owned by
someone else behaves exactly like one that does not exist. Calls without an
acting user run over all rows and are reserved for trusted internal callers.
"""

from typing import Protocol, Optional, Union, runtime_checkable

from .models import (
    Appliance,
    ApplianceStats,
    CreateApplianceRequest,
    UpdateApplianceRequest,
    WarrantyFilter,
)


@runtime_checkable
class IApplianceService(Protocol):
    """Interface for appliance aggregate operations."""

    async def list_appliances(
        self,
        search: Optional[str] = None,
        warranty_filter: Optional[Union[WarrantyFilter, str]] = None,
        acting_user_id: Optional[str] = None,
    ) -> list[Appliance]:
        """
        List appliances, most recently created first.

        Args:
            search: Case-insensitive substring of name, brand or model
            warranty_filter: Keep only this warranty status ("all" keeps everything)
            acting_user_id: Owner scope

        Returns:
            Assembled appliances; empty if the store could not be read
        """
        ...

    async def get_appliance(
        self,
        appliance_id: str,
        acting_user_id: Optional[str] = None,
    ) -> Optional[Appliance]:
        """
        Get one appliance aggregate.

        Returns:
            The appliance, or None if absent, out of scope or unreadable
        """
        ...

    async def create_appliance(
        self,
        request: Union[CreateApplianceRequest, dict],
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """
        Create an appliance owned by the acting user or the default owner.

        Raises:
            ApplianceValidationError: Payload is invalid
            OwnerUnresolvedError: No owner could be resolved
            StoreUnavailableError: The insert failed
        """
        ...

    async def update_appliance(
        self,
        appliance_id: str,
        patch: Union[UpdateApplianceRequest, dict],
        acting_user_id: Optional[str] = None,
    ) -> Optional[Appliance]:
        """
        Apply a partial update and return the re-assembled aggregate.

        Returns:
            Updated appliance, or None if absent or out of scope

        Raises:
            ApplianceValidationError: Patch is invalid or empty
            StoreUnavailableError: The update failed
        """
        ...

    async def delete_appliance(
        self,
        appliance_id: str,
        acting_user_id: Optional[str] = None,
    ) -> bool:
        """
        Delete an appliance and its children.

        Returns:
            True iff a row was removed; repeating the call returns False

        Raises:
            StoreUnavailableError: The delete failed
        """
        ...

    async def get_stats(
        self,
        acting_user_id: Optional[str] = None,
    ) -> ApplianceStats:
        """Count visible appliances per warranty status."""
        ...
