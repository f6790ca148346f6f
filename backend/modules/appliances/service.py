"""
Appliance service.

The single entry point for reading and writing appliance aggregates. It
applies ownership scoping on every path, assembles rows into aggregates
with freshly derived statuses, and maps store failures:

- reads that fail are logged and reported as "not found" (None / empty list)
- writes that fail raise StoreUnavailableError
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional, TypeVar, Union

import httpx
import pydantic
from postgrest.exceptions import APIError

from shared.exceptions import field_errors

from .assembler import assemble_appliance
from .exceptions import (
    ApplianceNotFoundError,
    ApplianceValidationError,
    LinkedDocumentNotFoundError,
    MaintenanceTaskNotFoundError,
    StoreUnavailableError,
    SupportContactNotFoundError,
)
from .interfaces import IApplianceService
from .models import (
    Appliance,
    ApplianceStats,
    CompleteMaintenanceTaskRequest,
    CreateApplianceRequest,
    CreateLinkedDocumentRequest,
    CreateMaintenanceTaskRequest,
    CreateSupportContactRequest,
    MaintenanceStatus,
    UpdateApplianceRequest,
    WarrantyFilter,
    WarrantyStatus,
)
from .ownership import OwnerResolver, is_owned_by
from .repository import (
    ApplianceRepository,
    LINKED_DOCUMENTS_TABLE,
    MAINTENANCE_TASKS_TABLE,
    SUPPORT_CONTACTS_TABLE,
)
from .status import EXPIRING_SOON_DAYS, maintenance_status

logger = logging.getLogger(__name__)

STORE_ERRORS = (APIError, httpx.HTTPError)

M = TypeVar("M", bound=pydantic.BaseModel)
R = TypeVar("R")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApplianceService(IApplianceService):
    """
    Appliance service with Supabase backend.

    Args:
        repository: Raw row access to the appliance tables
        owner_resolver: Picks the owner for new appliances
        clock: Returns the current time; sampled once per call
        expiring_soon_days: Threshold for WarrantyStatus.EXPIRING_SOON
    """

    def __init__(
        self,
        repository: ApplianceRepository,
        owner_resolver: OwnerResolver,
        clock: Callable[[], datetime] = utc_now,
        expiring_soon_days: int = EXPIRING_SOON_DAYS,
    ):
        self._repository = repository
        self._owner_resolver = owner_resolver
        self._clock = clock
        self._expiring_soon_days = expiring_soon_days

    # -------------------------------------------------------------------------
    # Appliance operations
    # -------------------------------------------------------------------------

    async def list_appliances(
        self,
        search: Optional[str] = None,
        warranty_filter: Optional[Union[WarrantyFilter, str]] = None,
        acting_user_id: Optional[str] = None,
    ) -> list[Appliance]:
        """List appliances visible to the acting user, newest first."""
        status_filter = _parse_filter(warranty_filter)

        try:
            rows = self._repository.list_rows(acting_user_id)
        except STORE_ERRORS:
            logger.exception("Failed to list appliances (user=%s)", acting_user_id)
            return []

        now = self._clock()
        appliances = [
            self._assemble(row, now) for row in rows if is_owned_by(row, acting_user_id)
        ]

        if search:
            needle = search.casefold()
            appliances = [a for a in appliances if _matches(a, needle)]

        if status_filter is not None:
            appliances = [a for a in appliances if a.warranty_status == status_filter]

        return appliances

    async def get_appliance(
        self,
        appliance_id: str,
        acting_user_id: Optional[str] = None,
    ) -> Optional[Appliance]:
        """Get one appliance aggregate, or None."""
        try:
            row = self._repository.get_row(appliance_id, acting_user_id)
        except STORE_ERRORS:
            logger.exception("Failed to fetch appliance %s", appliance_id)
            return None

        if row is None or not is_owned_by(row, acting_user_id):
            logger.debug("Appliance %s not found (user=%s)", appliance_id, acting_user_id)
            return None

        return self._assemble(row, self._clock())

    async def create_appliance(
        self,
        request: Union[CreateApplianceRequest, dict],
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Create an appliance owned by the acting user or the default owner."""
        request = _validate(CreateApplianceRequest, request)
        owner_id = self._owner_resolver.resolve(acting_user_id)

        row = self._write(
            "create_appliance",
            self._repository.insert,
            request.to_row(owner_id),
        )
        logger.info("Created appliance %s for user %s", row.get("id"), owner_id)
        return self._assemble(row, self._clock())

    async def update_appliance(
        self,
        appliance_id: str,
        patch: Union[UpdateApplianceRequest, dict],
        acting_user_id: Optional[str] = None,
    ) -> Optional[Appliance]:
        """Apply a partial update; returns the re-assembled aggregate or None."""
        patch = _validate(UpdateApplianceRequest, patch)
        if patch.is_empty():
            raise ApplianceValidationError("No fields to update")

        data = patch.to_row()
        data["updated_at"] = self._clock().isoformat()

        updated = self._write(
            "update_appliance",
            self._repository.update,
            appliance_id,
            data,
            acting_user_id,
        )
        if updated is None:
            return None

        return self._reload(appliance_id, acting_user_id)

    async def delete_appliance(
        self,
        appliance_id: str,
        acting_user_id: Optional[str] = None,
    ) -> bool:
        """Delete an appliance; True iff a row was removed."""
        deleted = self._write(
            "delete_appliance",
            self._repository.delete,
            appliance_id,
            acting_user_id,
        )
        if deleted:
            logger.info("Deleted appliance %s", appliance_id)
        return deleted

    async def get_stats(self, acting_user_id: Optional[str] = None) -> ApplianceStats:
        """Count visible appliances per warranty status."""
        appliances = await self.list_appliances(acting_user_id=acting_user_id)

        stats = ApplianceStats(total=len(appliances))
        for appliance in appliances:
            if appliance.warranty_status == WarrantyStatus.ACTIVE:
                stats.active += 1
            elif appliance.warranty_status == WarrantyStatus.EXPIRING_SOON:
                stats.expiring += 1
            elif appliance.warranty_status == WarrantyStatus.EXPIRED:
                stats.expired += 1
        return stats

    # -------------------------------------------------------------------------
    # Support contacts
    # -------------------------------------------------------------------------

    async def add_support_contact(
        self,
        appliance_id: str,
        request: Union[CreateSupportContactRequest, dict],
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Attach a support contact; returns the refreshed aggregate."""
        request = _validate(CreateSupportContactRequest, request)
        self._require_appliance(appliance_id, acting_user_id)

        data = request.model_dump(mode="json")
        data["appliance_id"] = appliance_id
        self._write(
            "add_support_contact",
            self._repository.insert_child,
            SUPPORT_CONTACTS_TABLE,
            data,
        )
        return self._reload(appliance_id, acting_user_id)

    async def remove_support_contact(
        self,
        appliance_id: str,
        contact_id: str,
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Detach a support contact; returns the refreshed aggregate."""
        self._require_appliance(appliance_id, acting_user_id)

        removed = self._write(
            "remove_support_contact",
            self._repository.delete_child,
            SUPPORT_CONTACTS_TABLE,
            appliance_id,
            contact_id,
        )
        if not removed:
            raise SupportContactNotFoundError(appliance_id, contact_id)
        return self._reload(appliance_id, acting_user_id)

    # -------------------------------------------------------------------------
    # Maintenance tasks
    # -------------------------------------------------------------------------

    async def add_maintenance_task(
        self,
        appliance_id: str,
        request: Union[CreateMaintenanceTaskRequest, dict],
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Schedule a maintenance task; returns the refreshed aggregate."""
        request = _validate(CreateMaintenanceTaskRequest, request)
        self._require_appliance(appliance_id, acting_user_id)

        data = request.model_dump(mode="json")
        data["appliance_id"] = appliance_id
        if request.service_provider is not None:
            data["service_provider"] = request.service_provider.model_dump(
                mode="json", exclude_none=True
            )
        # Advisory only; reads always recompute
        data["status"] = maintenance_status(
            request.scheduled_date, request.completed_date, self._clock()
        ).value

        self._write(
            "add_maintenance_task",
            self._repository.insert_child,
            MAINTENANCE_TASKS_TABLE,
            data,
        )
        return self._reload(appliance_id, acting_user_id)

    async def complete_maintenance_task(
        self,
        appliance_id: str,
        task_id: str,
        request: Optional[Union[CompleteMaintenanceTaskRequest, dict]] = None,
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Mark a task completed (now, unless a date is given)."""
        request = _validate(CompleteMaintenanceTaskRequest, request or {})
        self._require_appliance(appliance_id, acting_user_id)

        now = self._clock()
        completed_date = request.completed_date or now
        data = {
            "completed_date": completed_date.isoformat(),
            "status": MaintenanceStatus.COMPLETED.value,
            "updated_at": now.isoformat(),
        }
        updated = self._write(
            "complete_maintenance_task",
            self._repository.update_child,
            MAINTENANCE_TASKS_TABLE,
            appliance_id,
            task_id,
            data,
        )
        if updated is None:
            raise MaintenanceTaskNotFoundError(appliance_id, task_id)
        return self._reload(appliance_id, acting_user_id)

    async def remove_maintenance_task(
        self,
        appliance_id: str,
        task_id: str,
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Delete a maintenance task; returns the refreshed aggregate."""
        self._require_appliance(appliance_id, acting_user_id)

        removed = self._write(
            "remove_maintenance_task",
            self._repository.delete_child,
            MAINTENANCE_TASKS_TABLE,
            appliance_id,
            task_id,
        )
        if not removed:
            raise MaintenanceTaskNotFoundError(appliance_id, task_id)
        return self._reload(appliance_id, acting_user_id)

    # -------------------------------------------------------------------------
    # Linked documents
    # -------------------------------------------------------------------------

    async def add_linked_document(
        self,
        appliance_id: str,
        request: Union[CreateLinkedDocumentRequest, dict],
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Link a document; returns the refreshed aggregate."""
        request = _validate(CreateLinkedDocumentRequest, request)
        self._require_appliance(appliance_id, acting_user_id)

        data = request.model_dump(mode="json")
        data["appliance_id"] = appliance_id
        self._write(
            "add_linked_document",
            self._repository.insert_child,
            LINKED_DOCUMENTS_TABLE,
            data,
        )
        return self._reload(appliance_id, acting_user_id)

    async def remove_linked_document(
        self,
        appliance_id: str,
        document_id: str,
        acting_user_id: Optional[str] = None,
    ) -> Appliance:
        """Unlink a document; returns the refreshed aggregate."""
        self._require_appliance(appliance_id, acting_user_id)

        removed = self._write(
            "remove_linked_document",
            self._repository.delete_child,
            LINKED_DOCUMENTS_TABLE,
            appliance_id,
            document_id,
        )
        if not removed:
            raise LinkedDocumentNotFoundError(appliance_id, document_id)
        return self._reload(appliance_id, acting_user_id)

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _assemble(self, row: dict[str, Any], now: datetime) -> Appliance:
        return assemble_appliance(row, now, self._expiring_soon_days)

    def _write(self, operation: str, func: Callable[..., R], *args: Any) -> R:
        """Run a store call on a write path, raising StoreUnavailableError on failure."""
        try:
            return func(*args)
        except APIError as e:
            logger.error("Store error during %s: %s", operation, e.message)
            raise StoreUnavailableError(operation, e.message) from e
        except httpx.HTTPError as e:
            logger.error("Store unreachable during %s: %s", operation, e)
            raise StoreUnavailableError(operation, str(e)) from e

    def _require_appliance(
        self,
        appliance_id: str,
        acting_user_id: Optional[str],
    ) -> dict[str, Any]:
        """Fetch the parent row for a write, or raise ApplianceNotFoundError."""
        row = self._write(
            "get_appliance",
            self._repository.get_row,
            appliance_id,
            acting_user_id,
        )
        if row is None or not is_owned_by(row, acting_user_id):
            raise ApplianceNotFoundError(appliance_id)
        return row

    def _reload(self, appliance_id: str, acting_user_id: Optional[str]) -> Appliance:
        """Re-read and assemble an appliance after a write."""
        row = self._require_appliance(appliance_id, acting_user_id)
        return self._assemble(row, self._clock())


# -----------------------------------------------------------------------------
# Module helpers
# -----------------------------------------------------------------------------


def _validate(model: type[M], data: Union[M, dict]) -> M:
    """Accept a model instance or validate a plain dict into one."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ApplianceValidationError(errors=field_errors(e.errors())) from e


def _parse_filter(value: Optional[Union[WarrantyFilter, str]]) -> Optional[WarrantyStatus]:
    """Map a list filter to the warranty status to keep, or None for no filtering."""
    if value is None or value == "":
        return None
    try:
        parsed = WarrantyFilter(value)
    except ValueError:
        raise ApplianceValidationError(
            f"Invalid filter: {value}",
            errors=[{
                "field": "filter",
                "message": "must be one of: " + ", ".join(f.value for f in WarrantyFilter),
                "type": "enum",
            }],
        )
    if parsed == WarrantyFilter.ALL:
        return None
    return WarrantyStatus(parsed.value)


def _matches(appliance: Appliance, needle: str) -> bool:
    return any(
        needle in field.casefold()
        for field in (appliance.name, appliance.brand, appliance.model)
    )

