"""
Appliance aggregate assembly.

Turns an ``appliances`` row with its embedded child rows (as returned by
``select("*, support_contacts(*), maintenance_tasks(*), linked_documents(*)")``)
into an ``Appliance`` model. No I/O happens here; the caller supplies the
evaluation time used for every derived status.
"""

import json
from datetime import datetime
from typing import Any, Optional

from .models import (
    Appliance,
    LinkedDocument,
    MaintenanceTask,
    ServiceProvider,
    SupportContact,
)
from .status import (
    EXPIRING_SOON_DAYS,
    as_utc,
    maintenance_status,
    warranty_end_date,
    warranty_status,
)


def assemble_appliance(
    row: dict[str, Any],
    now: datetime,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
) -> Appliance:
    """
    Build the aggregate for one appliance row.

    Missing or null child collections become empty lists. Maintenance task
    statuses are recomputed against ``now``, replacing stored values.
    """
    appliance_id = str(row["id"])
    purchase_date = _parse_datetime(row["purchase_date"])
    months = int(row["warranty_duration_months"])

    tasks = [
        map_maintenance_task(t, now, appliance_id)
        for t in _children(row, "maintenance_tasks")
    ]
    tasks.sort(key=lambda t: as_utc(t.scheduled_date))

    return Appliance(
        id=appliance_id,
        owner_user_id=_optional_str(row.get("user_id")),
        name=row["name"],
        brand=row["brand"],
        model=row["model"],
        purchase_date=purchase_date,
        warranty_duration_months=months,
        serial_number=row.get("serial_number"),
        purchase_location=row.get("purchase_location"),
        notes=row.get("notes"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        warranty_end_date=warranty_end_date(purchase_date, months),
        warranty_status=warranty_status(purchase_date, months, now, expiring_soon_days),
        support_contacts=[
            map_support_contact(c, appliance_id)
            for c in _children(row, "support_contacts")
        ],
        maintenance_tasks=tasks,
        linked_documents=[
            map_linked_document(d, appliance_id)
            for d in _children(row, "linked_documents")
        ],
    )


def map_support_contact(data: dict[str, Any], appliance_id: Optional[str] = None) -> SupportContact:
    """Map a ``support_contacts`` row."""
    return SupportContact(
        id=str(data["id"]),
        appliance_id=str(data.get("appliance_id") or appliance_id),
        name=data["name"],
        company=data.get("company"),
        phone=data.get("phone"),
        email=data.get("email"),
        website=data.get("website"),
        notes=data.get("notes"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def map_maintenance_task(
    data: dict[str, Any],
    now: datetime,
    appliance_id: Optional[str] = None,
) -> MaintenanceTask:
    """Map a ``maintenance_tasks`` row, deriving its status from the dates."""
    scheduled_date = _parse_datetime(data["scheduled_date"])
    completed_raw = data.get("completed_date")
    completed_date = _parse_datetime(completed_raw) if completed_raw else None

    return MaintenanceTask(
        id=str(data["id"]),
        appliance_id=str(data.get("appliance_id") or appliance_id),
        task_name=data["task_name"],
        scheduled_date=scheduled_date,
        frequency=data["frequency"],
        service_provider=_service_provider(data.get("service_provider")),
        notes=data.get("notes"),
        completed_date=completed_date,
        status=maintenance_status(scheduled_date, completed_date, now),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def map_linked_document(data: dict[str, Any], appliance_id: Optional[str] = None) -> LinkedDocument:
    """Map a ``linked_documents`` row."""
    return LinkedDocument(
        id=str(data["id"]),
        appliance_id=str(data.get("appliance_id") or appliance_id),
        title=data["title"],
        url=data["url"],
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _children(row: dict[str, Any], key: str) -> list[dict[str, Any]]:
    return row.get(key) or []


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    # PostgREST emits ISO 8601
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _service_provider(value: Any) -> Optional[ServiceProvider]:
    if not value:
        return None
    if isinstance(value, str):
        value = json.loads(value)
    return ServiceProvider.model_validate(value)
