"""
Appliances module data models.

Attributes are snake_case and mirror the store's column names; on the wire
every model uses camelCase aliases (``purchaseDate``, ``maintenanceTasks``).
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class WarrantyStatus(str, Enum):
    """Warranty state derived from purchase date and duration."""

    ACTIVE = "Active"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"


class WarrantyFilter(str, Enum):
    """Accepted values for the ``filter`` list parameter."""

    ALL = "all"
    ACTIVE = "Active"
    EXPIRING_SOON = "Expiring Soon"
    EXPIRED = "Expired"


class MaintenanceStatus(str, Enum):
    """Maintenance state derived from scheduled and completed dates."""

    UPCOMING = "Upcoming"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class MaintenanceFrequency(str, Enum):
    """How often a maintenance task recurs."""

    ONE_TIME = "One-time"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"
    CUSTOM = "Custom"


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# -----------------------------------------------------------------------------
# Aggregate
# -----------------------------------------------------------------------------


class ServiceProvider(CamelModel):
    """Who performs a maintenance task. Stored as one JSON column."""

    name: str = Field(..., min_length=1, description="Provider name")
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None


class SupportContact(CamelModel):
    """Support contact attached to an appliance."""

    id: str
    appliance_id: str
    name: str
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MaintenanceTask(CamelModel):
    """
    Scheduled maintenance for an appliance.

    ``status`` is always derived at read time; whatever the store holds in
    its status column is ignored.
    """

    id: str
    appliance_id: str
    task_name: str
    scheduled_date: datetime
    frequency: MaintenanceFrequency
    service_provider: Optional[ServiceProvider] = None
    notes: Optional[str] = None
    completed_date: Optional[datetime] = None
    status: MaintenanceStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LinkedDocument(CamelModel):
    """Manual, receipt or other document linked by URL."""

    id: str
    appliance_id: str
    title: str
    url: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Appliance(CamelModel):
    """
    Appliance aggregate.

    An appliance row together with its support contacts, maintenance tasks
    and linked documents. Child collections are always lists, never None.
    """

    id: str = Field(..., description="Appliance ID (UUID)")
    owner_user_id: Optional[str] = Field(None, description="Owning user ID")
    name: str
    brand: str
    model: str
    purchase_date: datetime
    warranty_duration_months: int = Field(..., ge=1)
    serial_number: Optional[str] = None
    purchase_location: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    # Derived at read time
    warranty_end_date: datetime
    warranty_status: WarrantyStatus

    support_contacts: list[SupportContact] = Field(default_factory=list)
    maintenance_tasks: list[MaintenanceTask] = Field(default_factory=list)
    linked_documents: list[LinkedDocument] = Field(default_factory=list)


class ApplianceStats(BaseModel):
    """Warranty status counts across the visible appliances."""

    total: int = 0
    active: int = 0
    expiring: int = 0
    expired: int = 0


# -----------------------------------------------------------------------------
# Payloads
# -----------------------------------------------------------------------------


class CreateApplianceRequest(CamelModel):
    """Payload for creating an appliance."""

    name: str = Field(..., min_length=1, description="Appliance name")
    brand: str = Field(..., min_length=1, description="Brand")
    model: str = Field(..., min_length=1, description="Model")
    purchase_date: datetime = Field(..., description="Purchase date-time")
    warranty_duration_months: int = Field(..., ge=1, description="Warranty length in months")
    serial_number: Optional[str] = None
    purchase_location: Optional[str] = None
    notes: Optional[str] = None

    def to_row(self, owner_user_id: str) -> dict[str, Any]:
        """Column values for the ``appliances`` insert."""
        row = self.model_dump(mode="json")
        row["user_id"] = owner_user_id
        return row


# Columns that may be patched but never cleared
_REQUIRED_COLUMNS = (
    "name",
    "brand",
    "model",
    "purchase_date",
    "warranty_duration_months",
)


class UpdateApplianceRequest(CamelModel):
    """
    Partial update for an appliance.

    Only fields present in the payload are written. Required columns may be
    changed but not set to null; optional ones may be cleared with null.
    """

    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    purchase_date: Optional[datetime] = None
    warranty_duration_months: Optional[int] = Field(None, ge=1)
    serial_number: Optional[str] = None
    purchase_location: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _required_columns_not_null(self) -> "UpdateApplianceRequest":
        for field in _REQUIRED_COLUMNS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def is_empty(self) -> bool:
        return not self.model_fields_set

    def to_row(self) -> dict[str, Any]:
        """Column values for the ``appliances`` update."""
        return self.model_dump(mode="json", exclude_unset=True)


class CreateSupportContactRequest(CamelModel):
    """Payload for adding a support contact."""

    name: str = Field(..., min_length=1)
    company: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None


class CreateMaintenanceTaskRequest(CamelModel):
    """Payload for scheduling a maintenance task."""

    task_name: str = Field(..., min_length=1)
    scheduled_date: datetime
    frequency: MaintenanceFrequency = MaintenanceFrequency.ONE_TIME
    service_provider: Optional[ServiceProvider] = None
    notes: Optional[str] = None
    completed_date: Optional[datetime] = None


class CompleteMaintenanceTaskRequest(CamelModel):
    """Payload for marking a task done. Defaults to the current time."""

    completed_date: Optional[datetime] = None


class CreateLinkedDocumentRequest(CamelModel):
    """Payload for linking a document."""

    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
