"""
Appliances module.

Appliance aggregates (appliance + support contacts + maintenance tasks +
linked documents), derived warranty/maintenance statuses and
owner-scoped access.

Public API:
- IApplianceService: Interface for appliance operations
- Appliance: Fully assembled aggregate
- warranty_status / maintenance_status: Status derivation
- OwnerResolver: Owner selection for new appliances
"""

from .interfaces import IApplianceService
from .models import (
    Appliance,
    ApplianceStats,
    SupportContact,
    MaintenanceTask,
    LinkedDocument,
    ServiceProvider,
    CreateApplianceRequest,
    UpdateApplianceRequest,
    CreateSupportContactRequest,
    CreateMaintenanceTaskRequest,
    CompleteMaintenanceTaskRequest,
    CreateLinkedDocumentRequest,
    WarrantyStatus,
    WarrantyFilter,
    MaintenanceStatus,
    MaintenanceFrequency,
)
from .status import warranty_status, maintenance_status, warranty_end_date
from .assembler import assemble_appliance
from .ownership import OwnerResolver
from .exceptions import (
    ApplianceError,
    ApplianceNotFoundError,
    SupportContactNotFoundError,
    MaintenanceTaskNotFoundError,
    LinkedDocumentNotFoundError,
    ApplianceValidationError,
    OwnerUnresolvedError,
    StoreUnavailableError,
)

__all__ = [
    # Interface
    "IApplianceService",
    # Models
    "Appliance",
    "ApplianceStats",
    "SupportContact",
    "MaintenanceTask",
    "LinkedDocument",
    "ServiceProvider",
    "CreateApplianceRequest",
    "UpdateApplianceRequest",
    "CreateSupportContactRequest",
    "CreateMaintenanceTaskRequest",
    "CompleteMaintenanceTaskRequest",
    "CreateLinkedDocumentRequest",
    "WarrantyStatus",
    "WarrantyFilter",
    "MaintenanceStatus",
    "MaintenanceFrequency",
    # Status derivation
    "warranty_status",
    "maintenance_status",
    "warranty_end_date",
    "assemble_appliance",
    "OwnerResolver",
    # Exceptions
    "ApplianceError",
    "ApplianceNotFoundError",
    "SupportContactNotFoundError",
    "MaintenanceTaskNotFoundError",
    "LinkedDocumentNotFoundError",
    "ApplianceValidationError",
    "OwnerUnresolvedError",
    "StoreUnavailableError",
]
