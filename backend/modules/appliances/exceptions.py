"""
Appliances module exceptions.
"""

from typing import Any, Optional, Sequence

from shared.exceptions import (
    TrackerError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
)


class ApplianceError(TrackerError):
    """Base exception for appliance-related errors."""

    pass


class ApplianceNotFoundError(NotFoundError):
    """
    Raised when an appliance does not exist or is owned by someone else.

    Both cases produce the same error so callers cannot probe for other
    users' appliances.
    """

    def __init__(self, appliance_id: str):
        super().__init__(
            f"Appliance not found: {appliance_id}",
            code="APPLIANCE_NOT_FOUND",
            details={"appliance_id": appliance_id},
        )


class SupportContactNotFoundError(NotFoundError):
    """Raised when a support contact is not attached to the appliance."""

    def __init__(self, appliance_id: str, contact_id: str):
        super().__init__(
            f"Support contact not found: {contact_id}",
            code="SUPPORT_CONTACT_NOT_FOUND",
            details={"appliance_id": appliance_id, "contact_id": contact_id},
        )


class MaintenanceTaskNotFoundError(NotFoundError):
    """Raised when a maintenance task is not attached to the appliance."""

    def __init__(self, appliance_id: str, task_id: str):
        super().__init__(
            f"Maintenance task not found: {task_id}",
            code="MAINTENANCE_TASK_NOT_FOUND",
            details={"appliance_id": appliance_id, "task_id": task_id},
        )


class LinkedDocumentNotFoundError(NotFoundError):
    """Raised when a linked document is not attached to the appliance."""

    def __init__(self, appliance_id: str, document_id: str):
        super().__init__(
            f"Linked document not found: {document_id}",
            code="LINKED_DOCUMENT_NOT_FOUND",
            details={"appliance_id": appliance_id, "document_id": document_id},
        )


class ApplianceValidationError(ValidationError):
    """Raised when a payload fails validation. Nothing is written."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Sequence[dict[str, Any]]] = None,
    ):
        super().__init__(
            message,
            code="VALIDATION_FAILED",
            details={"errors": list(errors or [])},
        )


class OwnerUnresolvedError(ApplianceError):
    """Raised when an appliance is created with no acting user and no default owner."""

    def __init__(self, default_owner_email: Optional[str] = None):
        super().__init__(
            "No owner could be resolved for the new appliance",
            code="OWNER_UNRESOLVED",
            details={"default_owner_email": default_owner_email},
        )


class StoreUnavailableError(ExternalServiceError):
    """Raised when a write to the persisted store fails."""

    def __init__(self, operation: str, original_error: Optional[str] = None):
        super().__init__(
            f"Store operation failed: {operation}",
            service="supabase",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "original_error": original_error},
        )
