"""
Appliance API endpoints.

Every endpoint requires an authenticated user and passes that user's ID as
the acting user, so the externally reachable surface is always
owner-scoped.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from api.middleware.auth import get_current_user
from api.dependencies import get_appliance_service
from shared.models import AuthenticatedUser

from .models import (
    Appliance,
    ApplianceStats,
    CompleteMaintenanceTaskRequest,
    CreateApplianceRequest,
    CreateLinkedDocumentRequest,
    CreateMaintenanceTaskRequest,
    CreateSupportContactRequest,
    UpdateApplianceRequest,
    WarrantyFilter,
)
from .service import ApplianceService

router = APIRouter()

NOT_FOUND = "Appliance not found"


@router.get("", response_model=list[Appliance])
async def list_appliances(
    search: Optional[str] = Query(default=None, description="Match name, brand or model"),
    warranty_filter: Optional[WarrantyFilter] = Query(
        default=None,
        alias="filter",
        description="Warranty status to keep",
    ),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> list[Appliance]:
    """
    List the current user's appliances, most recently created first.
    """
    return await service.list_appliances(search, warranty_filter, user.id)


@router.get("/stats/overview", response_model=ApplianceStats)
async def get_stats(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> ApplianceStats:
    """
    Count the current user's appliances by warranty status.
    """
    return await service.get_stats(user.id)


@router.get("/{appliance_id}", response_model=Appliance)
async def get_appliance(
    appliance_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    """
    Get one appliance with its contacts, maintenance tasks and documents.
    """
    appliance = await service.get_appliance(appliance_id, user.id)
    if appliance is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return appliance


@router.post("", response_model=Appliance, status_code=201)
async def create_appliance(
    request: CreateApplianceRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    """
    Create an appliance owned by the current user.
    """
    return await service.create_appliance(request, user.id)


@router.put("/{appliance_id}", response_model=Appliance)
async def update_appliance(
    appliance_id: str,
    patch: UpdateApplianceRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    """
    Update the given fields of an appliance.
    """
    appliance = await service.update_appliance(appliance_id, patch, user.id)
    if appliance is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return appliance


@router.delete("/{appliance_id}", status_code=204)
async def delete_appliance(
    appliance_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> None:
    """
    Delete an appliance and everything attached to it.
    """
    if not await service.delete_appliance(appliance_id, user.id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)


# -----------------------------------------------------------------------------
# Child records
# -----------------------------------------------------------------------------


@router.post("/{appliance_id}/support-contacts", response_model=Appliance, status_code=201)
async def add_support_contact(
    appliance_id: str,
    request: CreateSupportContactRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    return await service.add_support_contact(appliance_id, request, user.id)


@router.delete("/{appliance_id}/support-contacts/{contact_id}", response_model=Appliance)
async def remove_support_contact(
    appliance_id: str,
    contact_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    return await service.remove_support_contact(appliance_id, contact_id, user.id)


@router.post("/{appliance_id}/maintenance-tasks", response_model=Appliance, status_code=201)
async def add_maintenance_task(
    appliance_id: str,
    request: CreateMaintenanceTaskRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    return await service.add_maintenance_task(appliance_id, request, user.id)


@router.post(
    "/{appliance_id}/maintenance-tasks/{task_id}/complete",
    response_model=Appliance,
)
async def complete_maintenance_task(
    appliance_id: str,
    task_id: str,
    request: Optional[CompleteMaintenanceTaskRequest] = Body(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    """
    Mark a maintenance task done, now unless ``completedDate`` is given.
    """
    return await service.complete_maintenance_task(
        appliance_id, task_id, request, acting_user_id=user.id
    )


@router.delete("/{appliance_id}/maintenance-tasks/{task_id}", response_model=Appliance)
async def remove_maintenance_task(
    appliance_id: str,
    task_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    return await service.remove_maintenance_task(appliance_id, task_id, user.id)


@router.post("/{appliance_id}/documents", response_model=Appliance, status_code=201)
async def add_linked_document(
    appliance_id: str,
    request: CreateLinkedDocumentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    return await service.add_linked_document(appliance_id, request, user.id)


@router.delete("/{appliance_id}/documents/{document_id}", response_model=Appliance)
async def remove_linked_document(
    appliance_id: str,
    document_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ApplianceService = Depends(get_appliance_service),
) -> Appliance:
    return await service.remove_linked_document(appliance_id, document_id, user.id)
