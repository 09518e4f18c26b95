"""
Seating versions API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
import structlog
import uuid

from weddingflow.core.database import get_session
from weddingflow.core.dependencies import get_company_id, get_current_user_id
from weddingflow.core.permissions import Permission, require_permission
from weddingflow.schemas.seating import RestoreResponse, VersionCreate, VersionRead
from weddingflow.services.floor_plan_service import FloorPlanService
from weddingflow.services.version_store import VersionStore

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/{floor_plan_id}/versions", response_model=List[VersionRead])
async def list_versions(
    floor_plan_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """Saved versions, newest first"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    return VersionStore(session).list_versions(floor_plan_id)


@router.post("/{floor_plan_id}/versions", response_model=VersionRead, status_code=status.HTTP_201_CREATED)
async def save_version(
    floor_plan_id: uuid.UUID,
    data: VersionCreate,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Snapshot the current layout and assignments"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    return VersionStore(session).save(
        floor_plan_id,
        data.name,
        description=data.description,
        is_auto_save=data.is_auto_save,
        created_by=current_user_id,
    )


@router.post("/{floor_plan_id}/versions/{version_id}/restore", response_model=RestoreResponse)
async def restore_version(
    floor_plan_id: uuid.UUID,
    version_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    outcome = VersionStore(session).restore(version_id, floor_plan_id, changed_by=current_user_id)
    return RestoreResponse(
        restored_tables=outcome.restored_tables,
        restored_assignments=outcome.restored_assignments,
        skipped_tables=outcome.skipped_tables,
        skipped_assignments=outcome.skipped_assignments,
    )


@router.delete("/{floor_plan_id}/versions/{version_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_version(
    floor_plan_id: uuid.UUID,
    version_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.VERSIONS_MANAGE)),
    session: Session = Depends(get_session)
):
    """Delete a version. If it was current, no version is current afterwards."""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    VersionStore(session).delete_version(version_id, floor_plan_id)
