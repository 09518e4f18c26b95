"""
Seating change log API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List, Optional
import structlog
import uuid

from weddingflow.core.database import get_session
from weddingflow.core.dependencies import get_company_id, get_current_user_id
from weddingflow.core.permissions import Permission, require_permission
from weddingflow.models.seating_change_log import SeatingChangeLogEntry
from weddingflow.schemas.seating import ChangeLogCreate, ChangeLogRead
from weddingflow.services.change_log import ChangeLog
from weddingflow.services.floor_plan_service import FloorPlanService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/{floor_plan_id}/changes", response_model=List[ChangeLogRead])
async def list_changes(
    floor_plan_id: uuid.UUID,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """Recent seating changes, newest first"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    return ChangeLog(session, company_id).history(floor_plan_id, limit)


@router.post("/{floor_plan_id}/changes", response_model=ChangeLogRead, status_code=status.HTTP_201_CREATED)
async def log_change(
    floor_plan_id: uuid.UUID,
    data: ChangeLogCreate,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Record a change made outside the seating endpoints"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    result = ChangeLog(session, company_id).log(
        floor_plan_id,
        data.action,
        guest_id=data.guest_id,
        table_id=data.table_id,
        previous_state=data.previous_state,
        new_state=data.new_state,
        changed_by=current_user_id,
    )
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record change",
        )
    return session.get(SeatingChangeLogEntry, result.entry_id)
