"""
Guest conflicts and preferences API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
import structlog
import uuid

from weddingflow.core.database import get_session
from weddingflow.core.dependencies import get_company_id, get_current_user_id
from weddingflow.core.permissions import Permission, require_permission
from weddingflow.schemas.seating import ConflictCreate, ConflictRead, PreferenceCreate, PreferenceRead
from weddingflow.services.floor_plan_service import FloorPlanService
from weddingflow.services.relationship_graph import GuestRelationshipGraph

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/conflicts", response_model=List[ConflictRead])
async def list_conflicts(
    client_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """Active conflicts among a client's guests"""
    FloorPlanService(session).verify_client(client_id, company_id)
    return GuestRelationshipGraph(session).get_conflicts(client_id, company_id)


@router.post("/conflicts", response_model=ConflictRead, status_code=status.HTTP_201_CREATED)
async def add_conflict(
    data: ConflictCreate,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.RELATIONSHIPS_EDIT)),
    session: Session = Depends(get_session)
):
    """Record that two guests should not sit together; re-adding updates the existing pair"""
    FloorPlanService(session).verify_client(data.client_id, company_id)
    return GuestRelationshipGraph(session).add_conflict(
        company_id,
        data.client_id,
        data.guest_one_id,
        data.guest_two_id,
        conflict_type=data.conflict_type,
        severity=data.severity,
        reason=data.reason,
        created_by=current_user_id,
    )


@router.delete("/conflicts/{conflict_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_conflict(
    conflict_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.RELATIONSHIPS_EDIT)),
    session: Session = Depends(get_session)
):
    GuestRelationshipGraph(session).remove_conflict(conflict_id, company_id)


@router.get("/preferences", response_model=List[PreferenceRead])
async def list_preferences(
    client_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """Active preferences among a client's guests"""
    FloorPlanService(session).verify_client(client_id, company_id)
    return GuestRelationshipGraph(session).get_preferences(client_id, company_id)


@router.post("/preferences", response_model=PreferenceRead, status_code=status.HTTP_201_CREATED)
async def add_preference(
    data: PreferenceCreate,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.RELATIONSHIPS_EDIT)),
    session: Session = Depends(get_session)
):
    FloorPlanService(session).verify_client(data.client_id, company_id)
    return GuestRelationshipGraph(session).add_preference(
        company_id,
        data.client_id,
        data.guest_one_id,
        data.guest_two_id,
        preference_type=data.preference_type,
        strength=data.strength,
        reason=data.reason,
        created_by=current_user_id,
    )


@router.delete("/preferences/{preference_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_preference(
    preference_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.RELATIONSHIPS_EDIT)),
    session: Session = Depends(get_session)
):
    GuestRelationshipGraph(session).remove_preference(preference_id, company_id)
