"""
Floor plans API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
import structlog
import uuid

from weddingflow.core.database import get_session
from weddingflow.core.dependencies import get_company_id, get_current_user_id
from weddingflow.core.permissions import Permission, require_permission
from weddingflow.schemas.floor_plan import (
    FloorPlanCreate, FloorPlanDetail, FloorPlanRead, FloorPlanUpdate, GuestRead
)
from weddingflow.services.floor_plan_service import FloorPlanService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/", response_model=List[FloorPlanRead])
async def list_floor_plans(
    client_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """List a client's floor plans, newest first"""
    return FloorPlanService(session).list_for_client(client_id, company_id)


@router.post("/", response_model=FloorPlanRead, status_code=status.HTTP_201_CREATED)
async def create_floor_plan(
    data: FloorPlanCreate,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Create a floor plan for a client"""
    floor_plan = FloorPlanService(session).create(company_id, data)
    logger.info("floor_plan_created_via_api", floor_plan_id=str(floor_plan.id), user_id=str(current_user_id))
    return floor_plan


@router.get("/{floor_plan_id}", response_model=FloorPlanDetail)
async def get_floor_plan(
    floor_plan_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """Floor plan with its tables, assignments and per-table conflicts"""
    service = FloorPlanService(session)
    service.verify_access(floor_plan_id, company_id)
    return service.get_detail(floor_plan_id)


@router.patch("/{floor_plan_id}", response_model=FloorPlanRead)
async def update_floor_plan(
    floor_plan_id: uuid.UUID,
    data: FloorPlanUpdate,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    service = FloorPlanService(session)
    service.verify_access(floor_plan_id, company_id)
    return service.update(floor_plan_id, data)


@router.delete("/{floor_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_floor_plan(
    floor_plan_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Delete a floor plan together with its tables, assignments and versions"""
    service = FloorPlanService(session)
    service.verify_access(floor_plan_id, company_id)
    service.delete(floor_plan_id)


@router.get("/{floor_plan_id}/unassigned-guests", response_model=List[GuestRead])
async def list_unassigned_guests(
    floor_plan_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """Roster guests without a seat on this floor plan"""
    service = FloorPlanService(session)
    service.verify_access(floor_plan_id, company_id)
    return service.unassigned_guests(floor_plan_id)
