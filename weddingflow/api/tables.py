"""
Floor plan tables API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List
import structlog
import uuid

from weddingflow.core.database import get_session
from weddingflow.core.dependencies import get_company_id, get_current_user_id
from weddingflow.core.permissions import Permission, require_permission
from weddingflow.schemas.floor_plan import TableCreate, TableRead, TableUpdate
from weddingflow.services.floor_plan_service import FloorPlanService
from weddingflow.services.table_registry import TableRegistry

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/{floor_plan_id}/tables", response_model=List[TableRead])
async def list_tables(
    floor_plan_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    return TableRegistry(session).list_tables(floor_plan_id)


@router.post("/{floor_plan_id}/tables", response_model=TableRead, status_code=status.HTTP_201_CREATED)
async def add_table(
    floor_plan_id: uuid.UUID,
    data: TableCreate,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Place a table on the floor plan"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    return TableRegistry(session).add_table(floor_plan_id, data, changed_by=current_user_id)


@router.patch("/{floor_plan_id}/tables/{table_id}", response_model=TableRead)
async def update_table(
    floor_plan_id: uuid.UUID,
    table_id: uuid.UUID,
    data: TableUpdate,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Move, resize or restyle a table"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    return TableRegistry(session).update_table(
        table_id, data, changed_by=current_user_id, floor_plan_id=floor_plan_id
    )


@router.delete("/{floor_plan_id}/tables/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_table(
    floor_plan_id: uuid.UUID,
    table_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Remove an empty table"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    TableRegistry(session).delete_table(table_id, changed_by=current_user_id, floor_plan_id=floor_plan_id)
