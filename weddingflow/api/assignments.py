"""
Seat assignment API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
import structlog
import uuid

from weddingflow.core.database import get_session
from weddingflow.core.dependencies import get_company_id, get_current_user_id
from weddingflow.core.exceptions import NotFoundError
from weddingflow.core.permissions import Permission, require_permission
from weddingflow.models.guest import Guest
from weddingflow.schemas.floor_plan import AssignmentRead
from weddingflow.schemas.seating import (
    AssignGuestRequest, AssignGuestResponse, BatchAssignRequest, BatchAssignResponse, ConflictCheck
)
from weddingflow.services.assignment_store import AssignmentStore
from weddingflow.services.batch_assignment import BatchAssignmentCoordinator
from weddingflow.services.conflict_evaluator import ConflictEvaluator
from weddingflow.services.floor_plan_service import FloorPlanService
from weddingflow.services.table_registry import TableRegistry

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/{floor_plan_id}/conflict-check", response_model=ConflictCheck)
async def check_conflicts(
    floor_plan_id: uuid.UUID,
    guest_id: uuid.UUID,
    table_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    _: bool = Depends(require_permission(Permission.SEATING_VIEW)),
    session: Session = Depends(get_session)
):
    """Preview conflicts and preferences before seating a guest"""
    floor_plan = FloorPlanService(session).verify_access(floor_plan_id, company_id)
    table = TableRegistry(session).get_table(table_id, floor_plan_id)
    guest = session.get(Guest, guest_id)
    if not guest or guest.client_id != floor_plan.client_id:
        raise NotFoundError("Guest", guest_id)
    return ConflictEvaluator(session).evaluate(guest_id, table.id, floor_plan_id=floor_plan_id)


@router.post("/{floor_plan_id}/assignments", response_model=AssignGuestResponse)
async def assign_guest(
    floor_plan_id: uuid.UUID,
    data: AssignGuestRequest,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """
    Seat a guest at a table.

    Conflicts are advisory: the guest is seated and the conflicting
    seatmates are returned. A full table is rejected with 409.
    """
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    outcome = AssignmentStore(session).assign(
        floor_plan_id,
        data.table_id,
        data.guest_id,
        seat_number=data.seat_number,
        force=data.force,
        changed_by=current_user_id,
    )

    assignment = AssignmentRead.model_validate(outcome.assignment)
    guest = session.get(Guest, data.guest_id)
    assignment.guest_name = guest.full_name if guest else None
    return AssignGuestResponse(assignment=assignment, conflicts=outcome.conflicts, replaced=outcome.replaced)


@router.delete("/{floor_plan_id}/assignments/{guest_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unassign_guest(
    floor_plan_id: uuid.UUID,
    guest_id: uuid.UUID,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Remove a guest's seat; a guest without one is left as is"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    AssignmentStore(session).unassign(floor_plan_id, guest_id, changed_by=current_user_id)


@router.post("/{floor_plan_id}/assignments/batch", response_model=BatchAssignResponse)
async def batch_assign_guests(
    floor_plan_id: uuid.UUID,
    data: BatchAssignRequest,
    company_id: uuid.UUID = Depends(get_company_id),
    current_user_id: uuid.UUID = Depends(get_current_user_id),
    _: bool = Depends(require_permission(Permission.SEATING_EDIT)),
    session: Session = Depends(get_session)
):
    """Seat many guests at once; nothing is written if any table would overflow"""
    FloorPlanService(session).verify_access(floor_plan_id, company_id)
    outcome = BatchAssignmentCoordinator(session).batch_assign(
        floor_plan_id, data.assignments, changed_by=current_user_id
    )
    return BatchAssignResponse(assigned=outcome.assigned, replaced=outcome.replaced)
