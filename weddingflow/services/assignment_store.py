"""
Assignment store: single guest placement within a floor plan

Invariants held at every commit:
    - at most one assignment per (floor plan, guest)
    - assignments per table <= table.capacity
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import uuid

from sqlalchemy import func
from sqlmodel import Session, select
import structlog

from weddingflow.core.database import atomic
from weddingflow.core.exceptions import CapacityExceededError, NotFoundError
from weddingflow.models.floor_plan_table import FloorPlanTable
from weddingflow.models.guest import Guest
from weddingflow.models.seat_assignment import SeatAssignment
from weddingflow.models.seating_change_log import ChangeAction
from weddingflow.schemas.seating import SeatmateRef
from weddingflow.services.change_log import ChangeLog
from weddingflow.services.conflict_evaluator import ConflictEvaluator
from weddingflow.services.floor_plan_service import load_floor_plan

logger = structlog.get_logger(__name__)


@dataclass
class AssignmentOutcome:
    assignment: SeatAssignment
    conflicts: List[SeatmateRef] = field(default_factory=list)
    replaced: bool = False


def assignment_state(assignment: Optional[SeatAssignment]) -> Optional[dict]:
    if assignment is None:
        return None
    return {
        "table_id": assignment.table_id,
        "guest_id": assignment.guest_id,
        "seat_number": assignment.seat_number,
    }


def load_table_for_update(session: Session, floor_plan_id: uuid.UUID, table_id: uuid.UUID) -> FloorPlanTable:
    table = session.exec(
        select(FloorPlanTable)
        .where(FloorPlanTable.id == table_id, FloorPlanTable.floor_plan_id == floor_plan_id)
        .with_for_update()
    ).first()
    if not table:
        raise NotFoundError("Table", table_id)
    return table


class AssignmentStore:
    """Assign and unassign guests one at a time"""

    def __init__(self, session: Session):
        self.session = session
        self.evaluator = ConflictEvaluator(session)

    def assign(
        self,
        floor_plan_id: uuid.UUID,
        table_id: uuid.UUID,
        guest_id: uuid.UUID,
        seat_number: Optional[int] = None,
        force: bool = False,
        changed_by: Optional[uuid.UUID] = None,
    ) -> AssignmentOutcome:
        """
        Seat a guest at a table, replacing any earlier seat in this floor plan.

        Args:
            floor_plan_id: Floor plan the table belongs to
            table_id: Target table
            guest_id: Guest to seat
            seat_number: Optional 1-based seat at the table
            force: Skip the advisory conflict check. Capacity is still enforced.
            changed_by: Acting user, recorded in the change log

        Returns:
            AssignmentOutcome with the new row, any conflicting seatmates and
            whether an earlier assignment was replaced

        Raises:
            NotFoundError: floor plan, table or guest does not exist
            CapacityExceededError: the table is already full
        """
        floor_plan = load_floor_plan(self.session, floor_plan_id)
        conflicts: List[SeatmateRef] = []

        with atomic(self.session, "assign guest"):
            table = load_table_for_update(self.session, floor_plan_id, table_id)
            guest = self.session.get(Guest, guest_id)
            if not guest or guest.client_id != floor_plan.client_id:
                raise NotFoundError("Guest", guest_id)

            occupants = self.session.exec(
                select(func.count(SeatAssignment.id)).where(
                    SeatAssignment.table_id == table_id,
                    SeatAssignment.guest_id != guest_id,
                )
            ).one()
            if occupants >= table.capacity:
                raise CapacityExceededError(table.label, table.capacity, table_id=table.id)

            if not force:
                conflicts = self.evaluator.evaluate(guest_id, table_id, floor_plan_id=floor_plan_id).conflicts
                if conflicts:
                    logger.warning(
                        "seating_conflict_assigned",
                        guest_id=str(guest_id),
                        table_id=str(table_id),
                        conflicts_with=[str(c.guest_id) for c in conflicts],
                    )

            previous = self._current(floor_plan_id, guest_id)
            previous_state = assignment_state(previous)
            if previous:
                self.session.delete(previous)
                self.session.flush()

            assignment = SeatAssignment(
                floor_plan_id=floor_plan_id,
                table_id=table_id,
                guest_id=guest_id,
                seat_number=seat_number,
            )
            self.session.add(assignment)
        self.session.refresh(assignment)

        new_state = assignment_state(assignment)
        if conflicts:
            new_state["conflicts"] = [c.model_dump() for c in conflicts]
        _ = ChangeLog(self.session, floor_plan.company_id).log(
            floor_plan_id,
            ChangeAction.ASSIGN,
            guest_id=guest_id,
            table_id=table_id,
            previous_state=previous_state,
            new_state=new_state,
            changed_by=changed_by,
        )
        logger.info("guest_assigned", floor_plan_id=str(floor_plan_id), guest_id=str(guest_id), table_id=str(table_id))
        return AssignmentOutcome(assignment=assignment, conflicts=conflicts, replaced=previous is not None)

    def unassign(
        self,
        floor_plan_id: uuid.UUID,
        guest_id: uuid.UUID,
        changed_by: Optional[uuid.UUID] = None,
    ) -> bool:
        """Remove the guest's seat. Returns False when there was nothing to remove."""
        floor_plan = load_floor_plan(self.session, floor_plan_id)

        with atomic(self.session, "unassign guest"):
            previous = self._current(floor_plan_id, guest_id)
            previous_state = assignment_state(previous)
            if previous:
                self.session.delete(previous)

        if previous_state is None:
            return False

        _ = ChangeLog(self.session, floor_plan.company_id).log(
            floor_plan_id,
            ChangeAction.UNASSIGN,
            guest_id=guest_id,
            table_id=previous_state["table_id"],
            previous_state=previous_state,
            changed_by=changed_by,
        )
        logger.info("guest_unassigned", floor_plan_id=str(floor_plan_id), guest_id=str(guest_id))
        return True

    def list_assignments(self, floor_plan_id: uuid.UUID) -> List[SeatAssignment]:
        return list(self.session.exec(
            select(SeatAssignment).where(SeatAssignment.floor_plan_id == floor_plan_id)
        ).all())

    def table_occupancy(self, floor_plan_id: uuid.UUID) -> Dict[uuid.UUID, int]:
        rows = self.session.exec(
            select(SeatAssignment.table_id, func.count(SeatAssignment.id))
            .where(SeatAssignment.floor_plan_id == floor_plan_id)
            .group_by(SeatAssignment.table_id)
        ).all()
        return {table_id: count for table_id, count in rows}

    def _current(self, floor_plan_id: uuid.UUID, guest_id: uuid.UUID) -> Optional[SeatAssignment]:
        return self.session.exec(
            select(SeatAssignment).where(
                SeatAssignment.floor_plan_id == floor_plan_id,
                SeatAssignment.guest_id == guest_id,
            )
        ).first()
