"""
Batch assignment: place many guests at once, all or nothing
"""

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence
import uuid

from sqlmodel import Session, select
import structlog

from weddingflow.core.database import atomic
from weddingflow.core.exceptions import CapacityExceededError, NotFoundError, SeatingValidationError
from weddingflow.models.floor_plan_table import FloorPlanTable
from weddingflow.models.guest import Guest
from weddingflow.models.seat_assignment import SeatAssignment
from weddingflow.models.seating_change_log import ChangeAction
from weddingflow.schemas.seating import BatchAssignItem
from weddingflow.services.change_log import ChangeLog
from weddingflow.services.floor_plan_service import load_floor_plan

logger = structlog.get_logger(__name__)


@dataclass
class BatchOutcome:
    assigned: int
    replaced: int = 0


class BatchAssignmentCoordinator:
    """Applies a list of (guest, table) placements in one transaction"""

    def __init__(self, session: Session):
        self.session = session

    def batch_assign(
        self,
        floor_plan_id: uuid.UUID,
        items: Sequence[BatchAssignItem],
        changed_by: Optional[uuid.UUID] = None,
    ) -> BatchOutcome:
        """
        Validate the whole batch against table capacities, then write it.

        Guests in the batch vacate their current seats first, so moving a
        guest between two full tables within one batch is counted correctly.
        Nothing is written unless every item fits.

        Raises:
            SeatingValidationError: a guest appears more than once
            NotFoundError: a table or guest is not part of the floor plan
            CapacityExceededError: an item would overfill its table
        """
        if not items:
            return BatchOutcome(assigned=0)

        duplicates = [g for g, n in Counter(item.guest_id for item in items).items() if n > 1]
        if duplicates:
            raise SeatingValidationError(
                "A guest can only appear once per batch",
                context={"guest_ids": [str(g) for g in duplicates]},
            )

        floor_plan = load_floor_plan(self.session, floor_plan_id)
        guest_ids = [item.guest_id for item in items]
        table_ids = list(dict.fromkeys(item.table_id for item in items))

        with atomic(self.session, "batch assign guests"):
            tables = {
                t.id: t for t in self.session.exec(
                    select(FloorPlanTable)
                    .where(FloorPlanTable.floor_plan_id == floor_plan_id, FloorPlanTable.id.in_(table_ids))
                    .with_for_update()
                ).all()
            }
            for table_id in table_ids:
                if table_id not in tables:
                    raise NotFoundError("Table", table_id)

            known_guests = set(self.session.exec(
                select(Guest.id).where(Guest.client_id == floor_plan.client_id, Guest.id.in_(guest_ids))
            ).all())
            for guest_id in guest_ids:
                if guest_id not in known_guests:
                    raise NotFoundError("Guest", guest_id)

            # Occupants that stay where they are
            counts = Counter(self.session.exec(
                select(SeatAssignment.table_id).where(
                    SeatAssignment.floor_plan_id == floor_plan_id,
                    SeatAssignment.table_id.in_(table_ids),
                    SeatAssignment.guest_id.not_in(guest_ids),
                )
            ).all())
            for item in items:
                counts[item.table_id] += 1
                table = tables[item.table_id]
                if counts[item.table_id] > table.capacity:
                    raise CapacityExceededError(table.label, table.capacity, table_id=table.id)

            existing = self.session.exec(
                select(SeatAssignment).where(
                    SeatAssignment.floor_plan_id == floor_plan_id,
                    SeatAssignment.guest_id.in_(guest_ids),
                )
            ).all()
            previous = {str(a.guest_id): str(a.table_id) for a in existing}
            for assignment in existing:
                self.session.delete(assignment)
            self.session.flush()

            self.session.add_all([
                SeatAssignment(
                    floor_plan_id=floor_plan_id,
                    table_id=item.table_id,
                    guest_id=item.guest_id,
                    seat_number=item.seat_number,
                )
                for item in items
            ])

        outcome = BatchOutcome(assigned=len(items), replaced=len(previous))
        _ = ChangeLog(self.session, floor_plan.company_id).log(
            floor_plan_id,
            ChangeAction.BATCH_ASSIGN,
            previous_state=previous or None,
            new_state={
                "count": outcome.assigned,
                "assignments": [item.model_dump() for item in items],
            },
            changed_by=changed_by,
        )
        logger.info(
            "guests_batch_assigned",
            floor_plan_id=str(floor_plan_id),
            assigned=outcome.assigned,
            replaced=outcome.replaced,
        )
        return outcome
