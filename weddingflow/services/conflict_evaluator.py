"""
Conflict evaluator: advisory check of a candidate guest against a table's occupants
"""

from typing import Optional
import uuid

from sqlalchemy import and_, or_
from sqlmodel import Session, select
import structlog

from weddingflow.models.guest import Guest
from weddingflow.models.guest_relationship import GuestConflict, GuestPreference
from weddingflow.models.seat_assignment import SeatAssignment
from weddingflow.schemas.seating import ConflictCheck, SeatmateRef

logger = structlog.get_logger(__name__)


class ConflictEvaluator:
    """
    Reports which occupants of a table conflict with, or are preferred by, a guest.

    Work is bounded by the number of guests at the table: only the table's
    assignments and the edges between the candidate and those occupants are
    read. The result never blocks a write by itself.
    """

    def __init__(self, session: Session):
        self.session = session

    def evaluate(
        self,
        guest_id: uuid.UUID,
        table_id: uuid.UUID,
        floor_plan_id: Optional[uuid.UUID] = None,
    ) -> ConflictCheck:
        guest = self.session.get(Guest, guest_id)
        if not guest:
            return ConflictCheck()

        query = (
            select(Guest)
            .join(SeatAssignment, SeatAssignment.guest_id == Guest.id)
            .where(
                SeatAssignment.table_id == table_id,
                Guest.id != guest_id,
                Guest.client_id == guest.client_id,
            )
        )
        if floor_plan_id is not None:
            query = query.where(SeatAssignment.floor_plan_id == floor_plan_id)
        occupants = self.session.exec(query).all()
        if not occupants:
            return ConflictCheck()

        names = {o.id: o.full_name for o in occupants}
        occupant_ids = list(names)

        conflicts = [
            SeatmateRef(guest_id=other, name=names[other], severity=edge.severity)
            for edge, other in self._edges(GuestConflict, guest, occupant_ids)
        ]
        preferences = [
            SeatmateRef(guest_id=other, name=names[other], strength=edge.strength)
            for edge, other in self._edges(GuestPreference, guest, occupant_ids)
        ]

        if conflicts:
            logger.debug("seating_conflicts_found", guest_id=str(guest_id), table_id=str(table_id), count=len(conflicts))
        return ConflictCheck(
            conflicts=conflicts,
            preferences=preferences,
            has_conflicts=bool(conflicts),
            has_preferences=bool(preferences),
        )

    def _edges(self, model, guest: Guest, occupant_ids: list):
        """Active edges between the guest and any occupant, paired with the occupant id"""
        edges = self.session.exec(
            select(model).where(
                model.client_id == guest.client_id,
                model.is_active == True,  # noqa: E712
                or_(
                    and_(model.guest_one_id == guest.id, model.guest_two_id.in_(occupant_ids)),
                    and_(model.guest_two_id == guest.id, model.guest_one_id.in_(occupant_ids)),
                ),
            )
        ).all()
        for edge in edges:
            other = edge.guest_two_id if edge.guest_one_id == guest.id else edge.guest_one_id
            yield edge, other
