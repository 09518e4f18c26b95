"""
Floor plan lifecycle and tenant scoping
"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List
import uuid

from pydantic import BaseModel
from sqlalchemy import or_
from sqlmodel import Session, select
import structlog

from weddingflow.core.database import atomic
from weddingflow.core.exceptions import ForbiddenError, NotFoundError, SeatingValidationError
from weddingflow.models.company import Client
from weddingflow.models.floor_plan import FloorPlan
from weddingflow.models.floor_plan_table import FloorPlanTable
from weddingflow.models.guest import Guest
from weddingflow.models.guest_relationship import GuestConflict
from weddingflow.models.seat_assignment import SeatAssignment
from weddingflow.models.seating_change_log import SeatingChangeLogEntry
from weddingflow.models.seating_version import SeatingVersion
from weddingflow.schemas.floor_plan import FloorPlanCreate, FloorPlanUpdate

logger = structlog.get_logger(__name__)


def load_floor_plan(session: Session, floor_plan_id: uuid.UUID) -> FloorPlan:
    floor_plan = session.get(FloorPlan, floor_plan_id)
    if not floor_plan:
        raise NotFoundError("Floor plan", floor_plan_id)
    return floor_plan


def collect_changes(data: BaseModel, clearable: Iterable[str] = ()) -> dict:
    """
    Fields set on a partial update.

    Only fields listed in clearable may be sent as null; a null for any
    other column would violate its NOT NULL constraint.
    """
    changes = data.model_dump(exclude_unset=True)
    nulled = sorted(key for key, value in changes.items() if value is None and key not in clearable)
    if nulled:
        raise SeatingValidationError("Fields cannot be null", context={"fields": nulled})
    return changes


class FloorPlanService:
    """Create, read, update and delete floor plans; verify company ownership"""

    def __init__(self, session: Session):
        self.session = session

    def verify_access(self, floor_plan_id: uuid.UUID, company_id: uuid.UUID) -> FloorPlan:
        """
        Resolve a floor plan and check that its client belongs to the company.

        The seating services trust their caller for tenant scoping; the
        request layer calls this before invoking any of them.
        """
        floor_plan = load_floor_plan(self.session, floor_plan_id)
        self.verify_client(floor_plan.client_id, company_id)
        return floor_plan

    def verify_client(self, client_id: uuid.UUID, company_id: uuid.UUID) -> Client:
        client = self.session.exec(
            select(Client).where(Client.id == client_id, Client.company_id == company_id)
        ).first()
        if not client:
            raise ForbiddenError("Client not found")
        return client

    def list_for_client(self, client_id: uuid.UUID, company_id: uuid.UUID) -> List[FloorPlan]:
        self.verify_client(client_id, company_id)
        return list(self.session.exec(
            select(FloorPlan)
            .where(FloorPlan.client_id == client_id)
            .order_by(FloorPlan.created_at.desc())
        ).all())

    def create(self, company_id: uuid.UUID, data: FloorPlanCreate) -> FloorPlan:
        self.verify_client(data.client_id, company_id)

        with atomic(self.session, "create floor plan"):
            floor_plan = FloorPlan(company_id=company_id, **data.model_dump())
            self.session.add(floor_plan)
        self.session.refresh(floor_plan)

        logger.info("floor_plan_created", floor_plan_id=str(floor_plan.id), client_id=str(data.client_id))
        return floor_plan

    def update(self, floor_plan_id: uuid.UUID, data: FloorPlanUpdate) -> FloorPlan:
        floor_plan = load_floor_plan(self.session, floor_plan_id)
        changes = collect_changes(data, clearable=("venue_name", "background_image_url", "notes"))

        with atomic(self.session, "update floor plan"):
            for key, value in changes.items():
                setattr(floor_plan, key, value)
            floor_plan.updated_at = datetime.utcnow()
            self.session.add(floor_plan)
        self.session.refresh(floor_plan)

        logger.info("floor_plan_updated", floor_plan_id=str(floor_plan_id), fields=sorted(changes))
        return floor_plan

    def delete(self, floor_plan_id: uuid.UUID) -> None:
        """Delete the plan with its change log, versions, assignments and tables"""
        floor_plan = load_floor_plan(self.session, floor_plan_id)

        with atomic(self.session, "delete floor plan"):
            for model in (SeatingChangeLogEntry, SeatingVersion, SeatAssignment):
                rows = self.session.exec(select(model).where(model.floor_plan_id == floor_plan_id)).all()
                for row in rows:
                    self.session.delete(row)
            self.session.flush()
            for table in self.session.exec(
                select(FloorPlanTable).where(FloorPlanTable.floor_plan_id == floor_plan_id)
            ).all():
                self.session.delete(table)
            self.session.flush()
            self.session.delete(floor_plan)

        logger.info("floor_plan_deleted", floor_plan_id=str(floor_plan_id))

    def get_detail(self, floor_plan_id: uuid.UUID) -> dict:
        """Floor plan with tables, named assignments and conflicting pairs per table"""
        floor_plan = load_floor_plan(self.session, floor_plan_id)
        tables = self.session.exec(
            select(FloorPlanTable)
            .where(FloorPlanTable.floor_plan_id == floor_plan_id)
            .order_by(FloorPlanTable.table_number)
        ).all()
        rows = self.session.exec(
            select(SeatAssignment, Guest)
            .join(Guest, Guest.id == SeatAssignment.guest_id, isouter=True)
            .where(SeatAssignment.floor_plan_id == floor_plan_id)
        ).all()

        assignments = []
        for assignment, guest in rows:
            item = assignment.model_dump()
            item["guest_name"] = guest.full_name if guest else None
            assignments.append(item)

        table_conflicts = self._table_conflicts(floor_plan.client_id, [a for a, _ in rows])

        detail = floor_plan.model_dump()
        detail.update({
            "tables": [t.model_dump() for t in tables],
            "assignments": assignments,
            "table_conflicts": table_conflicts,
        })
        return detail

    def unassigned_guests(self, floor_plan_id: uuid.UUID) -> List[Guest]:
        floor_plan = load_floor_plan(self.session, floor_plan_id)
        assigned = select(SeatAssignment.guest_id).where(SeatAssignment.floor_plan_id == floor_plan_id)
        return list(self.session.exec(
            select(Guest)
            .where(Guest.client_id == floor_plan.client_id, Guest.id.not_in(assigned))
            .order_by(Guest.last_name, Guest.first_name)
        ).all())

    def _table_conflicts(self, client_id: uuid.UUID, assignments: List[SeatAssignment]) -> Dict[str, List[str]]:
        if not assignments:
            return {}
        table_of = {a.guest_id: a.table_id for a in assignments}
        guest_ids = list(table_of)
        edges = self.session.exec(
            select(GuestConflict).where(
                GuestConflict.client_id == client_id,
                GuestConflict.is_active == True,  # noqa: E712
                or_(GuestConflict.guest_one_id.in_(guest_ids), GuestConflict.guest_two_id.in_(guest_ids)),
            )
        ).all()

        conflicts: Dict[str, List[str]] = defaultdict(list)
        for edge in edges:
            table_id = table_of.get(edge.guest_one_id)
            if table_id is None or table_of.get(edge.guest_two_id) != table_id:
                continue
            pair = "-".join(sorted([str(edge.guest_one_id), str(edge.guest_two_id)]))
            if pair not in conflicts[str(table_id)]:
                conflicts[str(table_id)].append(pair)
        return {table_id: sorted(pairs) for table_id, pairs in conflicts.items()}
