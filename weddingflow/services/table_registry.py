"""
Table registry: table geometry and capacity within a floor plan
"""

from datetime import datetime
from typing import List
import uuid

from sqlalchemy import func
from sqlmodel import Session, select
import structlog

from weddingflow.core.config import get_settings
from weddingflow.core.database import atomic
from weddingflow.core.exceptions import (
    CapacityExceededError, NotFoundError, SeatingValidationError, TableOccupiedError
)
from weddingflow.models.floor_plan_table import FloorPlanTable
from weddingflow.models.seat_assignment import SeatAssignment
from weddingflow.models.seating_change_log import ChangeAction
from weddingflow.schemas.floor_plan import TableCreate, TableUpdate
from weddingflow.services.change_log import ChangeLog
from weddingflow.services.floor_plan_service import collect_changes, load_floor_plan

logger = structlog.get_logger(__name__)
settings = get_settings()


def table_state(table: FloorPlanTable) -> dict:
    return {
        "table_number": table.table_number,
        "table_name": table.table_name,
        "shape": table.shape,
        "x": table.x,
        "y": table.y,
        "width": table.width,
        "height": table.height,
        "rotation": table.rotation,
        "capacity": table.capacity,
    }


def count_occupants(session: Session, table_id: uuid.UUID) -> int:
    return session.exec(
        select(func.count(SeatAssignment.id)).where(SeatAssignment.table_id == table_id)
    ).one()


class TableRegistry:
    """Add, update, delete and list tables on a floor plan"""

    def __init__(self, session: Session):
        self.session = session

    def get_table(self, table_id: uuid.UUID, floor_plan_id: uuid.UUID = None) -> FloorPlanTable:
        table = self.session.get(FloorPlanTable, table_id)
        if not table or (floor_plan_id is not None and table.floor_plan_id != floor_plan_id):
            raise NotFoundError("Table", table_id)
        return table

    def list_tables(self, floor_plan_id: uuid.UUID) -> List[FloorPlanTable]:
        return list(self.session.exec(
            select(FloorPlanTable)
            .where(FloorPlanTable.floor_plan_id == floor_plan_id)
            .order_by(FloorPlanTable.table_number)
        ).all())

    def add_table(self, floor_plan_id: uuid.UUID, data: TableCreate, changed_by: uuid.UUID = None) -> FloorPlanTable:
        """Place a new table on the floor plan"""
        floor_plan = load_floor_plan(self.session, floor_plan_id)
        self._check_capacity_bounds(data.capacity, data.min_capacity)

        with atomic(self.session, "add table"):
            table = FloorPlanTable(floor_plan_id=floor_plan_id, **data.model_dump())
            self.session.add(table)
        self.session.refresh(table)

        logger.info("table_added", floor_plan_id=str(floor_plan_id), table_id=str(table.id), capacity=table.capacity)
        _ = ChangeLog(self.session, floor_plan.company_id).log(
            floor_plan_id,
            ChangeAction.ADD_TABLE,
            table_id=table.id,
            new_state=table_state(table),
            changed_by=changed_by,
        )
        return table

    def update_table(
        self,
        table_id: uuid.UUID,
        data: TableUpdate,
        changed_by: uuid.UUID = None,
        floor_plan_id: uuid.UUID = None,
    ) -> FloorPlanTable:
        """
        Apply a partial update.

        Lowering capacity below the number of guests already seated is
        rejected so the table never holds more guests than it allows.
        """
        table = self.get_table(table_id, floor_plan_id)
        changes = collect_changes(data, clearable=("table_name", "notes"))
        previous = table_state(table)

        capacity = changes.get("capacity", table.capacity)
        min_capacity = changes.get("min_capacity", table.min_capacity)
        self._check_capacity_bounds(capacity, min_capacity)

        with atomic(self.session, "update table"):
            if "capacity" in changes:
                occupants = count_occupants(self.session, table_id)
                if occupants > capacity:
                    raise CapacityExceededError(table.label, capacity, table_id=table.id)
            for key, value in changes.items():
                setattr(table, key, value)
            table.updated_at = datetime.utcnow()
            self.session.add(table)
        self.session.refresh(table)

        moved = any(field in changes for field in ("x", "y", "rotation"))
        action = ChangeAction.MOVE_TABLE if moved else ChangeAction.UPDATE_TABLE
        floor_plan = load_floor_plan(self.session, table.floor_plan_id)
        _ = ChangeLog(self.session, floor_plan.company_id).log(
            table.floor_plan_id,
            action,
            table_id=table.id,
            previous_state=previous,
            new_state=table_state(table),
            changed_by=changed_by,
        )
        logger.info("table_updated", table_id=str(table_id), fields=sorted(changes))
        return table

    def delete_table(self, table_id: uuid.UUID, changed_by: uuid.UUID = None, floor_plan_id: uuid.UUID = None) -> None:
        """Remove a table. Occupied tables must be emptied first."""
        table = self.get_table(table_id, floor_plan_id)
        floor_plan_id = table.floor_plan_id
        previous = table_state(table)

        with atomic(self.session, "delete table"):
            occupants = count_occupants(self.session, table_id)
            if occupants:
                raise TableOccupiedError(table.label, occupants)
            self.session.delete(table)

        floor_plan = load_floor_plan(self.session, floor_plan_id)
        _ = ChangeLog(self.session, floor_plan.company_id).log(
            floor_plan_id,
            ChangeAction.DELETE_TABLE,
            table_id=table_id,
            previous_state=previous,
            changed_by=changed_by,
        )
        logger.info("table_deleted", table_id=str(table_id))

    def _check_capacity_bounds(self, capacity: int, min_capacity: int) -> None:
        if capacity < 1:
            raise SeatingValidationError("Capacity must be at least 1")
        if capacity > settings.MAX_TABLE_CAPACITY:
            raise SeatingValidationError(
                f"Capacity cannot exceed {settings.MAX_TABLE_CAPACITY}",
                context={"capacity": capacity},
            )
        if min_capacity > capacity:
            raise SeatingValidationError(
                "Minimum capacity cannot exceed capacity",
                context={"capacity": capacity, "min_capacity": min_capacity},
            )
