"""
Version store: named snapshots of a floor plan and restoring from them
"""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
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
from weddingflow.models.seating_version import AssignmentSnapshot, SeatingVersion, TableSnapshot
from weddingflow.services.change_log import ChangeLog
from weddingflow.services.floor_plan_service import load_floor_plan

logger = structlog.get_logger(__name__)

RESTORED_TABLE_FIELDS = ("x", "y", "width", "height", "rotation")


@dataclass
class RestoreOutcome:
    restored_tables: int
    restored_assignments: int
    skipped_tables: int = 0
    skipped_assignments: int = 0


class VersionStore:
    """Save, list, restore and delete seating versions"""

    def __init__(self, session: Session):
        self.session = session

    def save(
        self,
        floor_plan_id: uuid.UUID,
        name: str,
        description: Optional[str] = None,
        is_auto_save: bool = False,
        created_by: Optional[uuid.UUID] = None,
    ) -> SeatingVersion:
        """
        Snapshot every table and assignment and make the snapshot current.

        Numbering starts at 1 and increases by one per floor plan. Exactly
        one version is current after commit.
        """
        floor_plan = load_floor_plan(self.session, floor_plan_id)

        with atomic(self.session, "save seating version"):
            tables = self.session.exec(
                select(FloorPlanTable)
                .where(FloorPlanTable.floor_plan_id == floor_plan_id)
                .order_by(FloorPlanTable.table_number)
            ).all()
            assignments = self.session.exec(
                select(SeatAssignment).where(SeatAssignment.floor_plan_id == floor_plan_id)
            ).all()
            total_guests = self.session.exec(
                select(func.count(Guest.id)).where(Guest.client_id == floor_plan.client_id)
            ).one()
            latest = self.session.exec(
                select(func.max(SeatingVersion.version_number)).where(SeatingVersion.floor_plan_id == floor_plan_id)
            ).one()

            self._clear_current(floor_plan_id)
            version = SeatingVersion(
                floor_plan_id=floor_plan_id,
                client_id=floor_plan.client_id,
                company_id=floor_plan.company_id,
                version_number=(latest or 0) + 1,
                name=name,
                description=description,
                table_positions=[
                    TableSnapshot.model_validate(t, from_attributes=True).model_dump(mode="json") for t in tables
                ],
                guest_assignments=[
                    AssignmentSnapshot.model_validate(a, from_attributes=True).model_dump(mode="json")
                    for a in assignments
                ],
                total_guests=total_guests,
                assigned_guests=len(assignments),
                total_tables=len(tables),
                is_current=True,
                is_auto_save=is_auto_save,
                created_by=created_by,
            )
            self.session.add(version)
        self.session.refresh(version)

        logger.info(
            "seating_version_saved",
            floor_plan_id=str(floor_plan_id),
            version_number=version.version_number,
            auto_save=is_auto_save,
        )
        return version

    def list_versions(self, floor_plan_id: uuid.UUID) -> List[SeatingVersion]:
        return list(self.session.exec(
            select(SeatingVersion)
            .where(SeatingVersion.floor_plan_id == floor_plan_id)
            .order_by(SeatingVersion.version_number.desc())
        ).all())

    def get_version(self, version_id: uuid.UUID, floor_plan_id: Optional[uuid.UUID] = None) -> SeatingVersion:
        version = self.session.get(SeatingVersion, version_id)
        if not version or (floor_plan_id is not None and version.floor_plan_id != floor_plan_id):
            raise NotFoundError("Version", version_id)
        return version

    def get_current(self, floor_plan_id: uuid.UUID) -> Optional[SeatingVersion]:
        return self.session.exec(
            select(SeatingVersion).where(
                SeatingVersion.floor_plan_id == floor_plan_id,
                SeatingVersion.is_current == True,  # noqa: E712
            )
        ).first()

    def restore(
        self,
        version_id: uuid.UUID,
        floor_plan_id: uuid.UUID,
        changed_by: Optional[uuid.UUID] = None,
    ) -> RestoreOutcome:
        """
        Replace the live layout and assignments with a snapshot.

        Tables deleted since the snapshot are skipped along with the
        assignments that pointed at them. Tables added since the snapshot
        keep their position and end up empty. Capacities are the current
        ones, so a snapshot that no longer fits is rejected as a whole.

        Raises:
            NotFoundError: the version does not belong to this floor plan
            CapacityExceededError: a table would hold more guests than it allows
        """
        floor_plan = load_floor_plan(self.session, floor_plan_id)
        version = self.get_version(version_id, floor_plan_id)
        table_snapshots = version.table_snapshots()
        assignment_snapshots = version.assignment_snapshots()

        with atomic(self.session, "restore seating version"):
            tables = {
                t.id: t for t in self.session.exec(
                    select(FloorPlanTable)
                    .where(FloorPlanTable.floor_plan_id == floor_plan_id)
                    .with_for_update()
                ).all()
            }

            for assignment in self.session.exec(
                select(SeatAssignment).where(SeatAssignment.floor_plan_id == floor_plan_id)
            ).all():
                self.session.delete(assignment)
            self.session.flush()

            restored_tables = 0
            for snapshot in table_snapshots:
                table = tables.get(snapshot.id)
                if table is None:
                    continue
                for key in RESTORED_TABLE_FIELDS:
                    setattr(table, key, getattr(snapshot, key))
                table.updated_at = datetime.utcnow()
                self.session.add(table)
                restored_tables += 1

            roster = set(self.session.exec(
                select(Guest.id).where(Guest.client_id == floor_plan.client_id)
            ).all())
            kept = [
                a for a in assignment_snapshots
                if a.table_id in tables and a.guest_id in roster
            ]

            counts = Counter(a.table_id for a in kept)
            for table_id, count in counts.items():
                table = tables[table_id]
                if count > table.capacity:
                    raise CapacityExceededError(table.label, table.capacity, table_id=table.id)

            self.session.add_all([
                SeatAssignment(
                    floor_plan_id=floor_plan_id,
                    table_id=a.table_id,
                    guest_id=a.guest_id,
                    seat_number=a.seat_number,
                )
                for a in kept
            ])

            self._clear_current(floor_plan_id)
            version.is_current = True
            self.session.add(version)

        outcome = RestoreOutcome(
            restored_tables=restored_tables,
            restored_assignments=len(kept),
            skipped_tables=len(table_snapshots) - restored_tables,
            skipped_assignments=len(assignment_snapshots) - len(kept),
        )
        _ = ChangeLog(self.session, floor_plan.company_id).log(
            floor_plan_id,
            ChangeAction.RESTORE_VERSION,
            new_state={
                "version_id": version_id,
                "version_number": version.version_number,
                "restored_tables": outcome.restored_tables,
                "restored_assignments": outcome.restored_assignments,
            },
            changed_by=changed_by,
        )
        if outcome.skipped_tables or outcome.skipped_assignments:
            logger.warning(
                "seating_version_partially_restored",
                version_id=str(version_id),
                skipped_tables=outcome.skipped_tables,
                skipped_assignments=outcome.skipped_assignments,
            )
        logger.info("seating_version_restored", floor_plan_id=str(floor_plan_id), version_number=version.version_number)
        return outcome

    def delete_version(self, version_id: uuid.UUID, floor_plan_id: Optional[uuid.UUID] = None) -> None:
        """Delete one version. No other version becomes current in its place."""
        version = self.get_version(version_id, floor_plan_id)
        with atomic(self.session, "delete seating version"):
            self.session.delete(version)
        logger.info("seating_version_deleted", version_id=str(version_id))

    def _clear_current(self, floor_plan_id: uuid.UUID) -> None:
        for current in self.session.exec(
            select(SeatingVersion).where(
                SeatingVersion.floor_plan_id == floor_plan_id,
                SeatingVersion.is_current == True,  # noqa: E712
            )
        ).all():
            current.is_current = False
            self.session.add(current)
        self.session.flush()
