"""
Seating version model: numbered snapshot of a floor plan's layout and assignments
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON, UniqueConstraint
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from weddingflow.models.floor_plan_table import TableShape


class TableSnapshot(SQLModel):
    """Geometry and capacity of one table at snapshot time"""
    id: uuid.UUID
    table_number: int
    table_name: Optional[str] = None
    shape: TableShape
    x: int
    y: int
    width: int
    height: int
    rotation: float = 0
    capacity: int
    min_capacity: int = 1
    fill_color: str = "#3B82F6"
    is_vip: bool = False


class AssignmentSnapshot(SQLModel):
    """One guest-to-table mapping at snapshot time"""
    guest_id: uuid.UUID
    table_id: uuid.UUID
    seat_number: Optional[int] = None


class SeatingVersion(SQLModel, table=True):
    """Immutable named snapshot; only is_current ever changes after insert"""

    __tablename__ = "seating_versions"
    __table_args__ = (
        UniqueConstraint("floor_plan_id", "version_number", name="unique_version_number_per_floor_plan"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    floor_plan_id: uuid.UUID = Field(foreign_key="floor_plans.id", index=True)
    client_id: uuid.UUID = Field(foreign_key="clients.id", index=True)
    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True)

    version_number: int = Field(description="1, 2, 3, ... per floor plan")
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)

    # Snapshot payloads (serialized TableSnapshot / AssignmentSnapshot)
    table_positions: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False)
    )
    guest_assignments: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False)
    )

    # Counts at snapshot time
    total_guests: int = Field(default=0)
    assigned_guests: int = Field(default=0)
    total_tables: int = Field(default=0)

    is_current: bool = Field(default=False, index=True)
    is_auto_save: bool = Field(default=False)

    created_by: Optional[uuid.UUID] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def table_snapshots(self) -> List[TableSnapshot]:
        return [TableSnapshot.model_validate(item) for item in self.table_positions or []]

    def assignment_snapshots(self) -> List[AssignmentSnapshot]:
        return [AssignmentSnapshot.model_validate(item) for item in self.guest_assignments or []]
