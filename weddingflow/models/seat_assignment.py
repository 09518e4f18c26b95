"""
Seat assignment model: a guest's place at a table within a floor plan
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from datetime import datetime
from typing import Optional
import uuid


class SeatAssignment(SQLModel, table=True):
    """Guest placed at a table. At most one row per guest per floor plan."""

    __tablename__ = "floor_plan_guests"
    __table_args__ = (
        UniqueConstraint("floor_plan_id", "guest_id", name="unique_guest_per_floor_plan"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    floor_plan_id: uuid.UUID = Field(foreign_key="floor_plans.id", index=True)
    table_id: uuid.UUID = Field(foreign_key="floor_plan_tables.id", index=True)
    guest_id: uuid.UUID = Field(foreign_key="guests.id", index=True)

    seat_number: Optional[int] = Field(default=None, description="Seat at the table, 1-based")

    assigned_at: datetime = Field(default_factory=datetime.utcnow)
