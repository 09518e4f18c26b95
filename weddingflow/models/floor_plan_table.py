"""
Table model for floor plan seating
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from enum import Enum
import uuid

if TYPE_CHECKING:
    from weddingflow.models.floor_plan import FloorPlan


class TableShape(str, Enum):
    """Shape of a table on the canvas"""
    ROUND = "round"
    RECTANGLE = "rectangle"
    SQUARE = "square"


class FloorPlanTable(SQLModel, table=True):
    """Table placed on a floor plan"""

    __tablename__ = "floor_plan_tables"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    floor_plan_id: uuid.UUID = Field(foreign_key="floor_plans.id", index=True, description="Floor plan this table is on")

    # Table details
    table_number: int = Field(default=1, description="Number shown on the table card")
    table_name: Optional[str] = Field(default=None, max_length=100, description="Optional custom name (e.g., 'Head Table')")
    shape: TableShape = Field(default=TableShape.ROUND)

    # Position and size (pixels)
    x: int = Field(default=0)
    y: int = Field(default=0)
    width: int = Field(default=100)
    height: int = Field(default=100)
    rotation: float = Field(default=0, description="Rotation in degrees, -180 to 180")

    # Capacity
    capacity: int = Field(default=8, description="Maximum number of guests")
    min_capacity: int = Field(default=1, description="Preferred minimum number of guests")

    # Styling
    fill_color: str = Field(default="#3B82F6", max_length=7)
    stroke_color: str = Field(default="#1E40AF", max_length=7)
    is_vip: bool = Field(default=False)
    notes: Optional[str] = Field(default=None, max_length=500)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    # Relationships
    floor_plan: Optional["FloorPlan"] = Relationship(back_populates="tables")

    @property
    def label(self) -> str:
        return self.table_name or str(self.table_number)
