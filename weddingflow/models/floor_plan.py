"""
Floor plan model for organizing tables
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime, date
from typing import Optional, TYPE_CHECKING
import uuid

if TYPE_CHECKING:
    from weddingflow.models.floor_plan_table import FloorPlanTable


class FloorPlan(SQLModel, table=True):
    """Seating layout (canvas + tables) for one client's event"""

    __tablename__ = "floor_plans"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    client_id: uuid.UUID = Field(foreign_key="clients.id", index=True, description="Client this floor plan belongs to")
    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True, description="Company ID for multi-tenant isolation")

    # Plan details
    name: str = Field(default="Floor Plan", max_length=100, nullable=False)
    venue_name: Optional[str] = Field(default=None, max_length=255)
    event_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=2000)

    # Canvas
    canvas_width: int = Field(default=1200, description="Canvas width in pixels")
    canvas_height: int = Field(default=800, description="Canvas height in pixels")
    background_image_url: Optional[str] = Field(default=None, max_length=1000)
    show_grid: bool = Field(default=False)
    grid_size: int = Field(default=50)

    # Saved viewport
    zoom_level: float = Field(default=1.0, description="Zoom factor between 0.1 and 5.0")
    pan_x: int = Field(default=0)
    pan_y: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    # Relationships
    tables: list["FloorPlanTable"] = Relationship(back_populates="floor_plan")
