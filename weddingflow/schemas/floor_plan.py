"""
Pydantic schemas for floor plans and tables
"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime, date
import uuid

from weddingflow.models.floor_plan_table import TableShape

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class FloorPlanCreate(BaseModel):
    """Floor plan creation schema"""
    client_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=100)
    venue_name: Optional[str] = Field(default=None, max_length=255)
    event_date: Optional[date] = None
    canvas_width: int = Field(default=1200, ge=800, le=2400)
    canvas_height: int = Field(default=800, ge=600, le=1600)


class FloorPlanUpdate(BaseModel):
    """Floor plan settings update; omitted fields are left unchanged"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    venue_name: Optional[str] = Field(default=None, max_length=255)
    background_image_url: Optional[str] = Field(default=None, max_length=1000)
    canvas_width: Optional[int] = Field(default=None, ge=400, le=5000)
    canvas_height: Optional[int] = Field(default=None, ge=300, le=4000)
    show_grid: Optional[bool] = None
    grid_size: Optional[int] = Field(default=None, ge=10, le=100)
    zoom_level: Optional[float] = Field(default=None, ge=0.1, le=5.0)
    pan_x: Optional[int] = None
    pan_y: Optional[int] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class FloorPlanRead(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    company_id: uuid.UUID
    name: str
    venue_name: Optional[str] = None
    event_date: Optional[date] = None
    notes: Optional[str] = None
    canvas_width: int
    canvas_height: int
    background_image_url: Optional[str] = None
    show_grid: bool
    grid_size: int
    zoom_level: float
    pan_x: int
    pan_y: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TableCreate(BaseModel):
    """Table placement schema"""
    table_number: int = Field(default=1, ge=1)
    table_name: Optional[str] = Field(default=None, max_length=100)
    shape: TableShape
    x: int
    y: int
    width: int = Field(default=100, ge=1)
    height: int = Field(default=100, ge=1)
    rotation: float = Field(default=0, ge=-180, le=180)
    capacity: int = Field(default=8, ge=1)
    min_capacity: int = Field(default=1, ge=1)
    fill_color: str = Field(default="#3B82F6", pattern=HEX_COLOR)
    stroke_color: str = Field(default="#1E40AF", pattern=HEX_COLOR)
    is_vip: bool = False
    notes: Optional[str] = Field(default=None, max_length=500)


class TableUpdate(BaseModel):
    """Partial table update (drag, resize, rotate, restyle)"""
    table_number: Optional[int] = Field(default=None, ge=1)
    table_name: Optional[str] = Field(default=None, max_length=100)
    shape: Optional[TableShape] = None
    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = Field(default=None, ge=1)
    height: Optional[int] = Field(default=None, ge=1)
    rotation: Optional[float] = Field(default=None, ge=-180, le=180)
    capacity: Optional[int] = Field(default=None, ge=1)
    min_capacity: Optional[int] = Field(default=None, ge=1)
    fill_color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    stroke_color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    is_vip: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class TableRead(BaseModel):
    id: uuid.UUID
    floor_plan_id: uuid.UUID
    table_number: int
    table_name: Optional[str] = None
    shape: TableShape
    x: int
    y: int
    width: int
    height: int
    rotation: float
    capacity: int
    min_capacity: int
    fill_color: str
    stroke_color: str
    is_vip: bool
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class AssignmentRead(BaseModel):
    id: uuid.UUID
    floor_plan_id: uuid.UUID
    table_id: uuid.UUID
    guest_id: uuid.UUID
    seat_number: Optional[int] = None
    assigned_at: datetime
    guest_name: Optional[str] = None

    class Config:
        from_attributes = True


class FloorPlanDetail(FloorPlanRead):
    """Floor plan with its tables, assignments and per-table conflict pairs"""
    tables: List[TableRead] = []
    assignments: List[AssignmentRead] = []
    table_conflicts: Dict[str, List[str]] = {}


class GuestRead(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    first_name: str
    last_name: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    has_plus_one: bool

    class Config:
        from_attributes = True
