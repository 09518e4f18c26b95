"""
Pydantic schemas for assignments, relationships, versions and the change log
"""

from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime
import uuid

from weddingflow.models.guest_relationship import (
    ConflictType, ConflictSeverity, PreferenceType, PreferenceStrength
)
from weddingflow.models.seating_change_log import ChangeAction
from weddingflow.schemas.floor_plan import AssignmentRead


# ============================================================================
# Assignments
# ============================================================================

class AssignGuestRequest(BaseModel):
    table_id: uuid.UUID
    guest_id: uuid.UUID
    seat_number: Optional[int] = Field(default=None, ge=1)
    force: bool = Field(default=False, description="Skip the advisory conflict check")


class SeatmateRef(BaseModel):
    """A guest already at the table who conflicts with / is preferred by the candidate"""
    guest_id: uuid.UUID
    name: str
    severity: Optional[ConflictSeverity] = None
    strength: Optional[PreferenceStrength] = None


class ConflictCheck(BaseModel):
    conflicts: List[SeatmateRef] = []
    preferences: List[SeatmateRef] = []
    has_conflicts: bool = False
    has_preferences: bool = False


class AssignGuestResponse(BaseModel):
    assignment: AssignmentRead
    conflicts: List[SeatmateRef] = []
    replaced: bool = False


class BatchAssignItem(BaseModel):
    table_id: uuid.UUID
    guest_id: uuid.UUID
    seat_number: Optional[int] = Field(default=None, ge=1)


class BatchAssignRequest(BaseModel):
    assignments: List[BatchAssignItem]


class BatchAssignResponse(BaseModel):
    success: bool = True
    assigned: int
    replaced: int = 0


# ============================================================================
# Relationships
# ============================================================================

class ConflictCreate(BaseModel):
    client_id: uuid.UUID
    guest_one_id: uuid.UUID
    guest_two_id: uuid.UUID
    conflict_type: ConflictType = ConflictType.GENERAL
    severity: ConflictSeverity = ConflictSeverity.MODERATE
    reason: Optional[str] = Field(default=None, max_length=1000)


class ConflictRead(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    guest_one_id: uuid.UUID
    guest_two_id: uuid.UUID
    conflict_type: ConflictType
    severity: ConflictSeverity
    reason: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PreferenceCreate(BaseModel):
    client_id: uuid.UUID
    guest_one_id: uuid.UUID
    guest_two_id: uuid.UUID
    preference_type: PreferenceType = PreferenceType.TOGETHER
    strength: PreferenceStrength = PreferenceStrength.PREFERRED
    reason: Optional[str] = Field(default=None, max_length=1000)


class PreferenceRead(BaseModel):
    id: uuid.UUID
    client_id: uuid.UUID
    guest_one_id: uuid.UUID
    guest_two_id: uuid.UUID
    preference_type: PreferenceType
    strength: PreferenceStrength
    reason: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============================================================================
# Versions
# ============================================================================

class VersionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_auto_save: bool = False


class VersionRead(BaseModel):
    id: uuid.UUID
    floor_plan_id: uuid.UUID
    version_number: int
    name: str
    description: Optional[str] = None
    table_positions: List[Any] = []
    guest_assignments: List[Any] = []
    total_guests: int
    assigned_guests: int
    total_tables: int
    is_current: bool
    is_auto_save: bool
    created_by: Optional[uuid.UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RestoreResponse(BaseModel):
    success: bool = True
    restored_tables: int
    restored_assignments: int
    skipped_tables: int = 0
    skipped_assignments: int = 0


# ============================================================================
# Change log
# ============================================================================

class ChangeLogCreate(BaseModel):
    action: ChangeAction
    guest_id: Optional[uuid.UUID] = None
    table_id: Optional[uuid.UUID] = None
    previous_state: Optional[Any] = None
    new_state: Optional[Any] = None


class ChangeLogRead(BaseModel):
    id: uuid.UUID
    floor_plan_id: uuid.UUID
    action: ChangeAction
    guest_id: Optional[uuid.UUID] = None
    table_id: Optional[uuid.UUID] = None
    previous_state: Optional[Any] = None
    new_state: Optional[Any] = None
    changed_by: Optional[uuid.UUID] = None
    changed_at: datetime

    class Config:
        from_attributes = True
