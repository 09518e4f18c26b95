"""
Schemas for API responses and requests
"""

from weddingflow.schemas.floor_plan import (
    FloorPlanCreate, FloorPlanUpdate, FloorPlanRead, FloorPlanDetail,
    TableCreate, TableUpdate, TableRead, AssignmentRead, GuestRead,
)
from weddingflow.schemas.seating import (
    AssignGuestRequest, AssignGuestResponse, SeatmateRef, ConflictCheck,
    BatchAssignItem, BatchAssignRequest, BatchAssignResponse,
    ConflictCreate, ConflictRead, PreferenceCreate, PreferenceRead,
    VersionCreate, VersionRead, RestoreResponse,
    ChangeLogCreate, ChangeLogRead,
)

__all__ = [
    "FloorPlanCreate",
    "FloorPlanUpdate",
    "FloorPlanRead",
    "FloorPlanDetail",
    "TableCreate",
    "TableUpdate",
    "TableRead",
    "AssignmentRead",
    "GuestRead",
    "AssignGuestRequest",
    "AssignGuestResponse",
    "SeatmateRef",
    "ConflictCheck",
    "BatchAssignItem",
    "BatchAssignRequest",
    "BatchAssignResponse",
    "ConflictCreate",
    "ConflictRead",
    "PreferenceCreate",
    "PreferenceRead",
    "VersionCreate",
    "VersionRead",
    "RestoreResponse",
    "ChangeLogCreate",
    "ChangeLogRead",
]
