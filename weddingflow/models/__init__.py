from weddingflow.models.company import Company, Client
from weddingflow.models.guest import Guest
from weddingflow.models.floor_plan import FloorPlan
from weddingflow.models.floor_plan_table import FloorPlanTable, TableShape
from weddingflow.models.seat_assignment import SeatAssignment
from weddingflow.models.guest_relationship import (
    GuestConflict, GuestPreference, ConflictType, ConflictSeverity,
    PreferenceType, PreferenceStrength
)
from weddingflow.models.seating_version import SeatingVersion, TableSnapshot, AssignmentSnapshot
from weddingflow.models.seating_change_log import SeatingChangeLogEntry, ChangeAction
