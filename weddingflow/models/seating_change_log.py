"""
Seating change log model (append-only audit trail)
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from datetime import datetime
from typing import Any, Optional
from enum import Enum
import uuid


class ChangeAction(str, Enum):
    """Kind of assignment-affecting change"""
    ASSIGN = "assign"
    UNASSIGN = "unassign"
    BATCH_ASSIGN = "batch_assign"
    ADD_TABLE = "add_table"
    MOVE_TABLE = "move_table"
    UPDATE_TABLE = "update_table"
    DELETE_TABLE = "delete_table"
    RESTORE_VERSION = "restore_version"


class SeatingChangeLogEntry(SQLModel, table=True):
    """One audit row. Never updated; removed only with its floor plan."""

    __tablename__ = "seating_change_log"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    floor_plan_id: uuid.UUID = Field(foreign_key="floor_plans.id", index=True)
    company_id: Optional[uuid.UUID] = Field(default=None, foreign_key="companies.id", index=True)

    action: ChangeAction = Field(index=True)
    guest_id: Optional[uuid.UUID] = None
    table_id: Optional[uuid.UUID] = None

    previous_state: Optional[Any] = Field(default=None, sa_column=Column(JSON, nullable=True))
    new_state: Optional[Any] = Field(default=None, sa_column=Column(JSON, nullable=True))

    changed_by: Optional[uuid.UUID] = None
    changed_at: datetime = Field(default_factory=datetime.utcnow, index=True)
