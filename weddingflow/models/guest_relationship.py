"""
Pairwise guest relationship models (conflicts and preferences)

Both edge types store an undirected pair with guest_one_id < guest_two_id and
are soft-deleted through is_active.
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid


class ConflictType(str, Enum):
    """Why two guests should not sit together"""
    GENERAL = "general"
    FAMILY_DRAMA = "family_drama"
    EX_PARTNER = "ex_partner"
    BUSINESS_DISPUTE = "business_dispute"
    PERSONAL = "personal"


class ConflictSeverity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class PreferenceType(str, Enum):
    """How close two guests want to be seated"""
    TOGETHER = "together"
    NEARBY = "nearby"
    SAME_AREA = "same_area"


class PreferenceStrength(str, Enum):
    REQUIRED = "required"
    PREFERRED = "preferred"
    NICE_TO_HAVE = "nice_to_have"


class GuestConflict(SQLModel, table=True):
    """'Must not be seated together' edge"""

    __tablename__ = "guest_conflicts"
    __table_args__ = (
        UniqueConstraint("client_id", "guest_one_id", "guest_two_id", name="unique_guest_conflict_pair"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True)
    client_id: uuid.UUID = Field(foreign_key="clients.id", index=True)
    guest_one_id: uuid.UUID = Field(foreign_key="guests.id", index=True)
    guest_two_id: uuid.UUID = Field(foreign_key="guests.id", index=True)

    conflict_type: ConflictType = Field(default=ConflictType.GENERAL)
    severity: ConflictSeverity = Field(default=ConflictSeverity.MODERATE)
    reason: Optional[str] = Field(default=None, max_length=1000)

    is_active: bool = Field(default=True, index=True)
    created_by: Optional[uuid.UUID] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None


class GuestPreference(SQLModel, table=True):
    """'Should be seated together' edge"""

    __tablename__ = "guest_preferences"
    __table_args__ = (
        UniqueConstraint("client_id", "guest_one_id", "guest_two_id", name="unique_guest_preference_pair"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True)
    client_id: uuid.UUID = Field(foreign_key="clients.id", index=True)
    guest_one_id: uuid.UUID = Field(foreign_key="guests.id", index=True)
    guest_two_id: uuid.UUID = Field(foreign_key="guests.id", index=True)

    preference_type: PreferenceType = Field(default=PreferenceType.TOGETHER)
    strength: PreferenceStrength = Field(default=PreferenceStrength.PREFERRED)
    reason: Optional[str] = Field(default=None, max_length=1000)

    is_active: bool = Field(default=True, index=True)
    created_by: Optional[uuid.UUID] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
