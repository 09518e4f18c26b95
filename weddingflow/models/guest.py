"""
Guest roster model
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
import uuid


class Guest(SQLModel, table=True):
    """Guest on a client's roster. Owned by the guest list feature, read by seating."""

    __tablename__ = "guests"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    client_id: uuid.UUID = Field(foreign_key="clients.id", index=True, description="Client whose roster this guest is on")

    first_name: str = Field(max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    dietary_restrictions: Optional[str] = Field(default=None, max_length=500)
    has_plus_one: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
