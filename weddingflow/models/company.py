"""
Company and client models - Multi-tenancy foundation
"""

from sqlmodel import Field, SQLModel
from datetime import datetime, date
from typing import Optional
import uuid


class Company(SQLModel, table=True):
    """Planning company (tenant)"""

    __tablename__ = "companies"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True)
    slug: str = Field(unique=True, index=True, description="Unique company identifier")

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
    is_active: bool = Field(default=True, index=True)


class Client(SQLModel, table=True):
    """Wedding client managed by a company"""

    __tablename__ = "clients"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True, description="Owning company")

    partner1_name: str = Field(max_length=255)
    partner2_name: Optional[str] = Field(default=None, max_length=255)
    event_date: Optional[date] = None

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
