"""
Test configuration for pytest
"""

import pytest
import os
import uuid
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session
from typing import Callable, Generator, List

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"

from fastapi.testclient import TestClient  # noqa: E402

from weddingflow.core.auth import create_access_token  # noqa: E402
from weddingflow.core.database import get_session  # noqa: E402
from weddingflow.main import app  # noqa: E402
from weddingflow.models import (  # noqa: E402
    Client, Company, FloorPlan, FloorPlanTable, Guest, SeatAssignment, TableShape
)


# Create test engine using in-memory SQLite for unit tests
test_engine = create_engine(
    "sqlite:///:memory:",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    # Create all tables
    SQLModel.metadata.create_all(test_engine)

    # Create session
    with Session(test_engine) as session:
        yield session

    # Cleanup
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def company(db: Session) -> Company:
    company = Company(name="Ever After Events", slug="ever-after")
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def other_company(db: Session) -> Company:
    company = Company(name="Rival Planning", slug="rival-planning")
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def wedding_client(db: Session, company: Company) -> Client:
    client = Client(
        company_id=company.id,
        partner1_name="Alex Rivera",
        partner2_name="Sam Chen",
        event_date=date(2026, 6, 20),
    )
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


@pytest.fixture
def guests(db: Session, wedding_client: Client) -> List[Guest]:
    names = [
        ("Ana", "Lopez"), ("Ben", "Okafor"), ("Cara", "Singh"),
        ("Dan", "Meyer"), ("Eve", "Novak"), ("Finn", "Walsh"),
    ]
    roster = [Guest(client_id=wedding_client.id, first_name=first, last_name=last) for first, last in names]
    db.add_all(roster)
    db.commit()
    for guest in roster:
        db.refresh(guest)
    return roster


@pytest.fixture
def floor_plan(db: Session, company: Company, wedding_client: Client) -> FloorPlan:
    plan = FloorPlan(
        client_id=wedding_client.id,
        company_id=company.id,
        name="Reception",
        venue_name="Harbor Hall",
    )
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan


@pytest.fixture
def make_table(db: Session, floor_plan: FloorPlan) -> Callable[..., FloorPlanTable]:
    """Factory placing a table directly on the floor plan"""
    def _make(table_number: int = 1, capacity: int = 8, **fields) -> FloorPlanTable:
        table = FloorPlanTable(
            floor_plan_id=floor_plan.id,
            table_number=table_number,
            shape=fields.pop("shape", TableShape.ROUND),
            x=fields.pop("x", 100 * table_number),
            y=fields.pop("y", 100),
            capacity=capacity,
            **fields,
        )
        db.add(table)
        db.commit()
        db.refresh(table)
        return table
    return _make


@pytest.fixture
def seat(db: Session, floor_plan: FloorPlan) -> Callable[[Guest, FloorPlanTable], SeatAssignment]:
    """Factory writing an assignment row without going through the store"""
    def _seat(guest: Guest, table: FloorPlanTable) -> SeatAssignment:
        assignment = SeatAssignment(floor_plan_id=floor_plan.id, table_id=table.id, guest_id=guest.id)
        db.add(assignment)
        db.commit()
        db.refresh(assignment)
        return assignment
    return _seat


@pytest.fixture
def api(db: Session) -> Generator[TestClient, None, None]:
    """HTTP client bound to the test session"""
    app.dependency_overrides[get_session] = lambda: db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(company: Company) -> Callable[..., dict]:
    """Bearer headers for a user of the given role and company"""
    def _headers(role: str = "admin", company_id: uuid.UUID = None) -> dict:
        token = create_access_token(
            user_id=uuid.uuid4(),
            company_id=company_id or company.id,
            role=role,
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers
