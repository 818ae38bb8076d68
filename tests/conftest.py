"""
Shared test fixtures: SQLite test database, test client, fresh project store.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SEED_ON_EMPTY"] = "false"

from constructtrack.database import Base, get_db
from constructtrack.main import app
from constructtrack.models import UnitType, WorkCategory, WorkStatus
from constructtrack.state import get_store
from constructtrack.store import ProjectStore
from constructtrack.schemas import Area, Project, SubWork, WorkItem


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store():
    """Empty ProjectStore wired into the API for this test only."""
    fresh = ProjectStore()
    app.dependency_overrides[get_store] = lambda: fresh
    yield fresh
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def client(store):
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def projects():
    """Two projects; the first has a lobby with two items and an empty office area."""
    marble = WorkItem(
        id="item-1", name="Marble Flooring", category=WorkCategory.INTERIOR,
        sub_works=[
            SubWork(id="sw-1", name="Grinding", is_completed=True),
            SubWork(id="sw-2", name="Polishing"),
        ],
        length=100, width=50, units=1, unit_type=UnitType.SQFT, quantity=5000,
        status=WorkStatus.IN_PROGRESS,
    )
    wiring = WorkItem(
        id="item-2", name="Electrical Wiring", category=WorkCategory.ELECTRICAL,
        length=500, unit_type=UnitType.RUNNING_METER, quantity=500,
        status=WorkStatus.COMPLETED,
    )
    lobby = Area(id="area-1", name="Lobby", work_items=[marble, wiring])
    office = Area(id="area-2", name="Office", work_items=[])
    downtown = Project(id="proj-1", name="Downtown Highrise", areas=[lobby, office])
    villa = Project(
        id="proj-2", name="Lakeside Villa",
        areas=[Area(id="area-3", name="Kitchen", work_items=[
            WorkItem(id="item-3", name="Cabinets", unit_type=UnitType.PIECES,
                     units=6, unit_multiplier=2, quantity=12),
        ])],
    )
    return [downtown, villa]
