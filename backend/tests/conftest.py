# backend/tests/conftest.py
"""
Pytest configuration for the booking slot engine.

Tests run against an in-memory SQLite database unless TEST_DATABASE_URL points
somewhere else. The schema is created and dropped around every test.
"""

import os

# CRITICAL: Set testing mode BEFORE any slotbook imports!
os.environ["is_testing"] = "true"

from slotbook.core.config import settings

settings.is_testing = True

from datetime import datetime

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.orm import Session

from slotbook.api.dependencies.database import get_db
from slotbook.api.dependencies.services import get_clock
from slotbook.database import Base, SessionLocal, engine
from slotbook.main import app
import slotbook.models  # noqa: F401  registers tables on Base.metadata
from tests.helpers.clock import FrozenClock
from tests.helpers.factories import create_business

# Monday 2 March 2026, mid-morning
DEFAULT_NOW = datetime(2026, 3, 2, 10, 0, 0)


def _validate_test_database_url(database_url: str) -> None:
    """Refuse to run destructive fixtures against anything that is not a test store."""
    if database_url.startswith("sqlite"):
        return
    if "test" not in database_url.lower():
        raise RuntimeError(
            "TEST_DATABASE_URL must point at a test database; "
            "tables are dropped after every test"
        )


@pytest.fixture(scope="function")
def db():
    """
    Create a new database session for each test.

    The schema is rebuilt per test so no rows leak between tests.
    """
    _validate_test_database_url(settings.get_database_url())
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def frozen_clock() -> FrozenClock:
    """A clock pinned to DEFAULT_NOW; tests move it explicitly."""
    return FrozenClock(DEFAULT_NOW)


@pytest.fixture
def business(db: Session):
    """A business that allows same-day pickup with no cutoff."""
    return create_business(db)


@pytest.fixture
def client(db: Session, frozen_clock: FrozenClock):
    """Create a test client with the test database and a pinned clock."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: frozen_clock

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()
