"""Pytest configuration and fixtures."""

import os
import tempfile

# Must be set before the app modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "food-console-test-logs"))

import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models import MenuItem
from utils.auth_utils import create_access_token

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict:
    """Bearer header for a signed-in operator."""
    token = create_access_token({"sub": "cashier"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def menu(db_session: Session) -> dict:
    """A small menu keyed by item name."""
    items = [
        MenuItem(name="Biryani", price=500),
        MenuItem(name="Karahi", price=1000),
        MenuItem(name="Naan", price=25),
    ]
    db_session.add_all(items)
    db_session.commit()
    return {item.name: item.id for item in items}


@pytest.fixture
def create_order(client: TestClient, auth_headers: dict):
    """Post an order and return the decoded response body."""
    def _create(items, advance_payment=0, customer=None, **extra):
        payload = {
            "new_customer": customer or {"name": "Ayesha Khan", "phone": "03001234567", "address": "House 12, Gulberg"},
            "advance_payment": advance_payment,
            "items": items,
            **extra,
        }
        if "customer_id" in extra:
            payload.pop("new_customer")
        response = client.post("/orders/", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create
