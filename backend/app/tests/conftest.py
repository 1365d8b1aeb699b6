"""
Shared test fixtures: an in-memory database and identity tokens.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app import models  # noqa: F401
from app.main import app
from app.core.config import settings
from app.core.security import create_identity_token
from app.db.base import Base
from app.db.session import get_db
from app.services import summary_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def database(monkeypatch):
    """Fresh tables for every test, shared by the app and background tasks."""
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(summary_service, "SessionLocal", TestingSessionLocal)
    monkeypatch.setattr(settings, "COHERE_API_KEY", "")
    monkeypatch.setattr(settings, "HUGGINGFACE_API_KEY", "")
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_headers(clerk_id: str, name: str = "", email: str = "") -> dict:
    return {"Authorization": f"Bearer {create_identity_token(clerk_id, name, email)}"}


@pytest.fixture
def alice_headers():
    return make_headers("user_alice", "Alice", "alice@example.com")


@pytest.fixture
def bob_headers():
    return make_headers("user_bob", "Bob", "bob@example.com")


@pytest.fixture
def trip(client, alice_headers):
    """A five-day trip owned by Alice."""
    response = client.post(
        "/api/trips",
        json={
            "name": "Spring in France",
            "start_date": "2024-04-01",
            "end_date": "2024-04-05",
            "description": "Food and museums",
            "keywords": "food"
        },
        headers=alice_headers
    )
    assert response.status_code == 201
    return response.json()
