"""
Shared test fixtures: a fresh in-memory database per test and a TestClient
whose get_db dependency is bound to it.
"""
import os

# Must be set before moodbuddy.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import moodbuddy.models  # noqa: F401
from moodbuddy.db.base import Base
from moodbuddy.db.session import get_db
from moodbuddy.main import app
from moodbuddy.services import mood_service, stats_service


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def set_today(monkeypatch):
    """Pin the server's calendar day for entry creation, windows and calendars."""
    def _set(day):
        monkeypatch.setattr(mood_service, "local_today", lambda: day)
        monkeypatch.setattr(stats_service, "local_today", lambda: day)
    return _set


@pytest.fixture
def register(client):
    """Register a user and return the response."""
    def _register(username="alice", email=None, password="secret123"):
        return client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
    return _register


@pytest.fixture
def headers_for(register):
    """Register a user and return bearer headers for them."""
    def _headers_for(username="alice", password="secret123"):
        response = register(username=username, password=password)
        assert response.status_code == 201, response.text
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}
    return _headers_for


@pytest.fixture
def auth_headers(headers_for):
    return headers_for()
