"""Shared fixtures for the washroom API tests."""

import os

# Configure before the application modules read the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CRON_SECRET"] = "test-cron-secret"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.pop("RESEND_API_KEY", None)

from typing import Any

import pytest
from fastapi.testclient import TestClient

from washroom_api.database import Base, engine, get_db, SessionLocal
from washroom_api.main import app
from washroom_api.models import Business, Washroom
from washroom_api.security_utils import create_session_token, hash_password


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """TestClient sharing the test's database session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def business(db) -> Business:
    business = Business(
        name="Acme Foods",
        email="owner@acme.test",
        password_hash=hash_password("correct-horse"),
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def other_business(db) -> Business:
    business = Business(
        name="Other Co",
        email="owner@other.test",
        password_hash=hash_password("other-password"),
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def admin(db) -> Business:
    business = Business(
        name="Acadia Admin",
        email="admin@acadia.test",
        password_hash=hash_password("admin-password"),
        is_admin=True,
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


def auth_headers(business: Business) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_session_token({'business_id': business.id})}"}


@pytest.fixture
def business_headers(business) -> dict[str, str]:
    return auth_headers(business)


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def make_washroom(db):
    """Factory for washrooms; defaults describe an alert-enabled, never-cleaned room."""

    def _make(**overrides: Any) -> Washroom:
        data = {
            "id": "room-1",
            "business_name": "Acme Foods",
            "room_name": "Main Floor",
            "pin_code": "1234",
            "alert_email": "manager@acme.test",
            "alert_enabled": True,
            "alert_threshold_hours": 8,
            "business_hours_start": "08:00",
            "business_hours_end": "17:00",
            "alert_days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
            "timezone": "America/Moncton",
        }
        data.update(overrides)
        washroom = Washroom(**data)
        db.add(washroom)
        db.commit()
        db.refresh(washroom)
        return washroom

    return _make


@pytest.fixture
def headers_for():
    return auth_headers
