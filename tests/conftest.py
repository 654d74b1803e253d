# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser, get_current_user
from fake_supabase import FakeSupabase


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login_as(app):
    """Route every request through the given CurrentUser."""
    def _login(user: CurrentUser):
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login


# -----------------------------------------------------
# Callers
# -----------------------------------------------------
@pytest.fixture
def admin_user():
    return CurrentUser(id="admin-1", email="admin@example.com", role="ADMIN", name="Admin")


@pytest.fixture
def coordinator_user():
    return CurrentUser(id="coord-1", email="coord@example.com", role="COORDINATOR", name="Casey")


@pytest.fixture
def other_coordinator_user():
    return CurrentUser(id="coord-2", email="coord2@example.com", role="COORDINATOR", name="Robin")


@pytest.fixture
def tenant_user():
    return CurrentUser(id="tenant-1", email="tenant@example.com", role="TENANT", name="Sam")


@pytest.fixture
def other_tenant_user():
    return CurrentUser(id="tenant-2", email="tenant2@example.com", role="TENANT", name="Alex")


# -----------------------------------------------------
# Supabase double
# -----------------------------------------------------
@pytest.fixture
def fake_db() -> Generator[FakeSupabase, None, None]:
    """
    In-memory Supabase wired into every module that resolves a client:
    one house coordinated by coord-1, a single room with an OCCUPIED
    tenancy for tenant-1, and an empty two-person room.
    """
    db = FakeSupabase()

    db.add("profiles", {"id": "admin-1", "email": "admin@example.com", "name": "Admin", "role": "ADMIN"})
    db.add("profiles", {"id": "coord-1", "email": "coord@example.com", "name": "Casey", "role": "COORDINATOR"})
    db.add("profiles", {"id": "coord-2", "email": "coord2@example.com", "name": "Robin", "role": "COORDINATOR"})
    db.add("profiles", {"id": "tenant-1", "email": "tenant@example.com", "name": "Sam", "role": "TENANT"})
    db.add("profiles", {"id": "tenant-2", "email": "tenant2@example.com", "name": "Alex", "role": "TENANT"})

    db.add("houses", {"id": "house-1", "name": "Harbour House", "address": "1 Quay St", "active": True})
    db.add("house_coordinators", {"id": "hc-1", "house_id": "house-1", "user_id": "coord-1"})

    db.add("rooms", {"id": "room-1", "house_id": "house-1", "label": "Room 1", "capacity": 1, "active": True})
    db.add("rooms", {"id": "room-2", "house_id": "house-1", "label": "Room 2", "capacity": 2, "active": True})

    db.add(
        "tenancies",
        {
            "id": "tenancy-1",
            "room_id": "room-1",
            "tenant_user_id": "tenant-1",
            "slot": None,
            "start_date": "2025-01-01",
            "end_date": None,
            "status": "OCCUPIED",
            "rental_price": 250.0,
            "keys_received": False,
        },
    )

    with patch("core.supabase_helpers.get_supabase_client", return_value=db), \
            patch("core.supabase_client.get_supabase_client", return_value=db), \
            patch("dependencies.auth.get_supabase_client", return_value=db), \
            patch("routers.auth.get_supabase_client", return_value=db):
        yield db


@pytest.fixture
def sent_notifications():
    """Capture outgoing webhook + email deliveries."""
    sent = {"webhook": [], "email": []}
    with patch("core.notifications.send_webhook_message", side_effect=lambda msg: sent["webhook"].append(msg)), \
            patch("core.notifications.send_email", side_effect=lambda subject, body, **kw: sent["email"].append(subject)):
        yield sent
