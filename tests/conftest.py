# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Dict, Generator

from core.rate_limiter import reset_rate_limits
from core.security import create_access_token
from database import build_engine
from main import create_app
from storage.memory import MemStorage
from storage.seed import seed_demo_data
from storage.sql import SqlStorage


@pytest.fixture(scope="function")
def storage() -> MemStorage:
    """Fresh in-memory store loaded with the demo data."""
    store = MemStorage()
    seed_demo_data(store)
    return store


@pytest.fixture(scope="function")
def app(storage):
    """Create a test FastAPI application instance."""
    return create_app(storage=storage)


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# -------------------------------------------------
# Users & tokens
# -------------------------------------------------
def _user(storage, username):
    return storage.get_user_by_username(username)


def _headers(user) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def admin_user(storage):
    return _user(storage, "admin")


@pytest.fixture
def p1_manager(storage):
    return _user(storage, "p1manager")


@pytest.fixture
def p2_manager(storage):
    return _user(storage, "p2manager")


@pytest.fixture
def helper_user(storage):
    return _user(storage, "helper")


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def manager_headers(p1_manager):
    """Headers for the P1 manager."""
    return _headers(p1_manager)


@pytest.fixture
def p2_manager_headers(p2_manager):
    return _headers(p2_manager)


@pytest.fixture
def helper_headers(helper_user):
    return _headers(helper_user)


# -------------------------------------------------
# Convenience builders
# -------------------------------------------------
@pytest.fixture
def guest(storage):
    return storage.create_guest({"name": "Test Guest", "contact": "555-0100", "contact_type": "phone"})


@pytest.fixture
def booking_payload(guest):
    """A monthly booking of P1-R1 for the test guest."""
    return {
        "roomId": "P1-R1",
        "guestId": guest.id,
        "plan": "monthly",
        "startDate": "2026-03-01T12:00:00",
        "endDate": "2026-04-01T12:00:00",
        "totalAmount": "2000.00",
    }


# -------------------------------------------------
# Both storage adapters, for contract tests
# -------------------------------------------------
@pytest.fixture(params=["memory", "sqlite"])
def any_storage(request):
    if request.param == "memory":
        return MemStorage()
    store = SqlStorage(build_engine("sqlite://"))
    store.create_all()
    return store


@pytest.fixture
def seeded_any_storage(any_storage):
    """Demo data on both adapters, for API tests that must behave the same on each."""
    seed_demo_data(any_storage)
    return any_storage


@pytest.fixture
def any_client(seeded_any_storage) -> Generator[TestClient, None, None]:
    with TestClient(create_app(storage=seeded_any_storage)) as test_client:
        yield test_client


@pytest.fixture
def any_manager_headers(seeded_any_storage):
    """Headers for the P1 manager of `seeded_any_storage`."""
    return _headers(_user(seeded_any_storage, "p1manager"))


@pytest.fixture
def any_booking_payload(seeded_any_storage):
    guest = seeded_any_storage.create_guest({"name": "Adapter Guest", "contact": "555-0111", "contact_type": "phone"})
    return {
        "roomId": "P1-R1",
        "guestId": guest.id,
        "plan": "monthly",
        "startDate": "2026-03-01T12:00:00",
        "endDate": "2026-04-01T12:00:00",
        "totalAmount": "2000.00",
    }


@pytest.fixture(autouse=True)
def reset_limits():
    """Reset login rate limits before each test."""
    reset_rate_limits()
    yield
    reset_rate_limits()
