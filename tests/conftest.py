"""
Pytest fixtures for stores, settings and a fully wired service.

Every test gets a fresh in-memory store unless it asks for a real backend.
"""

from datetime import datetime, timedelta, timezone

import pytest

from seat_reservations.core.config import Settings
from seat_reservations.main import FacilityService, create_service
from seat_reservations.models.booking import Requester
from seat_reservations.services.interfaces.memory_store import InMemoryStore


@pytest.fixture
def settings() -> Settings:
    return Settings(
        ADMIN_SECRET="admin123",
        STORE_BACKEND="memory",
        STUDY_HALL_DEFAULT_HOURS=4,
        STUDY_HALL_RESIZE_STEP=5,
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def service(settings: Settings, store: InMemoryStore) -> FacilityService:
    """Service seeded from an empty store."""
    return create_service(settings, store=store)


@pytest.fixture
def admin_service(service: FacilityService) -> FacilityService:
    """Service with the admin already logged in."""
    assert service.admin.login("admin123").ok
    return service


@pytest.fixture
def student() -> Requester:
    return Requester(name="Asha Verma")


@pytest.fixture
def clock():
    """Deterministic clock advancing one second per call."""
    start = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))

    def now() -> datetime:
        return start + timedelta(seconds=next(ticks))

    return now
