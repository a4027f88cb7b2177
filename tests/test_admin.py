"""
Tests for the admin controller: login gating, inventory edits and reset.
"""

from unittest.mock import patch

import pytest

from seat_reservations.core.config import Settings
from seat_reservations.core.errors import ErrorKind
from seat_reservations.main import FacilityService
from seat_reservations.models.booking import BookingKind, Requester
from seat_reservations.schemas.booking import UNKNOWN_TARGET
from seat_reservations.services.admin_service import AdminController
from seat_reservations.services.state_service import StoreKey


def test_login_wrong_secret(service: FacilityService):
    outcome = service.admin.login("letmein")
    assert outcome.error == ErrorKind.INVALID_CREDENTIALS
    assert not service.admin.is_authenticated


def test_login_and_logout(service: FacilityService):
    assert service.admin.login("admin123").ok
    assert service.admin.is_authenticated

    service.admin.logout()
    assert not service.admin.is_authenticated
    assert service.admin.add_course("X", 0, 1).error == ErrorKind.UNAUTHORIZED


def test_secret_is_configurable(settings, store):
    from seat_reservations.main import create_service

    settings.ADMIN_SECRET = "s3cret"
    service = create_service(settings, store=store)
    assert service.admin.login("admin123").error == ErrorKind.INVALID_CREDENTIALS
    assert service.admin.login("s3cret").ok


def test_add_course_requires_login(service: FacilityService):
    """Logged out: Unauthorized and inventory unchanged. Logged in: one more course."""
    outcome = service.admin.add_course("Python Basics", 2500, 12)
    assert outcome.error == ErrorKind.UNAUTHORIZED
    assert len(service.inventory.courses()) == 3

    service.admin.login("admin123")
    outcome = service.admin.add_course("Python Basics", 2500, 12)
    assert outcome.ok
    assert len(service.inventory.courses()) == 4
    assert service.inventory.get_course(outcome.value).seats == 12


@pytest.mark.parametrize(
    "title, fee, seats",
    [
        ("", 1000, 10),
        ("Python", -1, 10),
        ("Python", 1000, -5),
    ],
)
def test_add_course_invalid_input(admin_service: FacilityService, title, fee, seats):
    outcome = admin_service.admin.add_course(title, fee, seats)
    assert outcome.error == ErrorKind.INVALID_INPUT
    assert len(admin_service.inventory.courses()) == 3


def test_update_course(admin_service: FacilityService):
    outcome = admin_service.admin.update_course(3, seats=0)
    assert outcome.ok
    assert admin_service.inventory.get_course(3).seats == 0
    assert admin_service.admin.update_course(999, seats=1).error == ErrorKind.NOT_FOUND
    assert admin_service.admin.update_course(1, fee=-10).error == ErrorKind.INVALID_INPUT


def test_update_unknown_course_takes_no_lock(admin_service: FacilityService):
    before = len(admin_service.admin.locks)
    for course_id in range(500, 700):
        assert admin_service.admin.update_course(course_id, seats=1).error == ErrorKind.NOT_FOUND
    assert len(admin_service.admin.locks) == before


def test_resize_step_comes_from_settings(admin_service: FacilityService):
    with patch("seat_reservations.services.admin_service.get_settings") as get_settings:
        get_settings.return_value = Settings(STUDY_HALL_RESIZE_STEP=7)
        admin = AdminController(
            admin_service.inventory,
            admin_service.ledger,
            admin_service.repository,
            admin_secret="admin123",
        )
    admin.login("admin123")
    assert admin.resize_study_hall().value == 67


def test_resize_study_hall(admin_service: FacilityService, store):
    assert admin_service.admin.resize_study_hall().value == 65
    assert admin_service.admin.resize_study_hall(-5).value == 60
    assert admin_service.admin.resize_study_hall(-1000).value == 0
    assert store.records[StoreKey.STUDY_HALL_SEATS.value] == "0"


def test_resize_requires_login(service: FacilityService):
    assert service.admin.resize_study_hall(10).error == ErrorKind.UNAUTHORIZED
    assert service.inventory.study_hall_seats == 60


def test_reset_all(admin_service: FacilityService, store, student: Requester):
    """Whatever happened before, reset yields exactly the seed state."""
    admin_service.reservations.book_course(1, student)
    admin_service.reservations.book_study_hall(student)
    admin_service.admin.add_course("Extra", 100, 3)
    admin_service.admin.update_course(2, seats=1)
    admin_service.admin.resize_study_hall(-20)

    assert admin_service.admin.reset_all().ok

    courses = admin_service.inventory.courses()
    assert [c.fee for c in courses] == [1500, 6000, 3000]
    assert [c.seats for c in courses] == [20, 15, 10]
    assert admin_service.inventory.study_hall_seats == 60
    assert admin_service.ledger.entries() == []
    assert store.records[StoreKey.BOOKINGS.value] == "[]"
    assert store.records[StoreKey.STUDY_HALL_SEATS.value] == "60"

    # Twice in a row gives the same result
    assert admin_service.admin.reset_all().ok
    assert [c.seats for c in admin_service.inventory.courses()] == [20, 15, 10]


def test_reset_requires_login(service: FacilityService, student: Requester):
    service.reservations.book_course(1, student)
    assert service.admin.reset_all().error == ErrorKind.UNAUTHORIZED
    assert len(service.ledger) == 1


def test_booking_history(admin_service: FacilityService, student: Requester):
    course_id = admin_service.admin.add_course("Short Course", 500, 2).value
    admin_service.reservations.book_course(course_id, student)
    admin_service.reservations.book_study_hall(Requester(name="Ravi"), hours=6)

    history = admin_service.admin.booking_history().value
    assert [v.kind for v in history] == [BookingKind.STUDY_HALL, BookingKind.COURSE]
    assert history[0].requester_name == "Ravi"
    assert history[0].hours == 6
    assert history[1].target_title == "Short Course"


def test_booking_history_dangling_course(settings, student: Requester, clock):
    """Bookings whose course no longer exists render as unknown."""
    from seat_reservations.main import create_service
    from seat_reservations.models.booking import Booking
    from seat_reservations.services.interfaces.memory_store import InMemoryStore
    from seat_reservations.services.state_service import encode_bookings

    orphan = Booking(id=1, kind=BookingKind.COURSE, course_id=77, requester=student, created_at=clock())
    store = InMemoryStore({StoreKey.BOOKINGS.value: encode_bookings([orphan])})
    service = create_service(settings, store=store)
    service.admin.login("admin123")

    history = service.admin.booking_history().value
    assert history[0].target_title == UNKNOWN_TARGET


def test_booking_history_requires_login(service: FacilityService):
    assert service.admin.booking_history().error == ErrorKind.UNAUTHORIZED
