"""
Tests for the reservation engine: the decrement-then-record transaction.
"""

from unittest.mock import patch

import pytest

from seat_reservations.core.config import Settings
from seat_reservations.core.errors import ErrorKind, StoreError
from seat_reservations.main import FacilityService
from seat_reservations.models.booking import BookingKind, Requester
from seat_reservations.services.reservation_service import ReservationEngine
from seat_reservations.services.state_service import StoreKey


def test_book_course(service: FacilityService, student: Requester):
    """Successful booking decrements seats and records one booking."""
    outcome = service.reservations.book_course(1, student)

    assert outcome.ok
    booking = outcome.value
    assert booking.kind == BookingKind.COURSE
    assert booking.course_id == 1
    assert booking.requester == student
    assert service.inventory.get_course(1).seats == 19
    assert service.ledger.entries() == [booking]


def test_book_course_exhaustion(admin_service: FacilityService, student: Requester):
    """The last seat books once; the next attempt fails and changes nothing."""
    course_id = admin_service.admin.add_course("Tally Prime", 2000, 1).value

    first = admin_service.reservations.book_course(course_id, student)
    assert first.ok
    assert admin_service.inventory.get_course(course_id).seats == 0
    assert len(admin_service.ledger) == 1

    second = admin_service.reservations.book_course(course_id, Requester(name="Ravi"))
    assert second.error == ErrorKind.NO_SEATS
    assert second.message == "No seats available"
    assert admin_service.inventory.get_course(course_id).seats == 0
    assert len(admin_service.ledger) == 1


def test_book_unknown_course(service: FacilityService, student: Requester):
    outcome = service.reservations.book_course(999, student)
    assert outcome.error == ErrorKind.NOT_FOUND
    assert service.ledger.entries() == []


def test_book_study_hall_default_hours(service: FacilityService, student: Requester):
    outcome = service.reservations.book_study_hall(student)

    assert outcome.ok
    assert outcome.value.kind == BookingKind.STUDY_HALL
    assert outcome.value.hours == 4
    assert outcome.value.course_id is None
    assert service.inventory.study_hall_seats == 59


def test_book_study_hall_explicit_hours(service: FacilityService, student: Requester):
    assert service.reservations.book_study_hall(student, hours=3).value.hours == 3


@pytest.mark.parametrize("hours", [0, -1, 2.5, "x"])
def test_book_study_hall_rejects_invalid_hours(service: FacilityService, student: Requester, hours):
    """Bad hours come back as INVALID_INPUT before any seat is touched."""
    outcome = service.reservations.book_study_hall(student, hours=hours)
    assert not outcome.ok
    assert outcome.error == ErrorKind.INVALID_INPUT
    assert service.inventory.study_hall_seats == 60
    assert len(service.ledger) == 0


def test_unknown_courses_do_not_grow_lock_registry(service: FacilityService, student: Requester):
    before = len(service.reservations.locks)
    for course_id in range(10_000, 12_000):
        assert service.reservations.book_course(course_id, student).error == ErrorKind.NOT_FOUND
    assert len(service.reservations.locks) == before


def test_default_hours_come_from_settings(service: FacilityService, student: Requester):
    with patch("seat_reservations.services.reservation_service.get_settings") as get_settings:
        get_settings.return_value = Settings(STUDY_HALL_DEFAULT_HOURS=6)
        engine = ReservationEngine(service.inventory, service.ledger, service.repository)
    assert engine.default_hours == 6
    assert engine.book_study_hall(student).value.hours == 6


def test_book_study_hall_exhausted(admin_service: FacilityService, student: Requester):
    admin_service.admin.resize_study_hall(-60)

    outcome = admin_service.reservations.book_study_hall(student)
    assert outcome.error == ErrorKind.NO_SEATS
    assert outcome.message == "No study seats available"
    assert admin_service.inventory.study_hall_seats == 0
    assert len(admin_service.ledger) == 0


def test_most_recent_first(service: FacilityService, student: Requester):
    b1 = service.reservations.book_course(1, student).value
    b2 = service.reservations.book_study_hall(student).value
    assert service.ledger.entries()[:2] == [b2, b1]


def test_decrements_match_ledger_entries(service: FacilityService, student: Requester):
    """Per target, seats consumed always equals bookings recorded."""
    for course_id in (1, 1, 2, 999, 3, 3, 3):
        service.reservations.book_course(course_id, student)
    for _ in range(5):
        service.reservations.book_study_hall(student)

    for course in service.inventory.courses():
        seed_seats = {1: 20, 2: 15, 3: 10}[course.id]
        assert seed_seats - course.seats == service.ledger.count_for(BookingKind.COURSE, course.id)
    assert 60 - service.inventory.study_hall_seats == service.ledger.count_for(BookingKind.STUDY_HALL)


def test_ledger_failure_is_compensated(service: FacilityService, student: Requester):
    """If recording fails the seat is handed back and the error propagates."""
    with patch.object(service.ledger, "record", side_effect=RuntimeError("boom")):
        with pytest.raises(RuntimeError):
            service.reservations.book_course(2, student)
        with pytest.raises(RuntimeError):
            service.reservations.book_study_hall(student)

    assert service.inventory.get_course(2).seats == 15
    assert service.inventory.study_hall_seats == 60
    assert len(service.ledger) == 0


def test_booking_persists_state(service: FacilityService, store, student: Requester):
    service.reservations.book_course(1, student)
    service.reservations.book_study_hall(student)

    assert StoreKey.COURSES.value in store.records
    assert StoreKey.BOOKINGS.value in store.records
    assert store.records[StoreKey.STUDY_HALL_SEATS.value] == "59"


def test_store_failure_keeps_booking(service: FacilityService, store, student: Requester):
    """A failed write is reported but the in-memory booking stands."""
    with patch.object(store, "save", side_effect=StoreError("sm_courses", "disk full")):
        outcome = service.reservations.book_course(1, student)

    assert outcome.ok
    assert service.inventory.get_course(1).seats == 19
    assert len(service.ledger) == 1
    assert store.records == {}


def test_attempts_are_counted(service: FacilityService, student: Requester):
    from prometheus_client import REGISTRY
    from seat_reservations.core.metrics import render_metrics

    labels = {"kind": "course", "status": "not_found"}
    before = REGISTRY.get_sample_value("booking_attempts_total", labels) or 0
    service.reservations.book_course(999, student)
    after = REGISTRY.get_sample_value("booking_attempts_total", labels)

    assert after == before + 1
    assert b"booking_attempts_total" in render_metrics()
