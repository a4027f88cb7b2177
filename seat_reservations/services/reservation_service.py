"""
Reservation engine: turns a booking intent into a seat decrement plus a ledger
entry, as one logical transaction.

CONCURRENCY STRATEGY: Per-item lock around decrement-then-record
===============================================================

Problem:
  Two callers book the last seat simultaneously.
  Both see seats=1, both decrement, both record a booking.
  Result: a negative seat count and a ledger with more entries than seats.

Solution:
  1. Take the lock for the target item ("course:<id>" or "study_hall")
  2. Decrement through the inventory manager; on failure return it, nothing
     has been written
  3. Record the booking in the ledger; if that raises, put the seat back
     (compensation) and let the exception propagate
  4. Release the lock, then persist the changed records

  A seat is never decremented without a booking record and a booking record
  never exists without a decrement. Different items book in parallel.
"""

from typing import Optional

from pydantic import PositiveInt, TypeAdapter, ValidationError

from seat_reservations.core.config import get_settings
from seat_reservations.core.errors import ErrorKind, Outcome
from seat_reservations.core.logging import get_logger
from seat_reservations.core.metrics import record_booking_attempt
from seat_reservations.infrastructure.locks import KeyedLocks, STUDY_HALL_KEY, course_key
from seat_reservations.models.booking import Booking, BookingKind, Requester
from seat_reservations.services.inventory_service import InventoryManager
from seat_reservations.services.ledger_service import BookingLedger
from seat_reservations.services.state_service import StateRepository

logger = get_logger(__name__)

_hours_adapter = TypeAdapter(PositiveInt)


def _failed(kind: str, outcome: Outcome, **context) -> Outcome[Booking]:
    logger.warning("booking_failed", kind=kind, reason=outcome.error.value, **context)
    record_booking_attempt(kind, outcome.error.value)
    return Outcome.failure(outcome.error, outcome.message)


class ReservationEngine:
    def __init__(
        self,
        inventory: InventoryManager,
        ledger: BookingLedger,
        repository: StateRepository,
        locks: Optional[KeyedLocks] = None,
        default_hours: Optional[int] = None,
    ):
        self.inventory = inventory
        self.ledger = ledger
        self.repository = repository
        self.locks = locks or KeyedLocks()
        if default_hours is None:
            default_hours = get_settings().STUDY_HALL_DEFAULT_HOURS
        self.default_hours = default_hours

    def book_course(self, course_id: int, requester: Requester) -> Outcome[Booking]:
        """Enroll `requester` in a course. Fails with NOT_FOUND or NO_SEATS."""
        kind = BookingKind.COURSE.value
        # Unknown ids are turned away before an item lock is created for them
        if not self.inventory.has_course(course_id):
            return _failed(kind, Outcome.failure(ErrorKind.NOT_FOUND), course_id=course_id)

        with self.locks.hold(course_key(course_id)):
            decremented = self.inventory.decrement_course_seat(course_id)
            if not decremented.ok:
                return _failed(kind, decremented, course_id=course_id)

            try:
                booking = self.ledger.record(BookingKind.COURSE, course_id, requester)
            except Exception:
                self.inventory.increment_course_seat(course_id)
                logger.error("booking_compensated", kind=kind, course_id=course_id)
                record_booking_attempt(kind, "error")
                raise

        with self.repository.writing():
            self.repository.save_courses(self.inventory.courses())
            self.repository.save_bookings(self.ledger.entries())

        logger.info(
            "booking_created",
            booking_id=booking.id,
            kind=kind,
            course_id=course_id,
            requester=requester.name,
        )
        record_booking_attempt(kind, "success")
        return Outcome.success(booking)

    def book_study_hall(self, requester: Requester, hours: Optional[int] = None) -> Outcome[Booking]:
        """
        Reserve a study hall seat for `hours` (defaults to the configured
        membership length). Fails with NO_SEATS, or INVALID_INPUT when hours
        is not a positive whole number.
        """
        kind = BookingKind.STUDY_HALL.value
        try:
            hours = _hours_adapter.validate_python(self.default_hours if hours is None else hours)
        except ValidationError:
            return _failed(
                kind,
                Outcome.failure(ErrorKind.INVALID_INPUT, "Hours must be a positive whole number"),
                hours=repr(hours),
            )

        with self.locks.hold(STUDY_HALL_KEY):
            decremented = self.inventory.decrement_study_hall_seat()
            if not decremented.ok:
                return _failed(kind, decremented)

            try:
                booking = self.ledger.record(BookingKind.STUDY_HALL, None, requester, hours=hours)
            except Exception:
                self.inventory.increment_study_hall_seat()
                logger.error("booking_compensated", kind=kind)
                record_booking_attempt(kind, "error")
                raise

        with self.repository.writing():
            self.repository.save_study_hall_seats(self.inventory.study_hall_seats)
            self.repository.save_bookings(self.ledger.entries())

        logger.info(
            "booking_created",
            booking_id=booking.id,
            kind=kind,
            hours=hours,
            requester=requester.name,
        )
        record_booking_attempt(kind, "success")
        return Outcome.success(booking)
