"""
Admin controller: a two-state session (logged out / logged in) gating
inventory edits, booking history and the full reset.

The secret is injected (ADMIN_SECRET setting) and compared in constant time.
The session lives only in memory and starts logged out on every process start.
"""

import hmac
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from seat_reservations.core.config import get_settings
from seat_reservations.core.errors import ErrorKind, Outcome
from seat_reservations.core.logging import get_logger
from seat_reservations.core.metrics import record_admin_operation
from seat_reservations.infrastructure.locks import KeyedLocks, STUDY_HALL_KEY, course_key
from seat_reservations.models.course import Course
from seat_reservations.schemas.admin import CourseCreate, CourseUpdate
from seat_reservations.schemas.booking import BookingView
from seat_reservations.services.inventory_service import InventoryManager
from seat_reservations.services.ledger_service import BookingLedger
from seat_reservations.services.state_service import StateRepository

logger = get_logger(__name__)


@dataclass
class AdminSession:
    authenticated: bool = False


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"])
    return f"{field}: {error['msg']}" if field else error["msg"]


class AdminController:
    def __init__(
        self,
        inventory: InventoryManager,
        ledger: BookingLedger,
        repository: StateRepository,
        admin_secret: str,
        locks: Optional[KeyedLocks] = None,
        resize_step: Optional[int] = None,
    ):
        self.inventory = inventory
        self.ledger = ledger
        self.repository = repository
        self.locks = locks or KeyedLocks()
        if resize_step is None:
            resize_step = get_settings().STUDY_HALL_RESIZE_STEP
        self.resize_step = resize_step
        self._secret = admin_secret
        self.session = AdminSession()

    @property
    def is_authenticated(self) -> bool:
        return self.session.authenticated

    def login(self, secret: str) -> Outcome[None]:
        if not hmac.compare_digest(secret.encode(), self._secret.encode()):
            logger.warning("admin_login_failed")
            record_admin_operation("login", ErrorKind.INVALID_CREDENTIALS.value)
            return Outcome.failure(ErrorKind.INVALID_CREDENTIALS)
        self.session.authenticated = True
        logger.info("admin_logged_in")
        record_admin_operation("login", "ok")
        return Outcome.success()

    def logout(self) -> None:
        self.session.authenticated = False
        logger.info("admin_logged_out")

    def _denied(self, operation: str) -> Optional[Outcome]:
        if self.session.authenticated:
            return None
        logger.warning("admin_unauthorized", operation=operation)
        record_admin_operation(operation, ErrorKind.UNAUTHORIZED.value)
        return Outcome.failure(ErrorKind.UNAUTHORIZED)

    def _invalid(self, operation: str, exc: ValidationError) -> Outcome:
        message = _first_error(exc)
        logger.warning("admin_invalid_input", operation=operation, error=message)
        record_admin_operation(operation, ErrorKind.INVALID_INPUT.value)
        return Outcome.failure(ErrorKind.INVALID_INPUT, message)

    def add_course(self, title: str, fee: float, seats: int) -> Outcome[int]:
        """Add a course; returns its new id."""
        denied = self._denied("add_course")
        if denied is not None:
            return denied
        try:
            data = CourseCreate(title=title, fee=fee, seats=seats)
        except ValidationError as e:
            return self._invalid("add_course", e)

        course_id = self.inventory.add_course(data.title, data.fee, data.seats)
        with self.repository.writing():
            self.repository.save_courses(self.inventory.courses())
        record_admin_operation("add_course", "ok")
        return Outcome.success(course_id)

    def update_course(
        self,
        course_id: int,
        title: Optional[str] = None,
        fee: Optional[float] = None,
        seats: Optional[int] = None,
    ) -> Outcome[Course]:
        denied = self._denied("update_course")
        if denied is not None:
            return denied
        try:
            data = CourseUpdate(title=title, fee=fee, seats=seats)
        except ValidationError as e:
            return self._invalid("update_course", e)
        if not self.inventory.has_course(course_id):
            record_admin_operation("update_course", ErrorKind.NOT_FOUND.value)
            return Outcome.failure(ErrorKind.NOT_FOUND)

        with self.locks.hold(course_key(course_id)):
            updated = self.inventory.update_course(course_id, data.title, data.fee, data.seats)
        if not updated.ok:
            record_admin_operation("update_course", updated.error.value)
            return updated

        with self.repository.writing():
            self.repository.save_courses(self.inventory.courses())
        record_admin_operation("update_course", "ok")
        return updated

    def resize_study_hall(self, delta: Optional[int] = None) -> Outcome[int]:
        """Grow or shrink the study hall pool; clamped at zero. Returns the new size."""
        denied = self._denied("resize_study_hall")
        if denied is not None:
            return denied
        delta = self.resize_step if delta is None else delta

        with self.locks.hold(STUDY_HALL_KEY):
            new_size = self.inventory.resize_study_hall(delta)
        with self.repository.writing():
            self.repository.save_study_hall_seats(self.inventory.study_hall_seats)
        record_admin_operation("resize_study_hall", "ok")
        return Outcome.success(new_size)

    def reset_all(self) -> Outcome[None]:
        """
        Restore seed inventory and empty the ledger, then persist all three
        records. Unconditional once logged in; confirmation is the caller's job.
        """
        denied = self._denied("reset_all")
        if denied is not None:
            return denied

        with self.locks.hold_all():
            self.inventory.reset_to_seed()
            self.ledger.clear()
            with self.repository.writing():
                self.repository.save_courses(self.inventory.courses())
                self.repository.save_bookings(self.ledger.entries())
                self.repository.save_study_hall_seats(self.inventory.study_hall_seats)

        logger.info("state_reset")
        record_admin_operation("reset_all", "ok")
        return Outcome.success()

    def booking_history(self) -> Outcome[list[BookingView]]:
        """Ledger entries, most recent first, with course titles resolved."""
        denied = self._denied("booking_history")
        if denied is not None:
            return denied
        courses = {c.id: c for c in self.inventory.courses()}
        views = [BookingView.from_booking(b, courses) for b in self.ledger.entries()]
        return Outcome.success(views)
