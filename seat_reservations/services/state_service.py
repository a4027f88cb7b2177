"""
State repository: encodes engine state into the three persisted records and
decodes it back on startup.

PERSISTENCE CONTRACT
====================

Keys:
  sm_courses     JSON array of courses
  sm_bookings    JSON array of bookings, most recent first
  sm_studySeats  decimal seat count as a string

Loading:
  A key that is missing falls back to its seed value silently. A key whose
  blob is unparsable or fails validation also falls back to seed, with a
  warning. The store is never rewritten on load.

Writing:
  Best effort. Writes happen after the in-memory mutation has succeeded; a
  failed write is logged and counted but the mutation stands. There is no
  rollback and no retry.
"""

import threading
from contextlib import contextmanager
from enum import Enum
from typing import Iterable, Iterator, Optional

from pydantic import TypeAdapter, ValidationError

from seat_reservations.core.errors import StoreError
from seat_reservations.core.logging import get_logger
from seat_reservations.core.metrics import record_store_write
from seat_reservations.models.booking import Booking
from seat_reservations.models.course import Course
from seat_reservations.services.interfaces.store import PersistentStore

logger = get_logger(__name__)

_courses_adapter = TypeAdapter(list[Course])
_bookings_adapter = TypeAdapter(list[Booking])


class StoreKey(str, Enum):
    COURSES = "sm_courses"
    BOOKINGS = "sm_bookings"
    STUDY_HALL_SEATS = "sm_studySeats"


def encode_courses(courses: Iterable[Course]) -> str:
    return _courses_adapter.dump_json(list(courses)).decode()


def encode_bookings(bookings: Iterable[Booking]) -> str:
    return _bookings_adapter.dump_json(list(bookings), by_alias=True, exclude_none=True).decode()


def encode_study_hall_seats(seats: int) -> str:
    return str(seats)


class StateRepository:
    def __init__(self, store: PersistentStore):
        self.store = store
        self._write_lock = threading.RLock()

    @contextmanager
    def writing(self) -> Iterator[None]:
        """
        Serialize snapshot-and-write sequences. Take snapshots inside this
        block so a later write never carries older state than an earlier one.
        """
        with self._write_lock:
            yield

    def _read(self, key: StoreKey) -> Optional[str]:
        try:
            return self.store.load(key.value)
        except StoreError as e:
            logger.warning("state_read_failed", key=key.value, error=str(e))
            return None

    def load_courses(self) -> Optional[list[Course]]:
        """Persisted courses, or None when the caller should seed."""
        blob = self._read(StoreKey.COURSES)
        if blob is None:
            return None
        try:
            return _courses_adapter.validate_json(blob)
        except ValidationError as e:
            logger.warning("state_record_invalid", key=StoreKey.COURSES.value, errors=e.error_count())
            return None

    def load_bookings(self) -> list[Booking]:
        blob = self._read(StoreKey.BOOKINGS)
        if blob is None:
            return []
        try:
            return _bookings_adapter.validate_json(blob)
        except ValidationError as e:
            logger.warning("state_record_invalid", key=StoreKey.BOOKINGS.value, errors=e.error_count())
            return []

    def load_study_hall_seats(self) -> Optional[int]:
        blob = self._read(StoreKey.STUDY_HALL_SEATS)
        if blob is None:
            return None
        try:
            seats = int(blob.strip())
        except ValueError:
            seats = -1
        if seats < 0:
            logger.warning("state_record_invalid", key=StoreKey.STUDY_HALL_SEATS.value, blob=blob[:32])
            return None
        return seats

    def _write(self, key: StoreKey, blob: str) -> bool:
        try:
            self.store.save(key.value, blob)
        except StoreError as e:
            logger.warning("state_write_failed", key=key.value, error=str(e))
            record_store_write(key.value, ok=False)
            return False
        record_store_write(key.value, ok=True)
        return True

    def save_courses(self, courses: Iterable[Course]) -> bool:
        return self._write(StoreKey.COURSES, encode_courses(courses))

    def save_bookings(self, bookings: Iterable[Booking]) -> bool:
        return self._write(StoreKey.BOOKINGS, encode_bookings(bookings))

    def save_study_hall_seats(self, seats: int) -> bool:
        return self._write(StoreKey.STUDY_HALL_SEATS, encode_study_hall_seats(seats))
