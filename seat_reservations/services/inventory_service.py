"""
Inventory manager: owns the course catalogue and the study hall seat pool.

Every method runs under one internal lock, so each individual check or
decrement is atomic. Compound operations (decrement + ledger write) are
serialized one level up by the reservation engine's per-item locks.
"""

import threading
from typing import Iterable, Optional

from seat_reservations.core.errors import ErrorKind, Outcome
from seat_reservations.core.logging import get_logger
from seat_reservations.core.metrics import study_hall_seats_available
from seat_reservations.models.course import Course
from seat_reservations.models.study_hall import StudyHallPool

logger = get_logger(__name__)

SEED_COURSES = (
    {"id": 1, "title": "Digital Literacy (1 month)", "fee": 1500, "seats": 20},
    {"id": 2, "title": "DCA (6 months)", "fee": 6000, "seats": 15},
    {"id": 3, "title": "MS Office Essentials (2 months)", "fee": 3000, "seats": 10},
)
SEED_STUDY_HALL_SEATS = 60

STUDY_HALL_NO_SEATS = "No study seats available"


def seed_courses() -> list[Course]:
    return [Course(**data) for data in SEED_COURSES]


class InventoryManager:
    def __init__(
        self,
        courses: Optional[Iterable[Course]] = None,
        study_hall_seats: Optional[int] = None,
    ):
        self._lock = threading.Lock()
        self._courses: dict[int, Course] = {}
        self._study_hall = StudyHallPool(available_seats=SEED_STUDY_HALL_SEATS)
        self._next_id = 1
        self._load(
            seed_courses() if courses is None else list(courses),
            SEED_STUDY_HALL_SEATS if study_hall_seats is None else study_hall_seats,
        )

    def _load(self, courses: list[Course], study_hall_seats: int) -> None:
        self._courses = {c.id: c.model_copy() for c in courses}
        self._study_hall = StudyHallPool(available_seats=study_hall_seats)
        self._next_id = max(self._courses, default=0) + 1
        study_hall_seats_available.set(study_hall_seats)

    # Read side

    def courses(self) -> list[Course]:
        """Snapshot of all courses in insertion order."""
        with self._lock:
            return [c.model_copy() for c in self._courses.values()]

    def get_course(self, course_id: int) -> Optional[Course]:
        with self._lock:
            course = self._courses.get(course_id)
            return course.model_copy() if course else None

    @property
    def study_hall_seats(self) -> int:
        with self._lock:
            return self._study_hall.available_seats

    def has_course(self, course_id: int) -> bool:
        with self._lock:
            return course_id in self._courses

    def has_course_seat(self, course_id: int) -> bool:
        with self._lock:
            course = self._courses.get(course_id)
            return course is not None and course.seats > 0

    def has_study_hall_seat(self) -> bool:
        with self._lock:
            return self._study_hall.available_seats > 0

    # Seat counters

    def decrement_course_seat(self, course_id: int) -> Outcome[None]:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                return Outcome.failure(ErrorKind.NOT_FOUND)
            if course.seats <= 0:
                return Outcome.failure(ErrorKind.NO_SEATS)
            course.seats -= 1
            return Outcome.success()

    def increment_course_seat(self, course_id: int) -> Outcome[None]:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                return Outcome.failure(ErrorKind.NOT_FOUND)
            course.seats += 1
            return Outcome.success()

    def decrement_study_hall_seat(self) -> Outcome[None]:
        with self._lock:
            if self._study_hall.available_seats <= 0:
                return Outcome.failure(ErrorKind.NO_SEATS, STUDY_HALL_NO_SEATS)
            self._study_hall.available_seats -= 1
            study_hall_seats_available.set(self._study_hall.available_seats)
            return Outcome.success()

    def increment_study_hall_seat(self) -> None:
        with self._lock:
            self._study_hall.available_seats += 1
            study_hall_seats_available.set(self._study_hall.available_seats)

    # Admin edits

    def add_course(self, title: str, fee: float, seats: int) -> int:
        """Add a course with a fresh id and return the id."""
        with self._lock:
            course_id = self._next_id
            self._courses[course_id] = Course(id=course_id, title=title, fee=fee, seats=seats)
            self._next_id += 1
        logger.info("course_added", course_id=course_id, title=title, seats=seats)
        return course_id

    def update_course(
        self,
        course_id: int,
        title: Optional[str] = None,
        fee: Optional[float] = None,
        seats: Optional[int] = None,
    ) -> Outcome[Course]:
        with self._lock:
            course = self._courses.get(course_id)
            if course is None:
                return Outcome.failure(ErrorKind.NOT_FOUND)
            changes = {"title": title, "fee": fee, "seats": seats}
            changes = {k: v for k, v in changes.items() if v is not None}
            # Validate all fields together so a bad value leaves the course untouched
            updated = Course.model_validate({**course.model_dump(), **changes})
            self._courses[course_id] = updated
        logger.info("course_updated", course_id=course_id, fields=sorted(changes))
        return Outcome.success(updated.model_copy())

    def resize_study_hall(self, delta: int) -> int:
        """Shift the pool by `delta`, never below zero. Returns the new size."""
        with self._lock:
            new_size = max(0, self._study_hall.available_seats + delta)
            self._study_hall.available_seats = new_size
            study_hall_seats_available.set(new_size)
        logger.info("study_hall_resized", delta=delta, available=new_size)
        return new_size

    def reset_to_seed(self) -> None:
        with self._lock:
            self._load(seed_courses(), SEED_STUDY_HALL_SEATS)
