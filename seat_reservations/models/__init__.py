from seat_reservations.models.booking import Booking, BookingKind, Requester
from seat_reservations.models.course import Course
from seat_reservations.models.study_hall import StudyHallPool

__all__ = [
    "Booking", "BookingKind", "Requester",
    "Course", "StudyHallPool",
]
