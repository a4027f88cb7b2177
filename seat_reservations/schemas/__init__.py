from seat_reservations.schemas.admin import CourseCreate, CourseUpdate
from seat_reservations.schemas.booking import BookingView, UNKNOWN_TARGET

__all__ = [
    "CourseCreate", "CourseUpdate",
    "BookingView", "UNKNOWN_TARGET",
]
