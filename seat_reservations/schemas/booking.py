"""
Pydantic schemas for rendering booking history.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from seat_reservations.models.booking import Booking, BookingKind
from seat_reservations.models.course import Course

UNKNOWN_TARGET = "unknown"


class BookingView(BaseModel):
    id: int
    kind: BookingKind
    target_title: str
    requester_name: str
    created_at: datetime
    hours: Optional[int] = None

    @classmethod
    def from_booking(cls, booking: Booking, courses: dict[int, Course]) -> "BookingView":
        """Resolve the course title, tolerating bookings for courses that are gone."""
        if booking.kind == BookingKind.COURSE:
            course = courses.get(booking.course_id)
            target_title = course.title if course else UNKNOWN_TARGET
        else:
            target_title = "Study hall"
        return cls(
            id=booking.id,
            kind=booking.kind,
            target_title=target_title,
            requester_name=booking.requester.name,
            created_at=booking.created_at,
            hours=booking.hours,
        )
