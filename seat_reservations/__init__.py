"""
Seat and membership reservations for a training centre and study hall.
"""

from seat_reservations.core.errors import ErrorKind, Outcome
from seat_reservations.main import FacilityService, bootstrap, create_service
from seat_reservations.models import Booking, BookingKind, Course, Requester

__all__ = [
    "ErrorKind", "Outcome",
    "FacilityService", "bootstrap", "create_service",
    "Booking", "BookingKind", "Course", "Requester",
]
