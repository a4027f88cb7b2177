"""
Booking ledger: append-only history of bookings, most recent first.

The most-recent-first order is part of the contract; it is how bookings are
persisted and displayed. Ids come from a monotonic counter, seeded past the
highest id already on record, so two bookings in the same millisecond never
collide.
"""

import threading
from collections import deque
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from seat_reservations.models.booking import Booking, BookingKind, Requester


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookingLedger:
    def __init__(
        self,
        bookings: Iterable[Booking] = (),
        clock: Callable[[], datetime] = utc_now,
    ):
        self._lock = threading.Lock()
        self._bookings: deque[Booking] = deque(bookings)
        self._next_id = max((b.id for b in self._bookings), default=0) + 1
        self._clock = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._bookings)

    def record(
        self,
        kind: BookingKind,
        course_id: Optional[int],
        requester: Requester,
        hours: Optional[int] = None,
    ) -> Booking:
        with self._lock:
            booking = Booking(
                id=self._next_id,
                kind=kind,
                course_id=course_id,
                requester=requester,
                created_at=self._clock(),
                hours=hours,
            )
            self._bookings.appendleft(booking)
            self._next_id += 1
            return booking

    def entries(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings)

    def count_for(self, kind: BookingKind, course_id: Optional[int] = None) -> int:
        with self._lock:
            return sum(
                1 for b in self._bookings
                if b.kind == kind and (course_id is None or b.course_id == course_id)
            )

    def clear(self) -> None:
        # Ids keep counting after a clear
        with self._lock:
            self._bookings.clear()
