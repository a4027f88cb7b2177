"""
Booking model representing one reservation in the ledger.

Key design decisions:
- Frozen: bookings are never edited, only cleared in bulk by a reset
- Aliases keep the persisted JSON compatible with the legacy browser localStorage records
  (`type`, `courseId`, `student`, `date`)
- course_id is a weak reference; the course may no longer exist
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BookingKind(str, Enum):
    COURSE = "course"
    STUDY_HALL = "study"


class Requester(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)


class Booking(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    kind: BookingKind = Field(..., alias="type")
    course_id: Optional[int] = Field(None, alias="courseId")
    requester: Requester = Field(..., alias="student")
    created_at: datetime = Field(..., alias="date")
    hours: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def check_target(self) -> "Booking":
        if self.kind == BookingKind.COURSE and self.course_id is None:
            raise ValueError("course booking requires a course id")
        if self.kind == BookingKind.STUDY_HALL and self.hours is None:
            raise ValueError("study hall booking requires hours")
        return self

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, kind={self.kind.value}, course={self.course_id}, by={self.requester.name})>"
