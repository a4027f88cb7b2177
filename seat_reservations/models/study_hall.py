"""
Study hall seat pool: a single non-negative counter.
"""

from pydantic import BaseModel, ConfigDict, Field


class StudyHallPool(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    available_seats: int = Field(..., ge=0)

    def __repr__(self) -> str:
        return f"<StudyHallPool(available={self.available_seats})>"
