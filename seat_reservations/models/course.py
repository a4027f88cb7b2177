"""
Course model with seat inventory tracking.

Key design decisions:
- Assignment is validated, so `seats >= 0` holds at the model level even if a
  caller bypasses the inventory checks
- Field names match the persisted JSON (`id`, `title`, `fee`, `seats`)
"""

from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    title: str = Field(..., min_length=1)
    fee: float = Field(..., ge=0)
    seats: int = Field(..., ge=0)

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title={self.title}, seats={self.seats})>"
