"""
Pydantic schemas for admin form validation.
"""

from typing import Optional
from pydantic import BaseModel, Field


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    fee: float = Field(..., ge=0)
    seats: int = Field(..., ge=0)


class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    fee: Optional[float] = Field(None, ge=0)
    seats: Optional[int] = Field(None, ge=0)
