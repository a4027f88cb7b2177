"""
Error taxonomy and the Outcome result type.

Every engine operation reports failure by returning an Outcome rather than
raising. Callers branch on `outcome.ok` and render `outcome.message`.
Only the persistence backends raise (StoreError), and the state repository
catches those.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    NO_SEATS = "no_seats"
    UNAUTHORIZED = "unauthorized"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_INPUT = "invalid_input"


DEFAULT_MESSAGES = {
    ErrorKind.NOT_FOUND: "Course not found",
    ErrorKind.NO_SEATS: "No seats available",
    ErrorKind.UNAUTHORIZED: "Admin login required",
    ErrorKind.INVALID_CREDENTIALS: "Wrong admin password",
    ErrorKind.INVALID_INPUT: "Invalid input",
}


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: Optional[str] = None) -> "Outcome[T]":
        return cls(error=error, message=message or DEFAULT_MESSAGES[error])


class StoreError(Exception):
    """A persistence backend could not read or write a record."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"store operation on {key!r} failed: {reason}")
        self.key = key
        self.reason = reason
