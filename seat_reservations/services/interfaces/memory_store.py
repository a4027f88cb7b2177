"""
In-memory store - nothing is written anywhere.
"""

from typing import Optional

from seat_reservations.services.interfaces.store import PersistentStore


class InMemoryStore(PersistentStore):
    """
    Keeps blobs in a dict for the lifetime of the object.

    Use when:
    - Running tests
    - A throwaway demo session is enough
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.records: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.records.get(key)

    def save(self, key: str, blob: str) -> None:
        self.records[key] = blob
