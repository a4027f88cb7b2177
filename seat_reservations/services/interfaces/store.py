"""
Persistent store interface.
Allows swapping between storage backends without touching the engine.
"""

from abc import ABC, abstractmethod
from typing import Optional


class PersistentStore(ABC):
    """
    Interface for key-value persistence of engine state.

    Implementations:
    - InMemoryStore: process-local dict, nothing survives a restart
    - FileStore: one JSON file per key on local disk
    - RedisStore: string keys in Redis
    - SqlStore: rows in a SQLAlchemy key-value table
    """

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """
        Read the blob last written under `key`.

        Returns:
            The stored string, or None if the key was never written
        """
        pass

    @abstractmethod
    def save(self, key: str, blob: str) -> None:
        """
        Durably store `blob` under `key`, replacing any previous value.

        Raises:
            StoreError if the backend rejects the write
        """
        pass

    def close(self) -> None:
        """Release backend resources. No-op by default."""
        pass
