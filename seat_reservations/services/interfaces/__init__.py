"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .store import PersistentStore
from .memory_store import InMemoryStore

__all__ = ['PersistentStore', 'InMemoryStore']
