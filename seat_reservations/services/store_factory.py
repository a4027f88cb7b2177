"""
Persistent store factory.
Configures which storage backend the engine writes to.
"""

from pathlib import Path
from typing import Optional

from seat_reservations.core.config import Settings, get_settings
from seat_reservations.services.interfaces.store import PersistentStore
from seat_reservations.services.interfaces.memory_store import InMemoryStore


def get_store(settings: Optional[Settings] = None) -> PersistentStore:
    """
    Build the configured store.

    Backend selection via STORE_BACKEND:
    - memory: InMemoryStore (tests, demos)
    - file: FileStore under STORE_DIR (default)
    - redis: RedisStore on REDIS_URL
    - sql: SqlStore on DATABASE_URL
    """
    settings = settings or get_settings()
    backend = settings.STORE_BACKEND.lower()

    if backend == "memory":
        return InMemoryStore()
    if backend == "file":
        from seat_reservations.services.file_store import FileStore
        return FileStore(Path(settings.STORE_DIR))
    if backend == "redis":
        from seat_reservations.services.redis_store import RedisStore
        return RedisStore(url=settings.REDIS_URL, key_prefix=settings.REDIS_KEY_PREFIX)
    if backend == "sql":
        from seat_reservations.services.sql_store import SqlStore
        return SqlStore(settings.DATABASE_URL)
    raise ValueError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")
