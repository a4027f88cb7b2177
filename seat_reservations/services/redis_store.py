"""
Redis persistence backend.

Each logical record is a plain string key. There is no TTL: Redis is the
durable copy here, not a cache. Connection and command failures surface as
StoreError so the state repository can log them and keep going.
"""

from typing import Optional

import redis

from seat_reservations.core.errors import StoreError
from seat_reservations.infrastructure.redis_client import RedisClient, get_redis, make_redis
from seat_reservations.services.interfaces.store import PersistentStore


class RedisStore(PersistentStore):
    """
    Client resolution, first match wins:
    - `client`: used as given, never closed by the store
    - `url`: a dedicated client, closed with the store
    - neither: the shared RedisClient for the environment's REDIS_URL
    """

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        key_prefix: str = "",
        url: Optional[str] = None,
    ):
        if client is not None:
            self.redis = client
            self._owner = None
        elif url is not None:
            self.redis = make_redis(url)
            self._owner = "store"
        else:
            self.redis = get_redis()
            self._owner = "shared"
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def load(self, key: str) -> Optional[str]:
        try:
            return self.redis.get(self._key(key))
        except redis.RedisError as e:
            raise StoreError(key, str(e)) from e

    def save(self, key: str, blob: str) -> None:
        try:
            self.redis.set(self._key(key), blob)
        except redis.RedisError as e:
            raise StoreError(key, str(e)) from e

    def close(self) -> None:
        if self._owner == "store":
            self.redis.close()
        elif self._owner == "shared":
            RedisClient.close()
