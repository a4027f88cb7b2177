"""
Redis client for the redis persistence backend.
Separated from business logic for clean architecture.
"""

import redis
from typing import Optional
from seat_reservations.core.config import get_settings


def make_redis(url: str) -> redis.Redis:
    """Build a client for `url`. No connection is opened until the first command."""
    return redis.Redis.from_url(
        url,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        health_check_interval=30
    )


class RedisClient:
    """Process-wide Redis client for the environment's REDIS_URL."""

    _instance: Optional[redis.Redis] = None

    @classmethod
    def get_client(cls) -> redis.Redis:
        """Get or create Redis client instance."""
        if cls._instance is None:
            cls._instance = make_redis(get_settings().REDIS_URL)
        return cls._instance

    @classmethod
    def close(cls):
        """Close Redis connection."""
        if cls._instance:
            cls._instance.close()
            cls._instance = None

# Convenience function
def get_redis() -> redis.Redis:
    """Get Redis client instance."""
    return RedisClient.get_client()
