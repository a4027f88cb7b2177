"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .locks import KeyedLocks, STUDY_HALL_KEY, course_key
from .redis_client import get_redis, RedisClient

__all__ = ['KeyedLocks', 'STUDY_HALL_KEY', 'course_key', 'get_redis', 'RedisClient']
