"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .redis_client import get_redis, close_redis, RedisClient
from .unit_of_work import SqlAlchemyUnitOfWork, get_unit_of_work

__all__ = ['get_redis', 'close_redis', 'RedisClient', 'SqlAlchemyUnitOfWork', 'get_unit_of_work']
