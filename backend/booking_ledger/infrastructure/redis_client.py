"""
Redis connection for the redis storage backend (STORAGE_BACKEND=redis).

Store calls run on the event loop, so every Redis round trip blocks it;
the socket timeouts below bound how long a dead server can stall requests.
"""

import redis
from typing import Optional
from booking_ledger.core.config import Settings, settings


class RedisClient:
    """One shared client for the booking slot key."""

    _instance: Optional[redis.Redis] = None

    @classmethod
    def get_client(cls, config: Settings = None) -> redis.Redis:
        if cls._instance is None:
            config = config or settings
            cls._instance = redis.Redis.from_url(
                config.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=config.REDIS_SOCKET_TIMEOUT,
                socket_timeout=config.REDIS_SOCKET_TIMEOUT,
                # A retry would double the time the event loop is blocked
                retry_on_timeout=False,
                health_check_interval=30,
            )
        return cls._instance

    @classmethod
    def close(cls):
        if cls._instance:
            cls._instance.close()
            cls._instance = None


def get_redis() -> redis.Redis:
    return RedisClient.get_client()
