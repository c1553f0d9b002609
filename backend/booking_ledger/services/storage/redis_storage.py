"""
Redis-backed storage slot: the collection is one string key.
"""

from typing import Optional

import redis

from booking_ledger.services.interfaces.storage import StorageAdapter


class RedisStorage(StorageAdapter):
    """
    Stores the serialized collection under a single key (default "bookings").
    No TTL: the slot is durable until overwritten.
    """

    name = "redis"

    def __init__(self, client: redis.Redis, key: str = "bookings"):
        self.client = client
        self.key = key

    def read(self) -> Optional[str]:
        value = self.client.get(self.key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def write(self, payload: str) -> None:
        self.client.set(self.key, payload)
