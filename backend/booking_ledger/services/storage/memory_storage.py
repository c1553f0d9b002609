"""
In-process storage slot. Keeps the serialized string, like the real backends.
"""

from typing import Optional

from booking_ledger.services.interfaces.storage import StorageAdapter


class MemoryStorage(StorageAdapter):

    name = "memory"

    def __init__(self, initial: Optional[str] = None):
        self.value = initial
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.value

    def write(self, payload: str) -> None:
        self.value = payload
        self.writes += 1
