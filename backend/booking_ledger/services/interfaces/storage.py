"""
Storage slot interface.
The booking store only depends on this; backends can be swapped by config.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from booking_ledger.core.logging import get_logger
from booking_ledger.core.metrics import record_storage_operation
from booking_ledger.schemas.booking import Booking

logger = get_logger(__name__)

booking_list_adapter = TypeAdapter(list[Booking])


def find_duplicate_id(bookings: Sequence[Booking]) -> Optional[str]:
    """First id that appears more than once, or None when every id is unique."""
    seen: set[str] = set()
    for booking in bookings:
        if booking.id in seen:
            return booking.id
        seen.add(booking.id)
    return None


def dump_bookings(bookings: Sequence[Booking], indent: Optional[int] = None) -> str:
    """Serialize bookings to the JSON array stored in the slot."""
    return booking_list_adapter.dump_json(
        list(bookings), by_alias=True, indent=indent
    ).decode("utf-8")


class StorageAdapter(ABC):
    """
    Durable storage for the whole booking collection as one serialized value.

    Implementations:
    - FileStorage: JSON file on local disk
    - RedisStorage: a single Redis string key
    - MemoryStorage: in-process string, for tests

    Subclasses only move raw text in and out of the slot; decoding,
    error logging and metrics are handled here so every backend degrades
    the same way.
    """

    name = "storage"

    @abstractmethod
    def read(self) -> Optional[str]:
        """Return the raw slot value, or None if nothing is stored."""
        pass

    @abstractmethod
    def write(self, payload: str) -> None:
        """Overwrite the slot with a serialized collection."""
        pass

    def load(self) -> list[Booking]:
        """Load the stored collection. Never raises; failures yield []."""
        try:
            raw = self.read()
        except Exception as e:
            logger.error("storage_load_failed", backend=self.name, error=str(e))
            record_storage_operation("load", "error")
            return []

        if not raw:
            logger.info("storage_empty", backend=self.name)
            record_storage_operation("load", "ok")
            return []

        try:
            bookings = booking_list_adapter.validate_json(raw)
        except PydanticValidationError as e:
            logger.error(
                "storage_parse_failed",
                backend=self.name,
                errors=e.error_count(),
                error=str(e),
            )
            record_storage_operation("load", "error")
            return []

        duplicate = find_duplicate_id(bookings)
        if duplicate is not None:
            logger.error("storage_duplicate_id", backend=self.name, booking_id=duplicate)
            record_storage_operation("load", "error")
            return []

        logger.info("storage_loaded", backend=self.name, count=len(bookings))
        record_storage_operation("load", "ok")
        return bookings

    def save(self, bookings: Sequence[Booking]) -> None:
        """Persist the collection. Fire-and-forget: failures are logged only."""
        try:
            self.write(dump_bookings(bookings))
        except Exception as e:
            logger.error("storage_save_failed", backend=self.name, error=str(e))
            record_storage_operation("save", "error")
            return

        logger.debug("storage_saved", backend=self.name, count=len(bookings))
        record_storage_operation("save", "ok")
