"""
Booking store: the in-memory booking collection mirrored to a storage slot.

PERSISTENCE
===========

The collection is loaded once when the store is built and written back
in full at the end of every mutating operation (create, update, delete,
import). Writes are fire-and-forget; the storage adapter logs failures.

One asymmetry is kept on purpose: a mutation that leaves the collection
empty does NOT write. Deleting the last booking therefore leaves the slot
holding its previous contents, and the booking reappears on the next
start. Callers that want a real "clear" must empty the slot themselves.
"""

import json
import uuid
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from booking_ledger.core.errors import FormatError, ValidationError
from booking_ledger.core.logging import get_logger
from booking_ledger.core.metrics import (
    record_booking_operation,
    record_collection_size,
    record_storage_operation,
)
from booking_ledger.schemas.booking import Booking, BookingInput, BookingStats
from booking_ledger.services.amounts import remaining_amount
from booking_ledger.services.interfaces.storage import (
    StorageAdapter,
    booking_list_adapter,
    dump_bookings,
    find_duplicate_id,
)

logger = get_logger(__name__)

BACKUP_FILENAME_PATTERN = "bookings-backup-{date}.json"


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string with milliseconds, e.g. 2026-10-18T09:30:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def backup_filename(today: Optional[date] = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return BACKUP_FILENAME_PATTERN.format(date=today.isoformat())


class BookingStore:
    """
    Ordered booking collection with create/update/delete/search/import/export.

    Single-threaded: every method runs to completion on the caller's thread.
    """

    def __init__(self, storage: StorageAdapter):
        self.storage = storage
        self._bookings: list[Booking] = storage.load()
        record_collection_size(len(self._bookings))
        logger.info("booking_store_ready", count=len(self._bookings), backend=storage.name)

    def __len__(self) -> int:
        return len(self._bookings)

    def _persist(self, operation: str) -> None:
        if not self._bookings:
            logger.info("storage_save_skipped", operation=operation, reason="empty_collection")
            record_storage_operation("save", "skipped")
            return
        self.storage.save(self._bookings)

    def _new_id(self) -> str:
        existing = {b.id for b in self._bookings}
        while True:
            booking_id = uuid.uuid4().hex
            if booking_id not in existing:
                return booking_id

    def _index_of(self, booking_id: str) -> Optional[int]:
        for index, booking in enumerate(self._bookings):
            if booking.id == booking_id:
                return index
        return None

    def get(self, booking_id: str) -> Optional[Booking]:
        index = self._index_of(booking_id)
        return None if index is None else self._bookings[index]

    def create_or_update(
        self,
        data: Union[BookingInput, Mapping[str, Any]],
        editing_id: Optional[str] = None,
    ) -> Booking:
        """
        Submit the booking form.

        With ``editing_id`` naming an existing booking, that booking is
        replaced in place (same id, same createdAt). Otherwise a new booking
        is appended. Raises ValidationError if date, location or phone is empty.
        """
        if not isinstance(data, BookingInput):
            data = BookingInput.model_validate(data)

        missing = data.missing_fields()
        if missing:
            logger.warning("booking_rejected", missing_fields=missing, editing_id=editing_id)
            raise ValidationError(missing)

        total_price = data.parsed_total_price
        paid_amount = data.parsed_paid_amount
        fields = dict(
            date=data.date,
            location=data.location,
            phone=data.phone,
            total_price=total_price,
            paid_amount=paid_amount,
            remaining_amount=remaining_amount(total_price, paid_amount),
            details=data.details or "",
        )

        index = self._index_of(editing_id) if editing_id is not None else None
        if index is not None:
            current = self._bookings[index]
            booking = Booking(id=current.id, created_at=current.created_at, **fields)
            self._bookings[index] = booking
            operation = "update"
        else:
            if editing_id is not None:
                logger.info("booking_edit_target_missing", editing_id=editing_id)
            booking = Booking(id=self._new_id(), created_at=utc_timestamp(), **fields)
            self._bookings.append(booking)
            operation = "create"

        record_booking_operation(operation, len(self._bookings))
        logger.info(
            f"booking_{operation}d",
            booking_id=booking.id,
            total_price=booking.total_price,
            paid_amount=booking.paid_amount,
            remaining_amount=booking.remaining_amount,
        )
        self._persist(operation)
        return booking

    def delete(self, booking_id: str) -> None:
        """Remove a booking. Unknown ids are ignored."""
        index = self._index_of(booking_id)
        if index is None:
            logger.info("booking_delete_noop", booking_id=booking_id)
        else:
            del self._bookings[index]
            record_booking_operation("delete", len(self._bookings))
            logger.info("booking_deleted", booking_id=booking_id, remaining=len(self._bookings))
        self._persist("delete")

    def list(self, search_term: Optional[str] = None) -> list[Booking]:
        """
        Bookings in collection order, optionally filtered.

        A booking matches when the term appears in its location or details
        (case-insensitive) or in its phone number (literal).
        """
        if not search_term:
            return list(self._bookings)

        needle = search_term.lower()
        return [
            booking
            for booking in self._bookings
            if needle in booking.location.lower()
            or search_term in booking.phone
            or needle in booking.details.lower()
        ]

    def aggregate_statistics(self) -> BookingStats:
        """Totals over the whole collection, regardless of any search filter."""
        return BookingStats(
            total=len(self._bookings),
            total_revenue=sum(b.total_price for b in self._bookings),
            total_paid=sum(b.paid_amount for b in self._bookings),
            total_remaining=sum(b.remaining_amount for b in self._bookings),
        )

    def export_snapshot(self) -> bytes:
        """Pretty-printed JSON array of every booking."""
        record_booking_operation("export", len(self._bookings))
        logger.info("bookings_exported", count=len(self._bookings))
        return dump_bookings(self._bookings, indent=2).encode("utf-8")

    def import_snapshot(self, data: Union[bytes, str]) -> None:
        """
        Replace the whole collection with a previously exported snapshot.

        Raises FormatError if the data is not a JSON array of bookings or
        repeats an id. The current collection is untouched on failure.
        """
        try:
            raw = json.loads(data)
        except (UnicodeDecodeError, ValueError) as e:
            raise FormatError(f"invalid JSON ({e})") from e

        if not isinstance(raw, list):
            raise FormatError(f"expected a JSON array, got {type(raw).__name__}")

        try:
            bookings = booking_list_adapter.validate_python(raw)
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise FormatError(f"{location}: {first['msg']}") from e

        duplicate = find_duplicate_id(bookings)
        if duplicate is not None:
            raise FormatError(f"duplicate booking id {duplicate!r}")

        rederived = [
            b.id
            for b, item in zip(bookings, raw)
            if item.get("remainingAmount", b.remaining_amount) != b.remaining_amount
        ]
        if rederived:
            logger.warning("import_remaining_amount_rederived", booking_ids=rederived)

        previous = len(self._bookings)
        self._bookings = bookings
        logger.info("bookings_imported", count=len(bookings), replaced=previous)
        record_booking_operation("import", len(self._bookings))
        self._persist("import")
