"""
Booking endpoints: the form, the table, the stats cards and backup files.

Handlers are async so that store calls run one at a time on the event loop.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from booking_ledger.api.deps import get_store
from booking_ledger.core.logging import get_logger
from booking_ledger.schemas.booking import (
    AmountPreviewRequest,
    AmountPreviewResponse,
    BookingInput,
    BookingResponse,
    BookingStats,
    DeleteResponse,
    ImportResponse,
)
from booking_ledger.services.booking_store import BookingStore, backup_filename

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("/", response_model=list[BookingResponse])
async def list_bookings(
    search: Optional[str] = Query(None, description="Matches location, phone or details"),
    store: BookingStore = Depends(get_store),
):
    """List bookings in insertion order, optionally filtered by a search term."""
    return [BookingResponse.from_booking(b) for b in store.list(search)]


@router.get("/stats", response_model=BookingStats)
async def booking_stats(store: BookingStore = Depends(get_store)):
    """Totals over all bookings (the search filter does not apply)."""
    return store.aggregate_statistics()


@router.get("/export")
async def export_bookings(store: BookingStore = Depends(get_store)):
    """Download every booking as a pretty-printed JSON backup file."""
    return Response(
        content=store.export_snapshot(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{backup_filename()}"'},
    )


@router.post("/import", response_model=ImportResponse)
async def import_bookings(
    file: UploadFile = File(..., description="A bookings-backup-*.json file"),
    store: BookingStore = Depends(get_store),
):
    """
    Replace all bookings with the contents of a backup file.

    Returns 400 if the file is not a JSON array of bookings; existing
    bookings are kept in that case.
    """
    payload = await file.read()
    store.import_snapshot(payload)
    return ImportResponse(message="Bookings imported successfully", total=len(store))


@router.post("/preview", response_model=AmountPreviewResponse)
async def preview_remaining_amount(amounts: AmountPreviewRequest):
    """Remaining amount for the values currently typed into the form."""
    return AmountPreviewResponse.for_amounts(amounts.total_price, amounts.paid_amount)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: str, store: BookingStore = Depends(get_store)):
    """Fetch one booking, e.g. to fill the edit form."""
    booking = store.get(booking_id)
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Booking {booking_id} not found",
        )
    return BookingResponse.from_booking(booking)


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(data: BookingInput, store: BookingStore = Depends(get_store)):
    """Add a new booking. date, location and phone are required."""
    booking = store.create_or_update(data)
    return BookingResponse.from_booking(booking)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: str,
    data: BookingInput,
    store: BookingStore = Depends(get_store),
):
    """
    Overwrite a booking's fields, keeping its id and creation time.

    An unknown id behaves like a create, as the form does.
    """
    booking = store.create_or_update(data, editing_id=booking_id)
    return BookingResponse.from_booking(booking)


@router.delete("/{booking_id}", response_model=DeleteResponse)
async def delete_booking(booking_id: str, store: BookingStore = Depends(get_store)):
    """Delete a booking. Deleting an unknown id is not an error."""
    store.delete(booking_id)
    return DeleteResponse(message="Booking deleted successfully", booking_id=booking_id)
