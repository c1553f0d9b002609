from booking_ledger.schemas.booking import (
    Booking, BookingInput, BookingStats, BookingResponse,
    AmountPreviewRequest, AmountPreviewResponse, ImportResponse, DeleteResponse,
)

__all__ = [
    "Booking", "BookingInput", "BookingStats", "BookingResponse",
    "AmountPreviewRequest", "AmountPreviewResponse", "ImportResponse", "DeleteResponse",
]
