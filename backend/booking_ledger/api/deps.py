"""
FastAPI dependencies.
"""

from fastapi import Request

from booking_ledger.services.booking_store import BookingStore


def get_store(request: Request) -> BookingStore:
    """The store built at startup (see main.lifespan)."""
    return request.app.state.store
