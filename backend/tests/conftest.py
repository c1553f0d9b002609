"""
Pytest fixtures for the booking store, storage slots and HTTP client.

Every test gets a fresh in-memory storage slot, so nothing touches disk
or Redis unless a test asks for it.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from booking_ledger.main import app
from booking_ledger.api.deps import get_store
from booking_ledger.schemas.booking import Booking
from booking_ledger.services.booking_store import BookingStore
from booking_ledger.services.interfaces.storage import dump_bookings
from booking_ledger.services.storage import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    """Empty in-memory storage slot."""
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> BookingStore:
    """Store backed by the empty slot."""
    return BookingStore(storage)


@pytest.fixture
def stored_bookings() -> list[Booking]:
    """Two bookings as they would sit in a previously saved slot."""
    return [
        Booking(
            id="1760000000000",
            date="2026-11-02",
            location="Al Nakheel Hall",
            phone="0551234567",
            total_price=1000,
            paid_amount=400,
            details="Wedding, 200 guests",
            created_at="2026-10-01T08:15:00.000Z",
        ),
        Booking(
            id="1760000000001",
            date="2026-11-09",
            location="Riverside Garden",
            phone="0509876543",
            total_price=500,
            paid_amount=500,
            details="Birthday dinner",
            created_at="2026-10-02T17:40:00.000Z",
        ),
    ]


@pytest.fixture
def seeded_storage(stored_bookings: list[Booking]) -> MemoryStorage:
    return MemoryStorage(dump_bookings(stored_bookings))


@pytest.fixture
def seeded_store(seeded_storage: MemoryStorage) -> BookingStore:
    return BookingStore(seeded_storage)


@pytest_asyncio.fixture(scope="function")
async def client(seeded_store: BookingStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose routes use the seeded test store."""
    app.dependency_overrides[get_store] = lambda: seeded_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def empty_client(store: BookingStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client over a store with no bookings."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
