"""
Tests for the booking endpoints.
"""

import json

import pytest
from httpx import AsyncClient

from booking_ledger.services.booking_store import BookingStore


NEW_BOOKING = {
    "date": "2026-12-20",
    "location": "Sea View Terrace",
    "phone": "0533334444",
    "totalPrice": "2500",
    "paidAmount": "1000",
    "details": "Graduation",
}


@pytest.mark.asyncio
async def test_list_bookings(client: AsyncClient):
    """Bookings come back in insertion order with table fields."""
    response = await client.get("/api/v1/bookings/")
    assert response.status_code == 200
    data = response.json()
    assert [b["id"] for b in data] == ["1760000000000", "1760000000001"]
    assert data[0]["remainingAmount"] == 600
    assert data[0]["paymentStatus"] == "due"
    assert data[0]["displayDate"] == "02/11/2026"
    assert data[1]["paymentStatus"] == "settled"


@pytest.mark.asyncio
async def test_search_bookings(client: AsyncClient):
    response = await client.get("/api/v1/bookings/", params={"search": "GARDEN"})
    assert response.status_code == 200
    assert [b["location"] for b in response.json()] == ["Riverside Garden"]


@pytest.mark.asyncio
async def test_create_booking(client: AsyncClient, seeded_store: BookingStore):
    response = await client.post("/api/v1/bookings/", json=NEW_BOOKING)
    assert response.status_code == 201
    data = response.json()
    assert data["location"] == "Sea View Terrace"
    assert data["totalPrice"] == 2500
    assert data["paidAmount"] == 1000
    assert data["remainingAmount"] == 1500
    assert data["createdAt"]
    assert len(seeded_store) == 3


@pytest.mark.asyncio
async def test_create_booking_missing_required_field(client: AsyncClient, seeded_store: BookingStore):
    """Empty date returns 422 and nothing is stored."""
    response = await client.post("/api/v1/bookings/", json={**NEW_BOOKING, "date": ""})
    assert response.status_code == 422
    assert "date" in response.json()["detail"]
    assert len(seeded_store) == 2


@pytest.mark.asyncio
async def test_create_booking_with_bad_amounts(client: AsyncClient):
    """Unparsable amounts are stored as 0 rather than rejected."""
    response = await client.post(
        "/api/v1/bookings/",
        json={**NEW_BOOKING, "totalPrice": "lots", "paidAmount": ""},
    )
    assert response.status_code == 201
    data = response.json()
    assert (data["totalPrice"], data["paidAmount"], data["remainingAmount"]) == (0, 0, 0)


@pytest.mark.asyncio
async def test_get_booking(client: AsyncClient):
    response = await client.get("/api/v1/bookings/1760000000000")
    assert response.status_code == 200
    assert response.json()["location"] == "Al Nakheel Hall"


@pytest.mark.asyncio
async def test_get_booking_not_found(client: AsyncClient):
    response = await client.get("/api/v1/bookings/99999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_booking(client: AsyncClient):
    """Editing keeps id and createdAt."""
    response = await client.put(
        "/api/v1/bookings/1760000000000",
        json={**NEW_BOOKING, "paidAmount": "2500"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "1760000000000"
    assert data["createdAt"] == "2026-10-01T08:15:00.000Z"
    assert data["location"] == "Sea View Terrace"
    assert data["remainingAmount"] == 0
    assert data["paymentStatus"] == "settled"


@pytest.mark.asyncio
async def test_delete_booking(client: AsyncClient, seeded_store: BookingStore):
    response = await client.delete("/api/v1/bookings/1760000000000")
    assert response.status_code == 200
    assert response.json()["booking_id"] == "1760000000000"
    assert seeded_store.get("1760000000000") is None


@pytest.mark.asyncio
async def test_delete_unknown_booking(client: AsyncClient, seeded_store: BookingStore):
    """Deleting an unknown id is not an error."""
    response = await client.delete("/api/v1/bookings/nonexistent-id")
    assert response.status_code == 200
    assert len(seeded_store) == 2


@pytest.mark.asyncio
async def test_booking_stats(client: AsyncClient):
    response = await client.get("/api/v1/bookings/stats")
    assert response.status_code == 200
    assert response.json() == {
        "total": 2,
        "totalRevenue": 1500,
        "totalPaid": 900,
        "totalRemaining": 600,
    }


@pytest.mark.asyncio
async def test_export_bookings(client: AsyncClient):
    response = await client.get("/api/v1/bookings/export")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="bookings-backup-')
    assert disposition.endswith('.json"')
    assert len(response.json()) == 2


@pytest.mark.asyncio
async def test_import_bookings(empty_client: AsyncClient, store: BookingStore, seeded_store: BookingStore):
    """A backup exported from one ledger restores into another."""
    exported = seeded_store.export_snapshot()

    response = await empty_client.post(
        "/api/v1/bookings/import",
        files={"file": ("bookings-backup-2026-10-18.json", exported, "application/json")},
    )
    assert response.status_code == 200
    assert response.json()["total"] == 2
    assert [b.id for b in store.list()] == ["1760000000000", "1760000000001"]


@pytest.mark.asyncio
async def test_import_bad_file(client: AsyncClient, seeded_store: BookingStore):
    """A file that is not a bookings array returns 400 and keeps existing data."""
    response = await client.post(
        "/api/v1/bookings/import",
        files={"file": ("notes.json", json.dumps({"hello": "world"}).encode(), "application/json")},
    )
    assert response.status_code == 400
    assert "Could not import" in response.json()["detail"]
    assert len(seeded_store) == 2


@pytest.mark.asyncio
async def test_preview_remaining_amount(empty_client: AsyncClient):
    response = await empty_client.post(
        "/api/v1/bookings/preview",
        json={"totalPrice": "1500", "paidAmount": "250"},
    )
    assert response.status_code == 200
    assert response.json() == {"remainingAmount": 1250, "display": "1,250 ر.س"}


@pytest.mark.asyncio
async def test_health_check(empty_client: AsyncClient):
    response = await empty_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_metrics_endpoint(client: AsyncClient):
    await client.post("/api/v1/bookings/", json=NEW_BOOKING)
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "booking_operations_total" in response.text
