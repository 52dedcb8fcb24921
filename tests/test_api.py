"""
API tests for programs, showings and bookings endpoints
"""

import asyncio

import pytest
from httpx import AsyncClient

from .conftest import SHOWING_ID

BOOKINGS_URL = "/api/v1/bookings"


async def book(client: AsyncClient, customer: str, seats: list[str], showing_id: str = SHOWING_ID):
    return await client.post(
        BOOKINGS_URL,
        json={"customer_name": customer, "showing_id": showing_id, "seat_ids": seats},
    )


async def seat_states(client: AsyncClient, showing_id: str = SHOWING_ID) -> dict[str, str]:
    response = await client.get(f"/api/v1/showings/{showing_id}/seats")
    assert response.status_code == 200
    return {seat["id"]: seat["status"] for seat in response.json()["seats"]}


@pytest.mark.asyncio
class TestCatalogEndpoints:
    """Test read-only catalog endpoints"""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_list_programs(self, client: AsyncClient):
        response = await client.get("/api/v1/programs")

        assert response.status_code == 200
        programs = response.json()
        assert len(programs) == 1
        assert programs[0]["id"] == "m1"
        assert programs[0]["title"] == "Avengers: Endgame"
        assert programs[0]["duration_minutes"] == 180
        assert [s["id"] for s in programs[0]["showings"]] == [SHOWING_ID]
        assert len(programs[0]["showings"][0]["seats"]) == 36

    async def test_showing_seats(self, client: AsyncClient):
        response = await client.get(f"/api/v1/showings/{SHOWING_ID}/seats")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Avengers: Endgame"
        assert data["showing_id"] == SHOWING_ID
        assert "time" in data
        assert data["seats"][0] == {"id": "A1", "status": "available"}
        assert data["available_count"] == 36
        assert data["booked_count"] == 0

    async def test_showing_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/showings/nope/seats")

        assert response.status_code == 404
        assert response.json()["error"] == "showing_not_found"


@pytest.mark.asyncio
class TestBookingEndpoints:
    """Test booking lifecycle over HTTP"""

    async def test_scenario(self, client: AsyncClient):
        response = await book(client, "Alice", ["A1", "A2"])
        assert response.status_code == 201
        alice = response.json()
        assert alice["customer_name"] == "Alice"
        assert alice["seat_ids"] == ["A1", "A2"]
        states = await seat_states(client)
        assert states["A1"] == states["A2"] == "booked"

        response = await book(client, "Bob", ["A2", "A3"])
        assert response.status_code == 409
        assert response.json()["error"] == "seats_unavailable"
        assert response.json()["seats"] == ["A2"]
        assert (await seat_states(client))["A3"] == "available"

        response = await client.delete(f"{BOOKINGS_URL}/{alice['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == alice["id"]
        states = await seat_states(client)
        assert states["A1"] == states["A2"] == "available"

        response = await book(client, "Bob", ["A2", "A3"])
        assert response.status_code == 201

    async def test_empty_seat_list(self, client: AsyncClient):
        response = await book(client, "Alice", [])

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"

    async def test_malformed_body(self, client: AsyncClient):
        response = await client.post(BOOKINGS_URL, json={"customer_name": "Alice"})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"

    async def test_unknown_showing(self, client: AsyncClient):
        response = await book(client, "Alice", ["A1"], showing_id="nope")

        assert response.status_code == 404
        assert response.json()["error"] == "showing_not_found"

    async def test_unknown_seat(self, client: AsyncClient):
        response = await book(client, "Alice", ["A1", "Q7"])

        assert response.status_code == 409
        data = response.json()
        assert data["seats"] == ["Q7"]
        assert data["unknown_seats"] == ["Q7"]
        assert (await seat_states(client))["A1"] == "available"

    async def test_list_and_filter(self, client: AsyncClient):
        alice = (await book(client, "Alice", ["A1"])).json()
        bob = (await book(client, "Bob", ["A2"])).json()

        response = await client.get(BOOKINGS_URL)
        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [alice["id"], bob["id"]]

        response = await client.get(BOOKINGS_URL, params={"customer": "aLi"})
        assert [b["id"] for b in response.json()] == [alice["id"]]

        response = await client.get(BOOKINGS_URL, params={"customer": ""})
        assert len(response.json()) == 2

    async def test_get_booking(self, client: AsyncClient):
        alice = (await book(client, "Alice", ["A5"])).json()

        response = await client.get(f"{BOOKINGS_URL}/{alice['id']}")
        assert response.status_code == 200
        assert response.json() == alice

        response = await client.get(f"{BOOKINGS_URL}/BK-missing")
        assert response.status_code == 404
        assert response.json()["error"] == "booking_not_found"

    async def test_cancel_unknown_booking(self, client: AsyncClient):
        response = await client.delete(f"{BOOKINGS_URL}/BK-missing")

        assert response.status_code == 404
        assert response.json()["error"] == "booking_not_found"

    async def test_persistence_failure(self, client: AsyncClient, store):
        store.fail_catalog = True

        response = await book(client, "Alice", ["A1"])

        assert response.status_code == 503
        assert response.json()["error"] == "persistence_failure"
        store.fail_catalog = False
        assert (await seat_states(client))["A1"] == "available"

    async def test_concurrent_requests(self, client: AsyncClient):
        responses = await asyncio.gather(
            *[book(client, f"User {n}", ["A8", "A9"]) for n in range(10)]
        )

        codes = sorted(r.status_code for r in responses)
        assert codes.count(201) == 1
        assert codes.count(409) == 9
