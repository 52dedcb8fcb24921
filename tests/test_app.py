"""
Tests for application startup
"""

import pytest
from httpx import ASGITransport, AsyncClient

from movieseat.main import create_app
from movieseat.schemas.seat import SeatStatus
from movieseat.services.booking_service import BookingService
from movieseat.storage.json_store import JsonFileStore


@pytest.mark.asyncio
class TestLifespan:
    """Test store creation, seeding and reconciliation at startup"""

    async def test_startup_seeds_store(self, settings):
        app = create_app(settings)

        async with app.router.lifespan_context(app):
            assert isinstance(app.state.booking_service, BookingService)
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
                response = await ac.get("/api/v1/showings/s1/seats")

        assert response.status_code == 200
        assert len(response.json()["seats"]) == 36
        assert settings.catalog_path.exists()
        assert settings.ledger_path.exists()

    async def test_startup_reconciles_drift(self, settings):
        store = JsonFileStore(settings.catalog_path, settings.ledger_path, settings)
        await store.seed_if_empty()
        programs = await store.load_catalog()
        # A seat marked booked with no booking behind it
        programs[0].showings[0].seats[0].status = SeatStatus.BOOKED
        await store.save_catalog(programs)

        app = create_app(settings)
        async with app.router.lifespan_context(app):
            seats = app.state.booking_service.get_showing_seats("s1").seats
            assert seats[0].status == SeatStatus.AVAILABLE

        reloaded = await store.load_catalog()
        assert reloaded[0].showings[0].seats[0].status == SeatStatus.AVAILABLE
