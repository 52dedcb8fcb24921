"""
Test configuration and fixtures
"""

import asyncio
from datetime import datetime
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from movieseat.config import Settings
from movieseat.errors import PersistenceError
from movieseat.schemas.booking import Booking
from movieseat.schemas.program import Program, Showing
from movieseat.services.booking_service import BookingService
from movieseat.storage.json_store import JsonFileStore
from movieseat.storage.seed import build_seats

SHOWING_ID = "s1"


class FlakyStore(JsonFileStore):
    """JSON store whose saves can be made to fail on demand."""

    def __init__(self, catalog_path: Path, ledger_path: Path, settings: Settings | None = None):
        super().__init__(catalog_path, ledger_path, settings)
        self.fail_catalog = False
        self.fail_ledger = False
        self.saves = 0

    async def save_catalog(self, programs: list[Program]) -> None:
        if self.fail_catalog:
            raise PersistenceError("catalog write failed")
        await super().save_catalog(programs)
        self.saves += 1

    async def save_ledger(self, bookings: list[Booking]) -> None:
        if self.fail_ledger:
            raise PersistenceError("ledger write failed")
        await super().save_ledger(bookings)


class GatedStore(FlakyStore):
    """
    JSON store that can park the first catalog save on a gate and fail a
    chosen catalog save call.
    """

    def __init__(self, catalog_path: Path, ledger_path: Path, settings: Settings | None = None):
        super().__init__(catalog_path, ledger_path, settings)
        self.gate: asyncio.Event | None = None
        self.parked = asyncio.Event()
        self.fail_on_call: int | None = None
        self.catalog_calls = 0

    async def save_catalog(self, programs: list[Program]) -> None:
        self.catalog_calls += 1
        call = self.catalog_calls
        if call == 1 and self.gate is not None:
            self.parked.set()
            await self.gate.wait()
        if call == self.fail_on_call:
            raise PersistenceError(f"catalog write {call} failed")
        await super().save_catalog(programs)


def multi_showing_catalog() -> list[Program]:
    """Two programs, three showings, eight seats each"""
    return [
        Program(
            id="m1",
            title="Avengers: Endgame",
            duration_minutes=180,
            showings=[
                Showing(id="s1", time=datetime(2026, 5, 1, 18, 0), seats=build_seats(8)),
                Showing(id="s2", time=datetime(2026, 5, 1, 21, 30), seats=build_seats(8)),
            ],
        ),
        Program(
            id="m2",
            title="Spirited Away",
            duration_minutes=125,
            showings=[
                Showing(id="s3", time=datetime(2026, 5, 2, 15, 0), seats=build_seats(8)),
            ],
        ),
    ]


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing every store at a temporary directory"""
    return Settings(
        STORAGE_BACKEND="json",
        DATA_DIR=tmp_path,
        DATABASE_URL="sqlite+aiosqlite://",
        REDIS_KEY_PREFIX=f"movieseat-test-{tmp_path.name}",
        SEED_SEAT_COUNT=36,
    )


@pytest.fixture
def store(settings) -> FlakyStore:
    """JSON file store with failure switches"""
    return FlakyStore(settings.catalog_path, settings.ledger_path, settings)


@pytest_asyncio.fixture
async def booking_service(store) -> BookingService:
    """Booking service over a freshly seeded store (showing s1, seats A1..A36)"""
    await store.seed_if_empty()
    return await BookingService.load(store)


@pytest_asyncio.fixture
async def client(settings, booking_service):
    """HTTP client bound to an app wrapping the test booking service"""
    from movieseat.main import create_app

    app = create_app(settings, booking_service=booking_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def gated_store(settings) -> GatedStore:
    """JSON store whose saves can be parked or failed by call number"""
    return GatedStore(settings.catalog_path, settings.ledger_path, settings)


@pytest_asyncio.fixture
async def multi_showing_service(gated_store) -> BookingService:
    """Booking service over a catalog with showings s1, s2 and s3"""
    await gated_store.save_catalog(multi_showing_catalog())
    await gated_store.save_ledger([])
    gated_store.catalog_calls = 0
    return await BookingService.load(gated_store)
