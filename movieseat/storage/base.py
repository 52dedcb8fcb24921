"""Persistence interface the booking engine depends on."""

import logging
from abc import ABC, abstractmethod

from movieseat.config import Settings, get_settings
from movieseat.schemas.booking import Booking
from movieseat.schemas.program import Program
from movieseat.storage.seed import default_catalog

logger = logging.getLogger(__name__)


class BaseStore(ABC):
    """
    Durable store for the catalog and the ledger.

    Implementations persist whole snapshots: every save replaces what was
    stored before. Backend I/O errors must surface as ``PersistenceError``.
    """

    name = "base"

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    @abstractmethod
    async def load_catalog(self) -> list[Program]:
        """Load all programs with their showings and seats."""

    @abstractmethod
    async def save_catalog(self, programs: list[Program]) -> None:
        """Replace the stored catalog."""

    @abstractmethod
    async def load_ledger(self) -> list[Booking]:
        """Load active bookings in insertion order."""

    @abstractmethod
    async def save_ledger(self, bookings: list[Booking]) -> None:
        """Replace the stored ledger."""

    @abstractmethod
    async def catalog_exists(self) -> bool:
        """True if a catalog has been persisted before."""

    @abstractmethod
    async def ledger_exists(self) -> bool:
        """True if a ledger has been persisted before."""

    async def seed_if_empty(self) -> bool:
        """
        Materialize the default catalog when no durable state exists.

        Returns:
            True if the default catalog was written
        """
        seeded = False
        if not await self.catalog_exists():
            programs = default_catalog(self.settings)
            await self.save_catalog(programs)
            seeded = True
            logger.info(
                f"Seeded {self.name} store with {len(programs)} program(s): "
                f"{', '.join(p.title for p in programs)}"
            )
        if not await self.ledger_exists():
            await self.save_ledger([])
        return seeded

    async def close(self) -> None:
        """Release backend resources."""
