"""Flat JSON file store."""

import asyncio
import os
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from movieseat.config import Settings
from movieseat.errors import PersistenceError
from movieseat.schemas.booking import Booking
from movieseat.schemas.program import Program
from movieseat.storage.base import BaseStore

_programs_adapter = TypeAdapter(list[Program])
_bookings_adapter = TypeAdapter(list[Booking])


class JsonFileStore(BaseStore):
    """
    Store keeping the catalog and the ledger in two JSON files.

    Files are rewritten whole on every save, through a temporary file and
    an atomic rename, so a crash never leaves a half-written file behind.
    File I/O runs in a worker thread.
    """

    name = "json"

    def __init__(
        self,
        catalog_path: Path,
        ledger_path: Path,
        settings: Settings | None = None,
    ):
        super().__init__(settings)
        self.catalog_path = Path(catalog_path)
        self.ledger_path = Path(ledger_path)

    async def load_catalog(self) -> list[Program]:
        return await self._read(self.catalog_path, _programs_adapter)

    async def save_catalog(self, programs: list[Program]) -> None:
        await self._write(self.catalog_path, _programs_adapter, programs)

    async def load_ledger(self) -> list[Booking]:
        return await self._read(self.ledger_path, _bookings_adapter)

    async def save_ledger(self, bookings: list[Booking]) -> None:
        await self._write(self.ledger_path, _bookings_adapter, bookings)

    async def catalog_exists(self) -> bool:
        return await asyncio.to_thread(self.catalog_path.exists)

    async def ledger_exists(self) -> bool:
        return await asyncio.to_thread(self.ledger_path.exists)

    async def _read(self, path: Path, adapter: TypeAdapter) -> list[Any]:
        try:
            return await asyncio.to_thread(self._read_sync, path, adapter)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

    async def _write(self, path: Path, adapter: TypeAdapter, data: list[Any]) -> None:
        try:
            await asyncio.to_thread(self._write_sync, path, adapter, data)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to write {path}: {e}") from e

    @staticmethod
    def _read_sync(path: Path, adapter: TypeAdapter) -> list[Any]:
        if not path.exists():
            return []
        return adapter.validate_json(path.read_bytes())

    @staticmethod
    def _write_sync(path: Path, adapter: TypeAdapter, data: list[Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_bytes(adapter.dump_json(data, indent=2))
            os.replace(tmp_path, path)
        finally:
            # Only still present when the rename did not happen
            tmp_path.unlink(missing_ok=True)
