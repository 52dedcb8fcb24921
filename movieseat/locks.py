"""In-process locks guarding each showing's seat map and the ledger."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Literal

logger = logging.getLogger(__name__)

GLOBAL_KEY = "*"


class ShowingLocks:
    """
    Registry of ``asyncio.Lock`` objects keyed by showing id.

    With ``scope="showing"`` every showing gets its own lock, so
    operations on different showings run in parallel. With
    ``scope="global"`` every key maps to one shared lock.
    """

    def __init__(self, scope: Literal["showing", "global"] = "showing"):
        if scope not in ("showing", "global"):
            raise ValueError(f"Unknown lock scope: {scope}")
        self.scope = scope
        self._locks: dict[str, asyncio.Lock] = {}

    def _key(self, showing_id: str) -> str:
        return GLOBAL_KEY if self.scope == "global" else showing_id

    def lock_for(self, showing_id: str) -> asyncio.Lock:
        """Get the lock for a showing, creating it on first use."""
        key = self._key(showing_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def is_locked(self, showing_id: str) -> bool:
        lock = self._locks.get(self._key(showing_id))
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, showing_id: str) -> AsyncGenerator[asyncio.Lock, None]:
        """
        Context manager for a showing's critical section.

        Usage:
            async with locks.hold("s1"):
                # check, mutate and persist
                ...
        """
        if self.is_locked(showing_id):
            logger.debug(f"Showing {showing_id} is busy, waiting for its lock")
        lock = self.lock_for(showing_id)
        async with lock:
            yield lock
