"""Redis key-value store."""

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from movieseat.config import Settings
from movieseat.errors import PersistenceError
from movieseat.schemas.booking import Booking
from movieseat.schemas.program import Program
from movieseat.storage.base import BaseStore


class RedisStore(BaseStore):
    """
    Store keeping state in Redis.

    Layout under ``<prefix>``:
        <prefix>:programs       hash, program id -> program JSON
        <prefix>:program_order  list of program ids
        <prefix>:bookings       list of booking JSON in ledger order
        <prefix>:ledger_init    marker set once a ledger was saved

    Each save runs as one MULTI/EXEC transaction.
    """

    name = "redis"

    def __init__(
        self,
        redis_client: redis.Redis,
        key_prefix: str = "movieseat",
        settings: Settings | None = None,
    ):
        super().__init__(settings)
        self.redis = redis_client
        self.programs_key = f"{key_prefix}:programs"
        self.order_key = f"{key_prefix}:program_order"
        self.bookings_key = f"{key_prefix}:bookings"
        self.ledger_marker_key = f"{key_prefix}:ledger_init"

    async def load_catalog(self) -> list[Program]:
        try:
            order = await self.redis.lrange(self.order_key, 0, -1)
            data = await self.redis.hgetall(self.programs_key)
            return [
                Program.model_validate_json(data[program_id])
                for program_id in order
                if program_id in data
            ]
        except (RedisError, ValidationError) as e:
            raise PersistenceError(f"Failed to load catalog from Redis: {e}") from e

    async def save_catalog(self, programs: list[Program]) -> None:
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(self.programs_key, self.order_key)
                if programs:
                    pipe.hset(
                        self.programs_key,
                        mapping={p.id: p.model_dump_json() for p in programs},
                    )
                    pipe.rpush(self.order_key, *[p.id for p in programs])
                await pipe.execute()
        except RedisError as e:
            raise PersistenceError(f"Failed to save catalog to Redis: {e}") from e

    async def load_ledger(self) -> list[Booking]:
        try:
            raw = await self.redis.lrange(self.bookings_key, 0, -1)
            return [Booking.model_validate_json(item) for item in raw]
        except (RedisError, ValidationError) as e:
            raise PersistenceError(f"Failed to load ledger from Redis: {e}") from e

    async def save_ledger(self, bookings: list[Booking]) -> None:
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(self.bookings_key)
                if bookings:
                    pipe.rpush(self.bookings_key, *[b.model_dump_json() for b in bookings])
                pipe.set(self.ledger_marker_key, "1")
                await pipe.execute()
        except RedisError as e:
            raise PersistenceError(f"Failed to save ledger to Redis: {e}") from e

    async def catalog_exists(self) -> bool:
        try:
            return await self.redis.exists(self.order_key) == 1
        except RedisError as e:
            raise PersistenceError(f"Failed to query Redis: {e}") from e

    async def ledger_exists(self) -> bool:
        try:
            return await self.redis.exists(self.ledger_marker_key) == 1
        except RedisError as e:
            raise PersistenceError(f"Failed to query Redis: {e}") from e

    async def close(self) -> None:
        """Close the store's Redis client."""
        await self.redis.aclose()
