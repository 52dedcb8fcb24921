"""Persistence backends for the catalog and the ledger."""

import logging

from movieseat.config import Settings
from movieseat.database import create_engine
from movieseat.redis_client import create_redis
from movieseat.storage.base import BaseStore
from movieseat.storage.json_store import JsonFileStore
from movieseat.storage.redis_store import RedisStore
from movieseat.storage.sql_store import SqlStore

logger = logging.getLogger(__name__)


async def create_store(settings: Settings) -> BaseStore:
    """Build the store selected by ``STORAGE_BACKEND``."""
    backend = settings.STORAGE_BACKEND

    if backend == "json":
        store: BaseStore = JsonFileStore(settings.catalog_path, settings.ledger_path, settings)
    elif backend == "redis":
        store = RedisStore(create_redis(settings.redis_url), settings.REDIS_KEY_PREFIX, settings)
    elif backend == "sql":
        store = SqlStore(create_engine(settings.DATABASE_URL, echo=settings.DEBUG), settings)
        await store.create_tables()
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    logger.info(f"Using {store.name} store")
    return store


__all__ = [
    "BaseStore",
    "JsonFileStore",
    "RedisStore",
    "SqlStore",
    "create_store",
]
