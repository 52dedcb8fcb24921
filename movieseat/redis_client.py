"""Redis client for the Redis-backed store."""

import redis.asyncio as redis


def create_redis(redis_url: str) -> redis.Redis:
    """Create a Redis client for the given URL."""
    return redis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
