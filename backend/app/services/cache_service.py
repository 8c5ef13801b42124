"""
Redis caching for the booking read endpoint.

CACHING STRATEGY
================

What we cache:
  - The serialized GET /booking response, one key per user
  - Cache key pattern: "booking:user:{user_id}"
  - Generation counter per user: "booking:user:{user_id}:gen"

Invalidation strategy:
  - POST /booking and PUT /booking bump the caller's generation and delete
    the cached entry after commit
  - A reader takes the generation before it reads the database and stores
    its result tagged with that generation. An entry whose generation no
    longer matches the counter is treated as a miss, so a read that raced a
    write can never be served after the write's invalidation.
  - TTL-based expiry as safety net (BOOKING_CACHE_TTL)

  The embedded room capacity changes whenever anyone books that room, so a
  cached response may show a capacity up to one TTL old. Capacity decisions
  are never taken from the cache: the booking service always reads the
  database.

Redis is advisory. Every function here is a no-op when Redis is disabled
or unreachable, and cache errors are logged instead of failing the request.
"""

import json
from typing import Optional

from redis.exceptions import RedisError

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.metrics import record_cache_operation
from app.infrastructure.redis_client import get_redis

logger = get_logger(__name__)


def _make_booking_key(user_id: int) -> str:
    return f"booking:user:{user_id}"


def _make_generation_key(user_id: int) -> str:
    return f"booking:user:{user_id}:gen"


async def get_cache_generation(user_id: int) -> Optional[int]:
    """
    Current invalidation generation for the user's cached booking.
    Take it before reading the database and pass it to set_cached_booking.
    None means the result must not be cached.
    """
    client = await get_redis()
    if not client:
        return None

    key = _make_generation_key(user_id)
    try:
        value = await client.get(key)
    except RedisError as e:
        logger.error("cache_get_error", key=key, error=str(e))
        return None
    return int(value or 0)


async def get_cached_booking(user_id: int) -> Optional[dict]:
    client = await get_redis()
    if not client:
        return None

    key = _make_booking_key(user_id)
    try:
        data, generation = await client.mget(key, _make_generation_key(user_id))
    except RedisError as e:
        logger.error("cache_get_error", key=key, error=str(e))
        return None

    entry = json.loads(data) if data else None
    if entry and entry["generation"] != int(generation or 0):
        logger.info("cache_stale", key=key, generation=entry["generation"])
        entry = None

    record_cache_operation("get", hit=entry is not None)
    if entry:
        logger.debug("cache_hit", key=key)
        return entry["booking"]
    logger.debug("cache_miss", key=key)
    return None


async def set_cached_booking(user_id: int, data: dict, generation: Optional[int]) -> None:
    """Store a GET /booking response read under the given generation."""
    if generation is None:
        return
    client = await get_redis()
    if not client:
        return

    settings = get_settings()
    key = _make_booking_key(user_id)
    entry = {"generation": generation, "booking": data}
    try:
        current = int(await client.get(_make_generation_key(user_id)) or 0)
        if current != generation:
            logger.info("cache_set_skipped", key=key, generation=generation, current=current)
            return
        await client.setex(key, settings.BOOKING_CACHE_TTL, json.dumps(entry, default=str))
        logger.debug("cache_set", key=key, ttl=settings.BOOKING_CACHE_TTL)
    except RedisError as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_booking_cache(user_id: int) -> None:
    client = await get_redis()
    if not client:
        return

    key = _make_booking_key(user_id)
    try:
        # Bump first: a reader that stores after this point is already stale
        generation = await client.incr(_make_generation_key(user_id))
        await client.delete(key)
        logger.info("cache_invalidated", key=key, generation=generation)
    except RedisError as e:
        logger.error("cache_invalidation_error", key=key, error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
    except RedisError as e:
        return {"status": "error", "error": str(e)}

    hits = info.get("keyspace_hits", 0)
    misses = info.get("keyspace_misses", 0)
    return {
        "status": "connected",
        "hits": hits,
        "misses": misses,
        "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
    }
