"""
Redis caching service for the current-reservation lookup.

CACHING STRATEGY
================

What we cache:
  - GET /booking responses (JSON-serialized booking + room)
  - Cache key pattern: "booking:user:{user_id}"

Why:
  - Users poll their reservation far more often than they change it
  - The payload only changes through this service

Invalidation strategy:
  - On reservation: delete the user's key
  - On room change: delete the user's key
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

Why NOT cache rooms or occupancy:
  - Capacity checks need real-time booking counts (stale data = overbooking)

Redis is optional. When disabled or unreachable every call here is a no-op
and reads fall through to the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from hotel_booking.core.config import get_settings
from hotel_booking.core.logging import get_logger
from hotel_booking.core.metrics import record_cache_operation, redis_connection_errors

logger = get_logger(__name__)
settings = get_settings()

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            # Test connection
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            redis_connection_errors.inc()
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def _make_booking_key(user_id: int) -> str:
    return f"booking:user:{user_id}"


async def get_cached_booking(user_id: int) -> Optional[dict]:
    """Retrieve the cached reservation payload for a user."""
    client = await get_redis()
    if not client:
        return None

    key = _make_booking_key(user_id)
    try:
        data = await client.get(key)
        record_cache_operation("get", hit=bool(data))
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_booking(user_id: int, data: dict) -> None:
    """Cache a reservation payload with TTL."""
    client = await get_redis()
    if not client:
        return

    key = _make_booking_key(user_id)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_booking_cache(user_id: int) -> None:
    """Drop the cached reservation for a user."""
    client = await get_redis()
    if not client:
        return

    key = _make_booking_key(user_id)
    try:
        deleted = await client.delete(key)
        logger.info("cache_invalidated", key=key, keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", key=key, error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        keyspace = await client.info("keyspace")
        return {
            "status": "connected",
            "hits": info.get("keyspace_hits", 0),
            "misses": info.get("keyspace_misses", 0),
            "hit_rate": (
                round(
                    info.get("keyspace_hits", 0)
                    / max(info.get("keyspace_hits", 0) + info.get("keyspace_misses", 0), 1)
                    * 100,
                    2,
                )
            ),
            "keys": keyspace,
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
