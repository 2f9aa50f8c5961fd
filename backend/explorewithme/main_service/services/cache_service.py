"""
Redis caching for the public category listing.

What we cache:
  - Category listing pages (JSON-serialized)
  - Cache key pattern: "categories:list:from={from}&size={size}"

Invalidation strategy:
  - Every admin create/update/delete of a category deletes all listing keys
  - TTL-based expiry as safety net (REDIS_CACHE_TTL)

The cache is advisory: when Redis is disabled or unreachable every helper
degrades to a no-op and the database answers.
"""

import json
from typing import Optional

import redis.asyncio as redis
from explorewithme.core.config import get_settings
from explorewithme.core.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

CATEGORY_LIST_PREFIX = "categories:list:"

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
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
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


def _make_category_list_key(from_: int, size: int) -> str:
    return f"{CATEGORY_LIST_PREFIX}from={from_}&size={size}"


async def get_cached_categories(from_: int, size: int) -> Optional[list[dict]]:
    client = await get_redis()
    if not client:
        return None

    key = _make_category_list_key(from_, size)
    try:
        data = await client.get(key)
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_categories(from_: int, size: int, data: list[dict]) -> None:
    client = await get_redis()
    if not client:
        return

    key = _make_category_list_key(from_, size)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_category_cache() -> None:
    """Delete every cached category page (SCAN by prefix)."""
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{CATEGORY_LIST_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
