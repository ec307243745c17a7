"""
Redis caching service for event listings.

CACHING STRATEGY
================

What we cache:
  - Event listing responses per category filter (JSON-serialized list)
  - Cache key pattern: "events:list:category={category}"

Invalidation:
  - Event created, event deleted, registration accepted (attendees changed)
  - TTL-based expiry as safety net

  All listing keys share the "events:list:" prefix and are removed with SCAN.

What we never cache:
  - Single events and ticket counts. The registration workflow always
    reads registration rows from the database.

Redis is optional. When disabled or unreachable every helper degrades to a
no-op and listings are served from the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from eventhub.core.config import get_settings
from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_cache_operation
from eventhub.services.event_store import ALL_CATEGORIES

logger = get_logger(__name__)

LIST_KEY_PREFIX = "events:list:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled or down."""
    global _redis_client
    settings = get_settings()

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        try:
            await client.ping()
        except redis.RedisError as e:
            logger.error("redis_connection_failed", url=settings.REDIS_URL, error=str(e))
            await client.aclose()
            return None
        logger.info("redis_connected", url=settings.REDIS_URL)
        _redis_client = client

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def make_event_list_key(category: Optional[str]) -> str:
    return f"{LIST_KEY_PREFIX}category={category or ALL_CATEGORIES}"


async def get_cached_events(category: Optional[str]) -> Optional[list[dict]]:
    """Retrieve a cached event listing."""
    client = await get_redis()
    if not client:
        return None

    key = make_event_list_key(category)
    try:
        data = await client.get(key)
    except redis.RedisError as e:
        record_cache_operation("get", "error")
        logger.error("cache_get_error", key=key, error=str(e))
        return None

    if data:
        record_cache_operation("get", "hit")
        logger.debug("cache_hit", key=key)
        return json.loads(data)
    record_cache_operation("get", "miss")
    logger.debug("cache_miss", key=key)
    return None


async def set_cached_events(category: Optional[str], events: list[dict]) -> None:
    """Cache an event listing with TTL."""
    client = await get_redis()
    if not client:
        return

    key = make_event_list_key(category)
    ttl = get_settings().REDIS_CACHE_TTL
    try:
        await client.setex(key, ttl, json.dumps(events, default=str))
        record_cache_operation("set", "ok")
        logger.debug("cache_set", key=key, ttl=ttl)
    except redis.RedisError as e:
        record_cache_operation("set", "error")
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_event_cache() -> None:
    """Drop every cached listing."""
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{LIST_KEY_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        record_cache_operation("invalidate", "ok")
        logger.info("cache_invalidated", keys_deleted=deleted)
    except redis.RedisError as e:
        record_cache_operation("invalidate", "error")
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
    except redis.RedisError as e:
        return {"status": "error", "error": str(e)}
