"""Redis store for caching ranking payloads.

Handles:
- Caching with TTL policies
- Invalidation when shops are added

TTL policies:
- Ranking / comparison payloads: 60 seconds
"""

import json
import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from shoprank.settings import get_settings

# TTL constants (in seconds)
TTL_RANKING_PAYLOAD = 60  # 1 minute

# Key prefixes
PREFIX_RANKING = "ranking:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    client = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await client.ping()
    _redis = client
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found.
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_delete_prefix(prefix: str) -> int:
    """Delete all keys starting with `prefix`.

    Returns:
        Number of deleted keys.
    """
    client = _get_redis()
    deleted = 0
    async for key in client.scan_iter(match=f"{prefix}*"):
        deleted += await client.delete(key)
    return deleted


async def cache_get_json(key: str) -> dict[str, Any] | None:
    """Get JSON value from cache."""
    value = await cache_get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: dict[str, Any], ttl: int) -> None:
    """Set JSON value in cache."""
    await cache_set(key, json.dumps(value), ttl)


# ============================================================
# Ranking payload cache
# ============================================================


def ranking_cache_key(*parts: object) -> str:
    """Build a ranking cache key, e.g. ranking:memory:bayesian:2.0:2.0:all."""
    return PREFIX_RANKING + ":".join(str(p) for p in parts)


async def get_ranking_cache(key: str) -> dict[str, Any] | None:
    """Get cached ranking payload.

    Returns None when Redis is not available (tests / local minimal env).
    """
    try:
        return await cache_get_json(key)
    except RuntimeError:
        return None
    except (RedisError, json.JSONDecodeError):
        logger.warning(f"Ranking cache read failed for {key}", exc_info=True)
        return None


async def set_ranking_cache(key: str, payload: dict[str, Any]) -> None:
    """Cache a ranking payload (TTL 60s)."""
    try:
        await cache_set_json(key, payload, TTL_RANKING_PAYLOAD)
    except RuntimeError:
        return
    except RedisError:
        logger.warning(f"Ranking cache write failed for {key}", exc_info=True)


async def invalidate_ranking_cache() -> None:
    """Drop every cached ranking payload after shop data changed."""
    try:
        deleted = await cache_delete_prefix(PREFIX_RANKING)
    except RuntimeError:
        return
    except RedisError:
        logger.warning("Ranking cache invalidation failed", exc_info=True)
        return
    if deleted:
        logger.info(f"Ranking cache invalidated: {deleted} keys")
