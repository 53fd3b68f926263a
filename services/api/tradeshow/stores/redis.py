"""Redis store for sync locks.

Redis is optional. When REDIS_URL is empty or the server is unreachable at
startup, lock helpers report "not initialized" via RuntimeError and callers
run without the guard.

TTL policies:
- Sync run locks: 30 minutes (a full product sync can take several minutes)
"""

import logging

import redis.asyncio as redis

from tradeshow.settings import get_settings

TTL_SYNC_LOCK = 1800  # 30 minutes

PREFIX_LOCK = "lock:sync:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection (no-op when REDIS_URL is unset)."""
    global _redis
    settings = get_settings()
    if not settings.redis_url:
        logger.info("REDIS_URL not set, sync locks disabled")
        return
    client = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
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


async def acquire_lock(key: str, ttl: int = TTL_SYNC_LOCK) -> bool:
    """Acquire a lock.

    Args:
        key: Lock key (e.g., sync type).
        ttl: Lock timeout in seconds.

    Returns:
        True if lock acquired, False if already locked.
    """
    # SET NX (only if not exists) with TTL
    result = await _get_redis().set(f"{PREFIX_LOCK}{key}", "1", nx=True, ex=ttl)
    return result is not None


async def release_lock(key: str) -> None:
    """Release a lock."""
    await _get_redis().delete(f"{PREFIX_LOCK}{key}")


async def is_locked(key: str) -> bool:
    """Check whether a lock is currently held."""
    return bool(await _get_redis().exists(f"{PREFIX_LOCK}{key}"))
