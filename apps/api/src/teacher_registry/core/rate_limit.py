"""
Rate Limiting Module

Per-client request ceiling for the public API (100 requests per 15 minutes
by default). Uses the shared Redis client when it is initialised and falls
back to in-memory storage otherwise.
"""

import logging
import time

from fastapi import HTTPException, Request, status

from teacher_registry.core.config import settings
from teacher_registry.core.redis import get_redis

logger = logging.getLogger(__name__)

# In-memory rate limit storage (fallback when Redis unavailable)
# Format: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}
# Time of the last pass dropping clients whose window has fully expired
_last_sweep: float = 0.0


class RateLimitExceeded(HTTPException):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "RATE_LIMIT_EXCEEDED",
                "message": "Too many requests, please try again later.",
                "limit": limit,
                "retry_after_seconds": window_seconds,
            },
            headers={"Retry-After": str(window_seconds)},
        )


async def _check_rate_limit_redis(client, key: str, limit: int, window_seconds: int) -> bool:
    """
    Check rate limit using Redis.

    Uses a sliding window algorithm with Redis sorted sets.

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {f"{now}:{time.perf_counter_ns()}": now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _sweep_memory_store(now: float, window_seconds: int) -> None:
    """Drop keys with no hit inside the window, at most once per window."""
    global _last_sweep

    if now - _last_sweep < window_seconds:
        return
    _last_sweep = now

    window_start = now - window_seconds
    expired = [key for key, hits in _memory_store.items() if not hits or hits[-1] <= window_start]
    for key in expired:
        del _memory_store[key]
    if expired:
        logger.debug(f"Dropped {len(expired)} expired rate limit keys")


def _check_rate_limit_memory(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check rate limit using in-memory storage.

    Fallback when Redis is unavailable. Note: This doesn't work
    across multiple server instances.
    """
    now = time.time()
    window_start = now - window_seconds
    _sweep_memory_store(now, window_seconds)

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]

    if len(hits) >= limit:
        _memory_store[key] = hits
        return False

    hits.append(now)
    _memory_store[key] = hits
    return True


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check if a request is within rate limits.

    Tries Redis first, falls back to in-memory storage.

    Args:
        key: Unique key for this rate limit (e.g., "rate_limit:10.0.0.1")
        limit: Maximum requests allowed in the window
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    client = get_redis()

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


def client_rate_limit_key(request: Request) -> str:
    """Rate limit key for the calling client address."""
    client_ip = request.client.host if request.client else "unknown"
    return f"rate_limit:{client_ip}"


async def enforce_client_rate_limit(request: Request) -> None:
    """
    FastAPI dependency applying the per-IP request ceiling.

    Raises:
        RateLimitExceeded: When the client exceeded its window (HTTP 429)
    """
    limit = settings.rate_limit_requests
    window_seconds = settings.rate_limit_window_seconds
    key = client_rate_limit_key(request)

    if not await check_rate_limit(key, limit, window_seconds):
        logger.warning(f"Rate limit exceeded for {key}: {limit}/{window_seconds}s")
        raise RateLimitExceeded(limit, window_seconds)


__all__ = [
    "RateLimitExceeded",
    "check_rate_limit",
    "client_rate_limit_key",
    "enforce_client_rate_limit",
]
