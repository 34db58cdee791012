"""
Rate Limit Store Connection

The API talks to Redis for one thing: the per-client sliding windows kept by
``core.rate_limit``. The connection is opened by the lifespan handler and is
optional outside production. While it is absent the limiter counts requests
in process memory instead.
"""

from redis.asyncio import Redis, from_url

from teacher_registry.core.config import settings

# Published only after a successful ping
redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Connect to REDIS_URL and make the client visible to the rate limiter.

    Raises the connection error when the server does not answer, leaving the
    limiter on its in-memory windows.
    """
    global redis_client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    await client.ping()
    redis_client = client
    return redis_client


def get_redis() -> Redis | None:
    """Client the rate limiter should use, or None to count in memory."""
    return redis_client


async def close_redis() -> None:
    """Drop the rate limit store connection on shutdown."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
