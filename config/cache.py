# config/cache.py
from typing import Awaitable, Callable, Optional
from fastapi import Request
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis, from_url
from config.settings import settings
import logging

logger = logging.getLogger(__name__)

# Redis backs the trigger's rate limiter only; job state lives in the gallery store.
_limiter_redis: Optional[Redis] = None


async def init_rate_limiter(identifier: Callable[[Request], Awaitable[str]]) -> Redis:
    """
    Connect once, fail fast if Redis is unreachable, and hand the client to
    FastAPILimiter keyed by `identifier` (client IP). Repeat calls reuse the client.
    """
    global _limiter_redis
    if _limiter_redis is None:
        client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            health_check_interval=30,
        )
        await client.ping()
        await FastAPILimiter.init(client, identifier=identifier)
        _limiter_redis = client
        logger.info("ratelimit.ready times=%d seconds=%d",
                    settings.RATE_LIMIT_TIMES, settings.RATE_LIMIT_SECONDS)
    return _limiter_redis


async def close_rate_limiter() -> None:
    global _limiter_redis
    client, _limiter_redis = _limiter_redis, None
    if client is not None:
        await client.aclose()
