"""
Per-IP request throttling for the public endpoints
(PIN checks, business login, log submissions and issue reports).

Counters live in process memory and are pushed to Redis every few seconds,
so several API processes converge on a shared count without a Redis round
trip per request.
"""

import logging
import os
import time
from dataclasses import dataclass
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request, status

from .config import RATE_LIMIT_ENABLED

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None

SYNC_EVERY = 10
PRUNE_EVERY = 60
REDIS_RETRY_INTERVAL = 60
redis_retry_after = 0.0


@dataclass
class _Window:
    count: int
    resets_at: int
    synced_at: int

    def ttl(self, now: int) -> int:
        return max(0, self.resets_at - now)


memory_cache: dict[str, _Window] = {}
cache_lock = Lock()
_last_prune = 0


def get_redis_client() -> redis.Redis:
    """Connect once; REDIS_URL wins over the individual REDIS_* variables"""
    global redis_client

    if redis_client is not None:
        return redis_client

    options = dict(
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        health_check_interval=30,
    )
    url = os.getenv("REDIS_URL")
    try:
        if url:
            client = redis.from_url(url, **options)
        else:
            client = redis.Redis(
                host=os.getenv("REDIS_HOST", "localhost"),
                port=int(os.getenv("REDIS_PORT", "6379")),
                password=os.getenv("REDIS_PASSWORD"),
                db=int(os.getenv("REDIS_DB", "0")),
                ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
                **options,
            )
        client.ping()
    except Exception as e:
        logger.error(f"❌ Rate limiter could not reach Redis: {e}")
        raise

    logger.info("✅ Rate limiter connected to Redis")
    redis_client = client
    return redis_client


def _prune(now: int) -> None:
    global _last_prune
    if now - _last_prune < PRUNE_EVERY:
        return
    _last_prune = now
    for key in [k for k, w in memory_cache.items() if now >= w.resets_at]:
        del memory_cache[key]


def _open_window(key: str, window_seconds: int, now: int, client: Optional[redis.Redis]) -> _Window:
    window = _Window(count=0, resets_at=now + window_seconds, synced_at=now)
    if client is None:
        return window
    # Pick up a count another process already pushed
    try:
        stored, remaining = client.get(key), client.ttl(key)
        if stored and remaining > 0:
            window.count = int(stored)
            window.resets_at = now + remaining
    except Exception as e:
        logger.warning(f"⚠️ Redis read failed for {key}, counting locally: {e}")
    return window


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis]
) -> tuple[bool, int, int]:
    """Count one request against a fixed window.

    Returns (allowed, count, seconds_until_reset). Pass client=None to keep
    the counter local to this process.
    """
    now = int(time.time())

    with cache_lock:
        _prune(now)
        window = memory_cache.get(key)
        if window is None:
            window = memory_cache[key] = _open_window(key, window_seconds, now, client)
        elif now >= window.resets_at:
            window.count, window.resets_at, window.synced_at = 0, now + window_seconds, 0

        allowed = window.count < limit
        if allowed:
            window.count += 1

        if client is not None and now - window.synced_at >= SYNC_EVERY:
            try:
                client.set(key, window.count, ex=window_seconds)
                window.synced_at = now
            except Exception as e:
                logger.warning(f"⚠️ Redis write failed for {key}: {e}")

        return allowed, window.count, window.ttl(now)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _available_client() -> Optional[redis.Redis]:
    """Redis client, or None while backing off after a failed connect"""
    global redis_retry_after
    if time.time() < redis_retry_after:
        return None
    try:
        return get_redis_client()
    except Exception:
        redis_retry_after = time.time() + REDIS_RETRY_INTERVAL
        return None


async def rate_limit_dependency(request: Request, limit: int, window_seconds: int, key_prefix: str):
    if not RATE_LIMIT_ENABLED:
        return

    key = f"{key_prefix}:{client_ip(request)}"
    allowed, count, retry_after = check_rate_limit(key, limit, window_seconds, _available_client())
    if allowed:
        return

    logger.warning(f"🚫 Throttled {key} ({count}/{limit} in {window_seconds}s)")
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail={
            "message": f"Too many requests. Limit is {limit} per {window_seconds} seconds.",
            "retry_after": retry_after,
        },
        headers={"Retry-After": str(retry_after)},
    )


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """Build a route dependency, e.g. ``_: None = Depends(create_rate_limiter(10, 300, "pin"))``"""

    async def limiter(request: Request):
        return await rate_limit_dependency(request, limit, window_seconds, key_prefix)

    return limiter
