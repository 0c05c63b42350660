"""Per-user action quotas for LearnLoop."""

from __future__ import annotations

import logging
import time
from threading import Lock
from typing import Final

import redis

from learnloop.core.settings import settings

logger = logging.getLogger(__name__)

HOUR_SECONDS: Final[int] = 3_600


class RateLimiter:
    """Fixed-window counters keyed by action and user.

    The redis backend shares counters across instances; the memory backend
    keeps them in this process and is meant for single-instance deployments
    and tests.
    """

    def __init__(self, backend: str | None = None, redis_url: str | None = None) -> None:
        self.backend = backend or settings.rate_limit_backend
        self._redis: redis.Redis | None = None
        if self.backend == "redis":
            self._redis = redis.Redis.from_url(redis_url or settings.redis_url)
        # key -> (count, monotonic expiry of the window)
        self._windows: dict[str, tuple[int, float]] = {}
        self._lock = Lock()

    def hit(self, action: str, subject: str, *, limit: int, window_seconds: int) -> bool:
        """Record one attempt and return True if it is within *limit*.

        If redis fails the limiter drops it and keeps counting in process.
        """
        if limit <= 0:
            return False
        key = f"ratelimit:{action}:{subject}"
        if self._redis is not None:
            try:
                # TTL is attached when the key is created, never after the increment
                pipe = self._redis.pipeline()
                pipe.set(key, 0, ex=int(window_seconds), nx=True)
                pipe.incr(key)
                _, count = pipe.execute()
                return int(count) <= limit
            except redis.RedisError:
                logger.exception("Redis rate limiting failed; falling back to in-process counters")
                self._redis = None

        now = time.monotonic()
        with self._lock:
            self._evict_expired(now)
            count, expires_at = self._windows.get(key, (0, now + window_seconds))
            count += 1
            self._windows[key] = (count, expires_at)
        return count <= limit

    def _evict_expired(self, now: float) -> None:
        # Caller holds the lock.
        expired = [key for key, (_, expires_at) in self._windows.items() if now >= expires_at]
        for key in expired:
            del self._windows[key]

    def reset(self) -> None:
        """Forget every in-process window."""
        with self._lock:
            self._windows.clear()


_limiter: RateLimiter | None = None
_LIMITER_LOCK = Lock()


def get_rate_limiter() -> RateLimiter:
    """Return the process-wide rate limiter."""
    global _limiter
    with _LIMITER_LOCK:
        if _limiter is None:
            _limiter = RateLimiter()
            logger.info("Rate limiter using %s backend", _limiter.backend)
        return _limiter
