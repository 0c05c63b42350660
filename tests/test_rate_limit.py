# mypy: ignore-errors
# tests/test_rate_limit.py
"""Tests for the in-process rate limiter."""

from learnloop.services import rate_limit
from learnloop.services.rate_limit import HOUR_SECONDS, RateLimiter


def test_allows_up_to_limit() -> None:
    limiter = RateLimiter(backend="memory")

    results = [limiter.hit("report", "user-1", limit=3, window_seconds=HOUR_SECONDS) for _ in range(4)]

    assert results == [True, True, True, False]


def test_counters_are_per_action_and_subject() -> None:
    limiter = RateLimiter(backend="memory")
    for _ in range(2):
        limiter.hit("report", "user-1", limit=2, window_seconds=HOUR_SECONDS)

    assert limiter.hit("report", "user-1", limit=2, window_seconds=HOUR_SECONDS) is False
    assert limiter.hit("report", "user-2", limit=2, window_seconds=HOUR_SECONDS) is True
    assert limiter.hit("contact", "user-1", limit=2, window_seconds=HOUR_SECONDS) is True


def test_window_expiry(monkeypatch) -> None:
    clock = [1_000.0]
    monkeypatch.setattr(rate_limit.time, "monotonic", lambda: clock[0])
    limiter = RateLimiter(backend="memory")

    assert limiter.hit("report", "user-1", limit=1, window_seconds=60) is True
    assert limiter.hit("report", "user-1", limit=1, window_seconds=60) is False

    clock[0] += 60
    assert limiter.hit("report", "user-1", limit=1, window_seconds=60) is True


def test_reset() -> None:
    limiter = RateLimiter(backend="memory")
    limiter.hit("report", "user-1", limit=1, window_seconds=HOUR_SECONDS)

    limiter.reset()

    assert limiter.hit("report", "user-1", limit=1, window_seconds=HOUR_SECONDS) is True


def test_zero_limit_rejects() -> None:
    limiter = RateLimiter(backend="memory")

    assert limiter.hit("report", "user-1", limit=0, window_seconds=HOUR_SECONDS) is False


def test_expired_windows_are_evicted(monkeypatch) -> None:
    clock = [500.0]
    monkeypatch.setattr(rate_limit.time, "monotonic", lambda: clock[0])
    limiter = RateLimiter(backend="memory")
    for subject in ("user-1", "user-2", "user-3"):
        limiter.hit("report", subject, limit=5, window_seconds=60)

    clock[0] += 61
    limiter.hit("report", "user-4", limit=5, window_seconds=60)

    assert list(limiter._windows) == ["ratelimit:report:user-4"]


def test_shorter_window_does_not_evict_longer_one(monkeypatch) -> None:
    clock = [0.0]
    monkeypatch.setattr(rate_limit.time, "monotonic", lambda: clock[0])
    limiter = RateLimiter(backend="memory")
    limiter.hit("report", "user-1", limit=1, window_seconds=HOUR_SECONDS)

    clock[0] += 120
    limiter.hit("contact", "user-1", limit=1, window_seconds=60)

    assert limiter.hit("report", "user-1", limit=1, window_seconds=HOUR_SECONDS) is False


def test_unreachable_redis_falls_back_to_memory(caplog) -> None:
    limiter = RateLimiter(backend="redis", redis_url="redis://127.0.0.1:1/0")

    first = limiter.hit("report", "user-1", limit=1, window_seconds=HOUR_SECONDS)
    second = limiter.hit("report", "user-1", limit=1, window_seconds=HOUR_SECONDS)

    assert (first, second) == (True, False)
    assert limiter._redis is None
    assert "falling back to in-process counters" in caplog.text
