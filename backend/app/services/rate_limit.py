from __future__ import annotations

from collections import defaultdict, deque
from threading import Lock
import time
from typing import Deque

from fastapi import HTTPException, Request, status


class SlidingWindowRateLimiter:
    def __init__(self) -> None:
        self._buckets: dict[str, Deque[float]] = defaultdict(deque)
        self._lock = Lock()
        self._last_sweep = time.monotonic()

    def _sweep(self, earliest: float) -> None:
        for key in [key for key, bucket in self._buckets.items() if not bucket or bucket[-1] < earliest]:
            del self._buckets[key]

    def check(self, *, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        now = time.monotonic()
        earliest = now - window_seconds
        with self._lock:
            # Drop keys idle for a whole window.
            if now - self._last_sweep >= window_seconds:
                self._sweep(earliest)
                self._last_sweep = now
            bucket = self._buckets[key]
            while bucket and bucket[0] < earliest:
                bucket.popleft()
            if len(bucket) >= limit:
                return False, max(1, int(bucket[0] + window_seconds - now))
            bucket.append(now)
        return True, 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()
            self._last_sweep = time.monotonic()


_limiter = SlidingWindowRateLimiter()


def client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def enforce_login_rate_limit(request: Request, *, user_id: str, limit: int, window_seconds: int) -> None:
    key = f"login|{client_address(request)}|{user_id.strip().lower()}"
    allowed, retry_after = _limiter.check(key=key, limit=limit, window_seconds=window_seconds)
    if allowed:
        return
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many login attempts. Try again in {retry_after} second(s).",
        headers={"Retry-After": str(retry_after)},
    )


def clear_rate_limiter() -> None:
    _limiter.clear()
