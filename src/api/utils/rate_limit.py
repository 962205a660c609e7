"""
In-process fixed-window rate limiting keyed by client IP.

Counters live in the worker process; running several workers multiplies
the effective limit.
"""

import time
from typing import Callable, Dict, Tuple

from fastapi import Request, status

from src.api.error import ClientError
from src.libs.result import Error

# Expired windows are swept once the table grows past this many keys
_PRUNE_THRESHOLD = 10_000


class FixedWindowRateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}

    def hit(self, key: str) -> bool:
        """Count one request for key; False once the window's budget is spent."""
        now = self._clock()
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[key] = (started, count)

        if len(self._windows) > _PRUNE_THRESHOLD:
            self._prune(now)

        return count <= self.max_requests

    def reset(self) -> None:
        self._windows.clear()

    def _prune(self, now: float) -> None:
        self._windows = {
            key: window
            for key, window in self._windows.items()
            if now - window[0] < self.window_seconds
        }


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def limit_login_attempts(request: Request) -> None:
    limiter = getattr(request.app.state, "login_rate_limiter", None)
    if limiter is None:
        return
    if not limiter.hit(client_ip(request)):
        raise ClientError(
            Error("RATE_LIMITED", "Too many login attempts, please try again later"),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        )
