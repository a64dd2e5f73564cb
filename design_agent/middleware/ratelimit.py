"""Process-wide request cap per client, counted over a sliding time window."""

import time
import asyncio
import logging
from collections import deque
from typing import Callable, Iterable
from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SlidingWindowLimiter:
    """Keeps the request timestamps of every client seen inside the window.

    Clients whose newest request has left the window are forgotten, at most
    once per window, so memory tracks active clients only.
    """

    def __init__(self, window_seconds: float, max_calls: int, clock: Callable[[], float] = time.monotonic):
        self.window = window_seconds
        self.max_calls = max_calls
        self.clock = clock
        self.hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    def _sweep(self, now: float) -> None:
        cutoff = now - self.window
        stale = [key for key, stamps in self.hits.items() if not stamps or stamps[-1] <= cutoff]
        for key in stale:
            del self.hits[key]
        self._last_sweep = now

    def acquire(self, key: str) -> int | None:
        """Record one request for ``key``.

        Returns ``None`` when it is allowed, otherwise the seconds to wait.
        """
        now = self.clock()
        if now - self._last_sweep >= self.window:
            self._sweep(now)

        stamps = self.hits.setdefault(key, deque())
        cutoff = now - self.window
        while stamps and stamps[0] <= cutoff:
            stamps.popleft()

        if len(stamps) >= self.max_calls:
            return max(1, int(stamps[0] + self.window - now))
        stamps.append(now)
        return None


class RateLimitMiddleware:
    def __init__(
        self,
        app,
        *,
        window_seconds: int,
        max_calls: int,
        key_func: Callable[[Request], str],
        include_path_prefixes: Iterable[str] = ("/api",),
        clock: Callable[[], float] = time.monotonic,
    ):
        self.app = app
        self.key_func = key_func
        self.include_paths = tuple(include_path_prefixes)
        self.limiter = SlidingWindowLimiter(window_seconds, max_calls, clock)
        self._lock = asyncio.Lock()

    async def __call__(self, scope, receive, send):
        path = scope.get("path", "")
        if scope["type"] != "http" or not path.startswith(self.include_paths):
            return await self.app(scope, receive, send)

        key = self.key_func(Request(scope, receive=receive))
        async with self._lock:
            retry_after = self.limiter.acquire(key)

        if retry_after is None:
            return await self.app(scope, receive, send)

        logger.warning("Rate limit exceeded for %s on %s", key, path)
        resp = JSONResponse(
            status_code=429,
            content={
                "detail": "Too many requests, please try again later.",
                "window_seconds": self.limiter.window,
                "max_calls": self.limiter.max_calls,
                "try_again_in": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )
        return await resp(scope, receive, send)


def client_ip_key(req: Request) -> str:
    ip = req.client.host if req.client else "unknown"
    return f"ip:{ip}"
