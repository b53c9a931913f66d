"""Rate limiting middleware for per-client request limits."""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from cvdeck.api.exceptions import RateLimitExceededError
from cvdeck.api.models.errors import ErrorResponse
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: datetime


@dataclass
class RateLimitWindow:
    """Sliding window rate limit state."""

    requests: list[float] = field(default_factory=list)
    """Timestamps of requests within the window."""


class SlidingWindowRateLimiter:
    """In-memory sliding window rate limiter.

    Tracks request timestamps per client address within the window.
    Clients with no request inside the window are dropped, on their next
    check or by a sweep run at most once per window, so memory follows
    the number of recently active addresses. State is per process.
    """

    def __init__(self, window_seconds: int = 60) -> None:
        self._window_seconds = window_seconds
        self._windows: dict[str, RateLimitWindow] = {}
        self._last_sweep = time.time()

    @property
    def tracked_clients(self) -> int:
        return len(self._windows)

    def check(self, client_id: str, limit: int) -> RateLimitResult:
        """Check if a request is allowed, recording it when it is.

        Args:
            client_id: Client identifier
            limit: Maximum requests allowed in the window
        """
        now = time.time()
        window_start = now - self._window_seconds
        if now - self._last_sweep >= self._window_seconds:
            self._sweep(window_start)
            self._last_sweep = now

        window = self._windows.pop(client_id, None) or RateLimitWindow()
        window.requests = [ts for ts in window.requests if ts > window_start]

        current_count = len(window.requests)
        remaining = max(0, limit - current_count)
        allowed = current_count < limit

        if window.requests:
            reset_at = datetime.fromtimestamp(window.requests[0] + self._window_seconds)
        else:
            reset_at = datetime.fromtimestamp(now + self._window_seconds)

        if allowed:
            window.requests.append(now)
        if window.requests:
            self._windows[client_id] = window

        return RateLimitResult(
            allowed=allowed,
            limit=limit,
            remaining=remaining - (1 if allowed else 0),
            reset_at=reset_at,
        )

    def _sweep(self, window_start: float) -> None:
        stale = [
            client_id
            for client_id, window in self._windows.items()
            if not window.requests or window.requests[-1] <= window_start
        ]
        for client_id in stale:
            del self._windows[client_id]
        if stale:
            logger.debug("rate_limit_windows_swept", removed=len(stale))

    def reset(self, client_id: str) -> None:
        self._windows.pop(client_id, None)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Enforces a per-client request limit on API paths.

    Clients are identified by remote address. Rate limit headers are
    added to every limited response:
    - X-RateLimit-Limit: Maximum requests in window
    - X-RateLimit-Remaining: Remaining requests
    - X-RateLimit-Reset: Unix timestamp when limit resets
    """

    def __init__(
        self,
        app: Callable[..., Any],
        enabled: bool = True,
        requests_per_minute: int = 30,
        path_prefix: str = "/api/",
        limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: ASGI application
            enabled: Whether rate limiting is enabled
            requests_per_minute: Allowed requests per client per minute
            path_prefix: Only paths under this prefix are limited
            limiter: Limiter instance, a fresh one by default
        """
        super().__init__(app)
        self._enabled = enabled
        self._limit = requests_per_minute
        self._path_prefix = path_prefix
        self._limiter = limiter or SlidingWindowRateLimiter()

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        if not self._enabled or not request.url.path.startswith(self._path_prefix):
            return await call_next(request)  # type: ignore[no-any-return, misc]

        client_id = request.client.host if request.client else "unknown"
        result = self._limiter.check(client_id, self._limit)

        if not result.allowed:
            logger.warning(
                "rate_limit_exceeded",
                path=request.url.path,
                limit=result.limit,
            )
            # Exceptions raised in middleware bypass the app's handlers
            error = RateLimitExceededError("Too many requests. Please try again later.")
            response: Response = JSONResponse(
                status_code=error.status_code,
                content=ErrorResponse(
                    message=error.message,
                    code=error.error_code,
                ).model_dump(mode="json", exclude_none=True),
            )
        else:
            response = await call_next(request)  # type: ignore[misc]

        add_rate_limit_headers(response, result)
        return response


def add_rate_limit_headers(response: Response, result: RateLimitResult) -> None:
    response.headers["X-RateLimit-Limit"] = str(result.limit)
    response.headers["X-RateLimit-Remaining"] = str(result.remaining)
    response.headers["X-RateLimit-Reset"] = str(int(result.reset_at.timestamp()))
