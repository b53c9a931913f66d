"""API middleware."""

from cvdeck.api.middleware.rate_limit import RateLimitMiddleware, SlidingWindowRateLimiter

__all__ = ["RateLimitMiddleware", "SlidingWindowRateLimiter"]
