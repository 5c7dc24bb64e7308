# PURPOSE: slowapi limiter shared by the auth endpoints.

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address

from .config import settings

# Redis (when configured) lets several workers share one budget.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.REDIS_URL or settings.RATE_LIMIT_STORAGE_URI,
    headers_enabled=True,
)


def reset_rate_limits() -> None:
    """Drop all recorded hits (tests start each client with a fresh budget)."""
    limiter.reset()


__all__ = ["limiter", "reset_rate_limits", "_rate_limit_exceeded_handler"]
