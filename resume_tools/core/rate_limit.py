from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_tools.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit():
    """Per-client limit for tool routes; a no-op decorator when limiting is disabled."""
    if settings.rate_limit_enabled:
        return limiter.limit(settings.rate_limit)

    def decorator(func):
        return func

    return decorator


def reset_rate_limits() -> None:
    """Forget recorded hits, e.g. between test cases."""
    limiter.reset()
