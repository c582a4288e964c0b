from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from blogai.core.config import settings

limiter = Limiter(key_func=get_remote_address)


def ai_test_rate_limit():
    """Throttle test invocations, which spend provider quota on every call."""
    if settings.rate_limit_enabled:
        return limiter.limit(settings.ai_test_rate_limit)

    def decorator(func):
        return func

    return decorator
