"""
rate_limit.py — Global rate limiter instance.

Uses slowapi (a Starlette-compatible wrapper around the `limits` library).
Requests are keyed by client IP address.

Usage in routes:
    from fastapi import Request
    from ytstats.core.rate_limit import limiter

    @router.get("/some-endpoint")
    @limiter.limit(settings.rate_limit)
    async def my_endpoint(request: Request):
        ...

Wired into the app in main.py (app.state.limiter + RateLimitExceeded handler).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
