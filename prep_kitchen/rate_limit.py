"""
Rate limiting for AI-backed endpoints.

Uses slowapi with in-memory storage, keyed by client IP. For production with
multiple workers, use Redis: Limiter(key_func=..., storage_uri="redis://...").

    @router.post("/preview")
    @limiter.limit(get_rate_limit_extraction)
    def preview(request: Request, ...):
        ...

Decorated endpoints must accept ``request: Request``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import RATE_LIMIT_ENABLED, get_rate_limit_extraction

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

__all__ = ["limiter", "get_rate_limit_extraction"]
