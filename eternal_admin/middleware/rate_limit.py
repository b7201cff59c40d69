"""Rate limiting for API protection"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from eternal_admin.config import settings


def get_identifier(request: Request) -> str:
    """
    Get identifier for rate limiting

    Limits apply per client address; login attempts are made before any
    identity is known.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and settings.TRUST_PROXY_HEADERS:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


# Create limiter instance
limiter = Limiter(
    key_func=get_identifier,
    default_limits=settings.RATE_LIMIT_DEFAULT,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)
