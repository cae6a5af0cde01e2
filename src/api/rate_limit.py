"""Rate limiting configuration using slowapi."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.config import Settings, get_settings

RATE_LIMIT_MESSAGE = "Too many registrations. Please wait a moment and try again."


def _get_rate_limit_key(request: Request) -> str:
    """Get the rate limit key (the client address) from the request."""
    addr: str = get_remote_address(request)
    return addr


# Create limiter instance
limiter = Limiter(key_func=_get_rate_limit_key)

# Limit configured at startup, see set_rate_limit()
_rate_limit: str | None = None


def set_rate_limit(settings: Settings | None) -> None:
    """Set the registration rate limit from the app's settings.

    Called by create_app so the limit follows the settings the app was
    built with. Passing None falls back to the environment settings.
    """
    global _rate_limit
    if settings is None:
        _rate_limit = None
    else:
        _rate_limit = f"{settings.rate_limit_requests}/{settings.rate_limit_window}"


def get_rate_limit_string() -> str:
    """Get the configured rate limit string."""
    if _rate_limit is not None:
        return _rate_limit
    settings = get_settings()
    return f"{settings.rate_limit_requests}/{settings.rate_limit_window}"


async def rate_limit_exceeded_handler(
    _request: Request,
    _exc: RateLimitExceeded,
) -> Response:
    """Answer rate-limited requests with the JSON error envelope."""
    return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE})
