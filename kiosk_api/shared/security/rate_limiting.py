"""
Rate limiting configuration and setup.

Uses slowapi to enforce a default per-client rate limit on every route.
Protects against denial-of-service and resource abuse.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

DEFAULT_RATE_LIMIT = "60/minute"


def build_limiter(default_limit: str = DEFAULT_RATE_LIMIT, enabled: bool = True) -> Limiter:
    """Create the application limiter.

    Args:
        default_limit: Limit applied to every route, e.g. ``"60/minute"``.
        enabled: Set False to switch limiting off (tests, internal deployments).

    Returns:
        A limiter keyed on the client address.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[default_limit],
        enabled=enabled,
    )


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with an envelope-shaped response.

    Kept synchronous: ``SlowAPIMiddleware`` only calls plain functions and
    falls back to its own body for coroutine handlers.

    Args:
        _request: The incoming HTTP request.
        exc: The rate limit exceeded exception.

    Returns:
        A 429 JSON response with a clear error message.
    """
    return JSONResponse(
        status_code=429,
        content={"message": f"Error: Rate limit exceeded ({exc.detail})."},
    )
