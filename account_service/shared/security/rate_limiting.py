"""
Rate limiting for the account API.

Built on slowapi. SlowAPIMiddleware applies ``RATE_LIMIT_DEFAULT`` to every
route; the feedback route, which calls the tone analyzer, is decorated
with the tighter ``RATE_LIMIT_HEAVY``. Callers are counted per acting user
when the X-User-Id header is sent, otherwise per client address.
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from account_service.core.config import settings

logger = logging.getLogger(__name__)

ACTING_USER_HEADER = "X-User-Id"


def rate_limit_key(request: Request) -> str:
    user = request.headers.get(ACTING_USER_HEADER)
    if user:
        return f"user:{user}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=rate_limit_key,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Reject a throttled request with 429 and the exceeded limit."""
    logger.warning(
        "Rate limit %s exceeded by %s on %s",
        exc.detail,
        rate_limit_key(request),
        request.url.path,
    )
    return JSONResponse(
        status_code=429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
