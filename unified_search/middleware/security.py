"""API key check, per-IP rate limiting and security response headers."""

from typing import Callable

from fastapi import Depends, Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from unified_search.config import Settings, get_settings
from unified_search.exceptions import AuthenticationError
from unified_search.utils.logging import get_logger

logger = get_logger(__name__)

MISSING_AUTH = "Missing or invalid authorization header. Use: Authorization: Bearer YOUR_API_KEY"
INVALID_KEY = "Invalid API key"
RATE_LIMITED = "Too many requests from this IP, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


async def require_api_key(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Reject the request unless it carries ``Authorization: Bearer <api_key>``."""
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise AuthenticationError(MISSING_AUTH)

    if auth_header[len("Bearer "):] != settings.api_key:
        raise AuthenticationError(INVALID_KEY)


def rate_limit_for(settings: Settings) -> str:
    """Limit string for the API routes, e.g. ``100 per 900 seconds``."""
    return f"{settings.rate_limit_requests} per {settings.rate_limit_window_seconds} seconds"


def build_limiter() -> Limiter:
    """Per-app limiter keyed by client IP, in-memory storage."""
    return Limiter(key_func=get_remote_address)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    client_ip = get_remote_address(request)
    logger.warning(
        f"Rate limit exceeded: {exc.detail}",
        extra={"client_ip": client_ip, "endpoint": request.url.path},
    )
    return JSONResponse(status_code=429, content={"success": False, "error": RATE_LIMITED})


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add conservative security headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
