"""Request logging middleware for structured logging."""

import logging
import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from unified_search.utils.logging import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request with a request id and its duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid4())
        request.state.request_id = request_id

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        context = {
            "request_id": request_id,
            "endpoint": path,
            "method": method,
            "client_ip": client_ip,
        }

        start_time = time.perf_counter()
        logger.info(
            f"{method} {path}",
            extra={**context, "user_agent": request.headers.get("user-agent", "unknown")},
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{method} {path} ERROR: {e}",
                extra={**context, "status_code": 500, "duration_ms": round(duration_ms, 2), "error": str(e)},
                exc_info=True,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(
            log_level,
            f"{method} {path} {response.status_code}",
            extra={**context, "status_code": response.status_code, "duration_ms": round(duration_ms, 2)},
        )

        response.headers["X-Request-ID"] = request_id
        return response
