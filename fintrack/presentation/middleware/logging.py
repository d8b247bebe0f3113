"""Request/response logging middleware with timing."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from fintrack.core.config import settings
from fintrack.core.metrics import record_http_request

logger = structlog.get_logger(__name__)


def route_template(request: Request) -> str:
    """Matched route path (e.g. ``/v1/transactions/{transaction_id}``) to keep labels bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        # Query strings can carry the sync credential, so only keys are logged
        query_keys = sorted(request.query_params.keys()) or None

        log = logger.bind(method=method, path=path)
        log.info("request_started", query_keys=query_keys)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            raise

        duration = time.perf_counter() - start_time
        log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )

        if settings.metrics_enabled:
            record_http_request(method, route_template(request), response.status_code, duration)

        return response
