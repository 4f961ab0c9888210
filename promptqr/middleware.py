"""Custom FastAPI middlewares for observability."""
from __future__ import annotations

import logging
import time
import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .monitoring import observe_request

logger = logging.getLogger("promptqr.http")

REQUEST_ID_HEADER = "X-Request-ID"


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return route.path if route else request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log request metadata and latency, and tag every response with a request id."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        start = time.perf_counter()
        context = {
            "request_id": request_id,
            "method": request.method,
            "client": request.client.host if request.client else None,
        }
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception("request failed", extra={**context, "path": _route_path(request), "duration_ms": round(duration_ms, 2)})
            observe_request(request.method, _route_path(request), 500, duration_ms)
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        route_path = _route_path(request)
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            "request completed",
            extra={**context, "path": route_path, "status_code": response.status_code, "duration_ms": round(duration_ms, 2)},
        )
        observe_request(request.method, route_path, response.status_code, duration_ms)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
