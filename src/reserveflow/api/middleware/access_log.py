from __future__ import annotations

import logging
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("reserveflow.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def route_template(request: Request) -> str:
    """``/v1/reservations/{reservation_id}`` rather than the concrete URL."""
    template = getattr(request.scope.get("route"), "path", None)
    return template if isinstance(template, str) else "unmatched"


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._finish(request, 500, started, failed=True)
            raise
        self._finish(request, response.status_code, started)
        return response

    def _finish(
        self,
        request: Request,
        status_code: int,
        started: float,
        failed: bool = False,
    ) -> None:
        elapsed = time.perf_counter() - started
        template = route_template(request)
        REQUEST_COUNT.labels(
            method=request.method, path=template, status_code=str(status_code)
        ).inc()
        REQUEST_LATENCY.labels(method=request.method, path=template).observe(elapsed)

        fields = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(elapsed * 1000, 2),
        }
        if failed:
            logger.exception("request_error", extra=fields)
        else:
            logger.info("request_complete", extra=fields)
