"""Monitoring and request logging middleware"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

from eternal_admin.utils.logger import logger


# ===== Prometheus Metrics =====

# Request metrics
http_requests_total = Counter(
    "eternal_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "eternal_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)

# Error metrics
http_errors_total = Counter(
    "eternal_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "status"]
)

authentication_failures_total = Counter(
    "eternal_authentication_failures_total",
    "Total authentication failures",
    ["kind"]  # invalid_credentials, invalid_or_expired_token, ...
)


def _endpoint_label(request: Request) -> str:
    """Route template when matched, so path parameters don't explode label cardinality"""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class MonitoringMiddleware(BaseHTTPMiddleware):
    """Request id, timing headers, metrics, and one log line per request"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        method = request.method

        # Add request ID for tracing
        request_id = request.headers.get("x-request-id") or f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            endpoint = _endpoint_label(request)
            http_errors_total.labels(method=method, endpoint=endpoint, status=500).inc()
            logger.error(
                f"Request failed: {method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": request.url.path,
                    "duration_ms": round(duration * 1000, 2),
                    "reason": str(e),
                },
                exc_info=True
            )
            raise

        status = response.status_code
        duration = time.time() - start_time
        endpoint = _endpoint_label(request)

        http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)
        if status >= 400:
            http_errors_total.labels(method=method, endpoint=endpoint, status=status).inc()

        log_extra = {
            "request_id": request_id,
            "method": method,
            "path": request.url.path,
            "status": status,
            "duration_ms": round(duration * 1000, 2),
        }
        if duration > 1.0:
            logger.warning(f"Slow request: {method} {request.url.path}", extra=log_extra)
        else:
            logger.info(f"{method} {request.url.path} - {status}", extra=log_extra)

        # Add custom headers
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        return response


def record_auth_failure(kind: str):
    """Record authentication failure"""
    authentication_failures_total.labels(kind=kind).inc()
