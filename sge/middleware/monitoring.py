"""Monitoring and observability middleware"""
import time
import uuid
from typing import Callable
from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from sge.utils.logger import logger


# ===== Prometheus Metrics =====

# Request metrics
http_requests_total = Counter(
    "sge_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "sge_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)

# Error metrics
http_errors_total = Counter(
    "sge_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "status"]
)

# Auth metrics
auth_events_total = Counter(
    "sge_auth_events_total",
    "Authentication events",
    ["event", "outcome"]  # event: register, login, refresh, logout, revoke; outcome: success or error code
)

refresh_tokens_revoked_total = Counter(
    "sge_refresh_tokens_revoked_total",
    "Refresh tokens revoked",
    ["reason"]
)

# HR metrics
attendance_events_total = Counter(
    "sge_attendance_events_total",
    "Clock-in / clock-out events",
    ["event"]
)

leave_requests_total = Counter(
    "sge_leave_requests_total",
    "Leave request lifecycle events",
    ["status"]
)


class MonitoringMiddleware(BaseHTTPMiddleware):
    """Middleware for monitoring and metrics collection"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics"""
        start_time = time.time()

        method = request.method
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)

        # Add request ID for tracing
        request_id = request.headers.get("x-request-id") or f"req_{uuid.uuid4().hex[:16]}"
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            status = response.status_code

            # Route is only resolved once the router has run
            route = request.scope.get("route")
            endpoint = getattr(route, "path", endpoint)

            duration = time.time() - start_time
            http_requests_total.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).inc()

            http_request_duration_seconds.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

            # Log slow requests
            if duration > 1.0:
                logger.warning(
                    f"Slow request detected: {method} {endpoint}",
                    extra={"request_id": request_id, "action": "slow_request"}
                )

            if status >= 400:
                http_errors_total.labels(
                    method=method,
                    endpoint=endpoint,
                    status=status
                ).inc()

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration:.3f}s"

            return response

        except Exception:
            http_errors_total.labels(
                method=method,
                endpoint=endpoint,
                status=500
            ).inc()

            logger.error(
                f"Request failed: {method} {endpoint}",
                extra={"request_id": request_id},
                exc_info=True
            )
            raise


def record_auth_event(event: str, outcome: str = "success"):
    """Record an authentication event"""
    auth_events_total.labels(event=event, outcome=outcome).inc()


def record_token_revocation(reason: str, count: int = 1):
    """Record revoked refresh tokens"""
    if count:
        refresh_tokens_revoked_total.labels(reason=reason).inc(count)


def record_attendance_event(event: str):
    """Record a clock-in or clock-out"""
    attendance_events_total.labels(event=event).inc()


def record_leave_request(status: str):
    """Record a leave request creation or status change"""
    leave_requests_total.labels(status=status).inc()
