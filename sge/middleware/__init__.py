"""Middleware modules for production-ready features"""
from sge.middleware.monitoring import (
    MonitoringMiddleware,
    record_attendance_event,
    record_auth_event,
    record_leave_request,
    record_token_revocation,
)
from sge.middleware.rate_limit import limiter, get_rate_limit

__all__ = [
    "MonitoringMiddleware",
    "record_attendance_event",
    "record_auth_event",
    "record_leave_request",
    "record_token_revocation",
    "limiter",
    "get_rate_limit",
]
