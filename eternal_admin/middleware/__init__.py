"""Middleware modules for monitoring and request protection"""
from eternal_admin.middleware.monitoring import MonitoringMiddleware, record_auth_failure
from eternal_admin.middleware.rate_limit import limiter

__all__ = [
    "MonitoringMiddleware",
    "record_auth_failure",
    "limiter",
]
