"""HTTP middleware: correlation ids, request logging and metrics."""

from casework.api.middleware.logging_middleware import LoggingMiddleware
from casework.api.middleware.metrics_middleware import MetricsMiddleware

__all__ = ["LoggingMiddleware", "MetricsMiddleware"]
