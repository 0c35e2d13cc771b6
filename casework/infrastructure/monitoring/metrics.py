"""Prometheus metrics for the Casework API.

Two families of metrics live in one registry:

- HTTP metrics recorded by MetricsMiddleware (latency, totals, failures).
- Casework counters recorded by services (status changes, document
  reviews, uploads, bulk operation items).

Labels: service, environment on every metric.
"""

import os
import threading
import time

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

_collector_lock = threading.Lock()

# Request duration buckets (10ms to 10s)
DEFAULT_HISTOGRAM_BUCKETS = (0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class MetricsCollector:
    """Owns the Prometheus registry and every Casework metric.

    Attributes:
        uptime_seconds: Seconds since the API started.
        http_request_duration_seconds: Request latency by route.
        http_requests_total: Requests by route and status.
        http_requests_failed_total: 4xx/5xx requests by error type.
        status_changes_total: Status records written, by source operation.
        document_reviews_total: Document approvals/rejections.
        document_uploads_total: Document versions registered.
        bulk_operation_items_total: Bulk items by operation and outcome.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Create every metric in registry (a fresh one by default).

        Args:
            registry: Registry to use; tests pass their own for isolation.
        """
        self._registry = registry or CollectorRegistry()
        self._environment = os.environ.get("ENVIRONMENT", "development")
        self._service_name = os.environ.get("SERVICE_NAME", "casework-api")
        self._started_at: float | None = None

        self.uptime_seconds = Gauge(
            name="uptime_seconds",
            documentation="Seconds since service start",
            labelnames=["service", "environment"],
            registry=self._registry,
        )
        self.http_request_duration_seconds = Histogram(
            name="http_request_duration_seconds",
            documentation="HTTP request duration in seconds",
            labelnames=["service", "environment", "method", "endpoint"],
            buckets=DEFAULT_HISTOGRAM_BUCKETS,
            registry=self._registry,
        )
        self.http_requests_total = Counter(
            name="http_requests_total",
            documentation="Total HTTP requests",
            labelnames=["service", "environment", "method", "endpoint", "status"],
            registry=self._registry,
        )
        self.http_requests_failed_total = Counter(
            name="http_requests_failed_total",
            documentation="Total failed HTTP requests (4xx, 5xx)",
            labelnames=[
                "service",
                "environment",
                "method",
                "endpoint",
                "status",
                "error_type",
            ],
            registry=self._registry,
        )
        self.status_changes_total = Counter(
            name="casework_status_changes_total",
            documentation="Status history records written",
            labelnames=["service", "environment", "source"],
            registry=self._registry,
        )
        self.document_reviews_total = Counter(
            name="casework_document_reviews_total",
            documentation="Document review decisions",
            labelnames=["service", "environment", "decision"],
            registry=self._registry,
        )
        self.document_uploads_total = Counter(
            name="casework_document_uploads_total",
            documentation="Document versions registered",
            labelnames=["service", "environment"],
            registry=self._registry,
        )
        self.bulk_operation_items_total = Counter(
            name="casework_bulk_operation_items_total",
            documentation="Items processed by bulk operations",
            labelnames=["service", "environment", "operation", "outcome"],
            registry=self._registry,
        )

    def _base_labels(self) -> dict[str, str]:
        return {"service": self._service_name, "environment": self._environment}

    def record_startup(self) -> None:
        self._started_at = time.time()

    def update_uptime(self) -> None:
        if self._started_at is None:
            return
        self.uptime_seconds.labels(**self._base_labels()).set(
            time.time() - self._started_at
        )

    def observe_request_duration(
        self, method: str, endpoint: str, duration: float
    ) -> None:
        self.http_request_duration_seconds.labels(
            method=method, endpoint=endpoint, **self._base_labels()
        ).observe(duration)

    def increment_requests(self, method: str, endpoint: str, status: str) -> None:
        self.http_requests_total.labels(
            method=method, endpoint=endpoint, status=status, **self._base_labels()
        ).inc()

    def increment_failed_requests(
        self, method: str, endpoint: str, status: str, error_type: str
    ) -> None:
        self.http_requests_failed_total.labels(
            method=method,
            endpoint=endpoint,
            status=status,
            error_type=error_type,
            **self._base_labels(),
        ).inc()

    def increment_status_changes(self, source: str, count: int = 1) -> None:
        """Count status records written.

        Args:
            source: Operation that wrote them (e.g. "add_status", "bulk").
            count: Number of records.
        """
        self.status_changes_total.labels(source=source, **self._base_labels()).inc(
            count
        )

    def increment_document_reviews(self, decision: str) -> None:
        """Count a review decision ("approved" or "rejected")."""
        self.document_reviews_total.labels(
            decision=decision, **self._base_labels()
        ).inc()

    def increment_document_uploads(self) -> None:
        self.document_uploads_total.labels(**self._base_labels()).inc()

    def record_bulk_items(self, operation: str, successful: int, failed: int) -> None:
        """Count bulk operation items by outcome."""
        labels = self._base_labels()
        if successful:
            self.bulk_operation_items_total.labels(
                operation=operation, outcome="success", **labels
            ).inc(successful)
        if failed:
            self.bulk_operation_items_total.labels(
                operation=operation, outcome="failure", **labels
            ).inc(failed)

    def get_registry(self) -> CollectorRegistry:
        return self._registry


_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the process-wide MetricsCollector (created lazily, thread-safe)."""
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def generate_metrics() -> bytes:
    """Render the registry in Prometheus text exposition format."""
    collector = get_metrics_collector()
    collector.update_uptime()
    return generate_latest(collector.get_registry())


def reset_metrics_collector() -> None:
    """Drop the process-wide collector (for testing only)."""
    global _metrics_collector
    with _collector_lock:
        _metrics_collector = None
