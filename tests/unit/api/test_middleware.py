"""Unit tests for the logging and metrics middleware."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from prometheus_client import generate_latest

from casework.api.middleware import LoggingMiddleware, MetricsMiddleware
from casework.api.middleware.metrics_middleware import _classify_error_type
from casework.infrastructure.monitoring.metrics import get_metrics_collector
from casework.infrastructure.observability.correlation import get_correlation_id


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)

    @app.get("/items/{item_id}")
    async def get_item(item_id: str) -> dict[str, str]:
        return {"item_id": item_id, "correlation_id": get_correlation_id()}

    @app.get("/conflict")
    async def conflict() -> None:
        raise HTTPException(status_code=409, detail="Already approved")

    return app


def _metrics() -> str:
    return generate_latest(get_metrics_collector().get_registry()).decode()


class TestMetricsMiddleware:
    """Tests for MetricsMiddleware."""

    def test_endpoint_label_is_route_template(self) -> None:
        """Ids in the path do not create new series."""
        client = TestClient(_app())

        client.get("/items/1")
        client.get("/items/2")

        output = _metrics()
        assert 'endpoint="/items/{item_id}"' in output
        assert 'endpoint="/items/1"' not in output
        assert (
            'http_requests_total{endpoint="/items/{item_id}",environment="development",'
            'method="GET",service="casework-api",status="200"} 2.0'
        ) in output

    def test_failures_classified(self) -> None:
        client = TestClient(_app())

        response = client.get("/conflict")

        assert response.status_code == 409
        assert 'error_type="conflict"' in _metrics()

    def test_unmatched_paths_share_one_label(self) -> None:
        client = TestClient(_app())

        response = client.get("/no/such/path")

        assert response.status_code == 404
        output = _metrics()
        assert 'endpoint="unmatched"' in output
        assert 'error_type="not_found"' in output

    @pytest.mark.parametrize(
        ("status", "error_type"),
        [
            (400, "bad_request"),
            (401, "unauthorized"),
            (403, "forbidden"),
            (413, "payload_too_large"),
            (418, "client_error"),
            (500, "internal_error"),
            (502, "server_error"),
        ],
    )
    def test_classify_error_type(self, status: int, error_type: str) -> None:
        assert _classify_error_type(status) == error_type


class TestLoggingMiddleware:
    """Tests for correlation id propagation."""

    def test_incoming_id_is_kept(self) -> None:
        """The caller's id is visible to handlers and echoed back."""
        client = TestClient(_app())

        response = client.get("/items/1", headers={"X-Correlation-ID": "corr-abc"})

        assert response.headers["X-Correlation-ID"] == "corr-abc"
        assert response.json()["correlation_id"] == "corr-abc"

    def test_missing_id_is_generated(self) -> None:
        client = TestClient(_app())

        first = client.get("/items/1").headers["X-Correlation-ID"]
        second = client.get("/items/1").headers["X-Correlation-ID"]

        assert first
        assert first != second
