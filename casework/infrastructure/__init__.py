"""
Infrastructure layer - Adapters for Casework.

This layer contains:
- In-memory repository stubs (default persistence)
- SQLAlchemy persistence adapters
- Local file storage
- Observability (structlog) and monitoring (Prometheus)
"""

__all__: list[str] = []
