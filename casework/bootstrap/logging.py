"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from casework.infrastructure.observability import configure_structlog as _configure_structlog


def configure_structlog(environment: str) -> None:
    """Configure structlog for the given environment (level from LOG_LEVEL)."""
    _configure_structlog(environment=environment, log_level=os.environ.get("LOG_LEVEL"))


__all__ = ["configure_structlog"]
