"""
Pytest configuration and shared fixtures for Casework tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use the in-memory stubs from casework.infrastructure.stubs for repositories
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from collections.abc import Iterator

import pytest

from casework.api.dependencies.casework import reset_casework_dependencies
from casework.bootstrap.database import reset_database_bootstrap
from casework.bootstrap.metrics import reset_metrics


@pytest.fixture(autouse=True)
def reset_singletons() -> Iterator[None]:
    """Drop dependency, metrics and database singletons around each test."""
    reset_casework_dependencies()
    reset_metrics()
    reset_database_bootstrap()
    yield
    reset_casework_dependencies()
    reset_metrics()
    reset_database_bootstrap()


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from casework import __version__

    return __version__
