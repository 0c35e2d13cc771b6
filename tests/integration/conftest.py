"""
Integration test configuration.

Provides:
- A session-scoped PostgreSQL 16 container (testcontainers) for the
  database-backed repositories
- A per-test session factory with the schema applied and tables truncated
- A TestClient over the full application with in-memory repositories

Usage:
    @pytest.mark.integration
    async def test_example(session_factory: async_sessionmaker[AsyncSession]) -> None:
        repository = PostgresNotificationRepository(session_factory)
        ...

Note: Docker must be running for the PostgreSQL fixtures.
"""

from collections.abc import AsyncGenerator, Generator, Iterator
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from casework.api.dependencies.casework import set_casework_config
from casework.config import TEST_CASEWORK_CONFIG
from casework.infrastructure.adapters.persistence.schema import SCHEMA_STATEMENTS


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container, started once per run."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """Get the asyncpg connection URL for the container.

    testcontainers returns a psycopg2 URL by default.
    """
    sync_url = postgres_container.get_connection_url()
    async_url: str = sync_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    ).replace("postgresql://", "postgresql+asyncpg://")
    return async_url


@pytest.fixture
async def session_factory(
    postgres_async_url: str,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Per-test session factory over a freshly truncated schema."""
    engine = create_async_engine(postgres_async_url, echo=False)
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with factory() as session:
        for statement in SCHEMA_STATEMENTS:
            await session.execute(text(statement))
        await session.execute(text("TRUNCATE activity_logs, notifications"))
        await session.commit()

    yield factory

    await engine.dispose()


@pytest.fixture
def client(tmp_path) -> Iterator[TestClient]:  # type: ignore[no-untyped-def]
    """TestClient over the application with in-memory persistence."""
    from casework.api.main import app

    set_casework_config(replace(TEST_CASEWORK_CONFIG, upload_dir=str(tmp_path)))
    with TestClient(app) as test_client:
        yield test_client
