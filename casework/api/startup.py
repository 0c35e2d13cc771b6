"""Startup hooks for the Casework API.

- Configure structured logging
- Create the database tables when DATABASE_URL is set
- Seed the initial admin profile when CASEWORK_INITIAL_ADMIN_EMAIL is set
- Record service startup for uptime tracking

Usage in the FastAPI lifespan:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        await initialize_database()
        await seed_initial_admin()
        record_service_startup()
        yield
        await shutdown_database()
"""

from structlog import get_logger

from casework.api.dependencies.casework import (
    get_casework_config,
    get_user_profile_service,
)
from casework.bootstrap.database import close_database_engine, create_schema
from casework.bootstrap.logging import configure_structlog
from casework.infrastructure.monitoring.metrics import get_metrics_collector

logger = get_logger()


def configure_logging() -> None:
    """Configure structlog from the configured environment.

    Production renders JSON; other environments render for the console.
    """
    environment = get_casework_config().environment
    configure_structlog(environment)
    logger.info("logging_configured", environment=environment)


async def initialize_database() -> None:
    """Create tables for the database-backed repositories, if any."""
    config = get_casework_config()
    if not config.uses_database:
        logger.info("database_disabled", persistence="in_memory")
        return
    await create_schema(config.database_url)


async def seed_initial_admin() -> None:
    """Create the configured admin profile unless its e-mail is taken."""
    config = get_casework_config()
    if config.initial_admin_email is None:
        logger.info("initial_admin_not_configured")
        return
    profile = await get_user_profile_service().seed_initial_admin(
        config.initial_admin_email, config.initial_admin_name
    )
    logger.info("initial_admin_ready", user_id=str(profile.id), email=profile.email)


async def shutdown_database() -> None:
    await close_database_engine()


def record_service_startup() -> None:
    """Record service startup for uptime metrics."""
    get_metrics_collector().record_startup()
    logger.info("service_startup_recorded")
