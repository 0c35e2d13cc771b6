"""FastAPI application entry point for Casework."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from casework import __version__
from casework.api.middleware import LoggingMiddleware, MetricsMiddleware
from casework.api.routes import (
    activity_logs_router,
    bulk_router,
    case_statuses_router,
    collective_processes_router,
    companies_router,
    document_templates_router,
    document_types_router,
    documents_router,
    health_router,
    individual_processes_router,
    legal_frameworks_router,
    metrics_router,
    notifications_router,
    people_router,
    process_types_router,
    status_records_router,
    users_router,
)
from casework.api.startup import (
    configure_logging,
    initialize_database,
    seed_initial_admin,
    record_service_startup,
    shutdown_database,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    await initialize_database()
    await seed_initial_admin()
    record_service_startup()
    yield
    await shutdown_database()


app = FastAPI(
    title="Casework API",
    description="Immigration case management: processes, status history and documents",
    version=__version__,
    lifespan=lifespan,
)

# Outermost last: logging wraps metrics so the correlation id is set first.
app.add_middleware(MetricsMiddleware)
app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(metrics_router)
app.include_router(users_router)
app.include_router(people_router)
app.include_router(companies_router)
app.include_router(process_types_router)
app.include_router(legal_frameworks_router)
app.include_router(case_statuses_router)
app.include_router(collective_processes_router)
app.include_router(individual_processes_router)
app.include_router(status_records_router)
app.include_router(documents_router)
app.include_router(document_types_router)
app.include_router(document_templates_router)
app.include_router(bulk_router)
app.include_router(activity_logs_router)
app.include_router(notifications_router)
