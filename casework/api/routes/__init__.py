"""
API routes for Casework.

This module contains all FastAPI router definitions.
Routes are organized by domain concern.

Available routers:
- health, metrics: Operational endpoints
- case_statuses: Case status catalogue
- individual_processes: Individual processes and their status history
- collective_processes: Collective processes, member cascades
- documents, document_catalog: Delivered documents, types and templates
- bulk: Bulk operations
- activity_logs, notifications: Audit trail and user notifications
- people: People
- users: User profiles and the current user
- reference_data: Companies, process types and legal frameworks
"""

from casework.api.routes.activity_logs import router as activity_logs_router
from casework.api.routes.bulk import router as bulk_router
from casework.api.routes.case_statuses import router as case_statuses_router
from casework.api.routes.collective_processes import (
    router as collective_processes_router,
)
from casework.api.routes.document_catalog import (
    templates_router as document_templates_router,
)
from casework.api.routes.document_catalog import types_router as document_types_router
from casework.api.routes.documents import router as documents_router
from casework.api.routes.health import router as health_router
from casework.api.routes.individual_processes import (
    records_router as status_records_router,
)
from casework.api.routes.individual_processes import (
    router as individual_processes_router,
)
from casework.api.routes.metrics import router as metrics_router
from casework.api.routes.notifications import router as notifications_router
from casework.api.routes.people import router as people_router
from casework.api.routes.reference_data import (
    companies_router,
    legal_frameworks_router,
    process_types_router,
)
from casework.api.routes.users import router as users_router

__all__: list[str] = [
    "activity_logs_router",
    "bulk_router",
    "case_statuses_router",
    "collective_processes_router",
    "companies_router",
    "document_templates_router",
    "document_types_router",
    "documents_router",
    "health_router",
    "individual_processes_router",
    "legal_frameworks_router",
    "metrics_router",
    "notifications_router",
    "people_router",
    "process_types_router",
    "status_records_router",
    "users_router",
]
