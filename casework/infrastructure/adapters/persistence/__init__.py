"""PostgreSQL adapters (SQLAlchemy async sessions, SQL text queries)."""

from casework.infrastructure.adapters.persistence.activity_log_repository import (
    PostgresActivityLogRepository,
)
from casework.infrastructure.adapters.persistence.notification_repository import (
    PostgresNotificationRepository,
)
from casework.infrastructure.adapters.persistence.schema import SCHEMA_STATEMENTS

__all__ = [
    "PostgresActivityLogRepository",
    "PostgresNotificationRepository",
    "SCHEMA_STATEMENTS",
]
