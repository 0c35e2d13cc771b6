"""Activity log service.

Every write operation appends an entry. Logging is fire-and-forget: a
storage failure is logged and never fails the operation that caused it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from casework.application.ports.activity_log_repository import (
    ActivityLogFilter,
    ActivityLogRepositoryProtocol,
)
from casework.application.services.base import LoggingMixin
from casework.domain.models.activity_log import ActivityLog
from casework.domain.models.user_profile import UserProfile

DEFAULT_QUERY_LIMIT = 100
HISTORY_PAGE_SIZE = 500


class ActivityLogService(LoggingMixin):
    """Records and queries the audit trail."""

    def __init__(
        self,
        repository: ActivityLogRepositoryProtocol,
        default_limit: int = DEFAULT_QUERY_LIMIT,
    ) -> None:
        self._repository = repository
        self._default_limit = default_limit
        self._init_logger(component="activity")

    async def log_activity(
        self,
        user_id: UUID,
        action: str,
        entity_type: str,
        entity_id: object,
        details: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> ActivityLog | None:
        """Append an entry; returns None when storage failed.

        Args:
            user_id: Actor that performed the action.
            action: Snake-case verb, e.g. "status_added".
            entity_type: Kind of entity acted on.
            entity_id: The entity acted on.
            details: JSON-serializable payload.
            ip_address: Client address, when known.
            user_agent: Client user agent, when known.
        """
        entry = ActivityLog(
            id=uuid4(),
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id),
            details=details or {},
            ip_address=ip_address,
            user_agent=user_agent,
        )
        try:
            await self._repository.save(entry)
        except Exception as e:
            self._log_operation(
                "log_activity", action=action, entity_type=entity_type
            ).warning("activity_log_storage_failed", error=str(e))
            return None
        return entry

    async def query(
        self,
        actor: UserProfile,
        user_id: UUID | None = None,
        entity_type: str | None = None,
        entity_id: str | None = None,
        action: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[ActivityLog], int]:
        """Query entries newest first; clients only ever see their own.

        Returns:
            Tuple of (entries, total matching).
        """
        if not actor.is_admin:
            user_id = actor.id
        filters = ActivityLogFilter(
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            start=start,
            end=end,
        )
        return await self._repository.query(
            filters, limit=limit or self._default_limit, offset=offset
        )

    async def entity_history(
        self, actor: UserProfile, entity_type: str, entity_id: str
    ) -> list[ActivityLog]:
        """Every visible entry about one entity, newest first.

        Reads the log in pages of HISTORY_PAGE_SIZE until the reported
        total is reached.
        """
        history: list[ActivityLog] = []
        while True:
            page, total = await self.query(
                actor,
                entity_type=entity_type,
                entity_id=entity_id,
                limit=HISTORY_PAGE_SIZE,
                offset=len(history),
            )
            history.extend(page)
            if not page or len(history) >= total:
                return history
