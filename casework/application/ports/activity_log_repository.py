"""Activity log repository port."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from casework.domain.models.activity_log import ActivityLog


@dataclass(frozen=True)
class ActivityLogFilter:
    """Filters for activity log queries (all optional, combined with AND)."""

    user_id: UUID | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    action: str | None = None
    start: datetime | None = None
    end: datetime | None = None


class ActivityLogRepositoryProtocol(Protocol):
    """Protocol for append-only activity log storage."""

    async def save(self, entry: ActivityLog) -> None:
        ...

    async def query(
        self,
        filters: ActivityLogFilter,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[ActivityLog], int]:
        """Query entries, newest first.

        Args:
            filters: Criteria to match.
            limit: Maximum entries returned.
            offset: Entries skipped.

        Returns:
            Tuple of (entries, total matching).
        """
        ...
