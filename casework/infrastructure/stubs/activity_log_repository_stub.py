"""In-memory activity log repository for development and testing."""

from __future__ import annotations

from casework.application.ports.activity_log_repository import (
    ActivityLogFilter,
    ActivityLogRepositoryProtocol,
)
from casework.domain.models.activity_log import ActivityLog


def _matches(entry: ActivityLog, filters: ActivityLogFilter) -> bool:
    if filters.user_id is not None and entry.user_id != filters.user_id:
        return False
    if filters.entity_type is not None and entry.entity_type != filters.entity_type:
        return False
    if filters.entity_id is not None and entry.entity_id != filters.entity_id:
        return False
    if filters.action is not None and entry.action != filters.action:
        return False
    if filters.start is not None and entry.created_at < filters.start:
        return False
    if filters.end is not None and entry.created_at > filters.end:
        return False
    return True


class ActivityLogRepositoryStub(ActivityLogRepositoryProtocol):
    """In-memory ActivityLogRepositoryProtocol.

    Attributes:
        _entries: Entries in insertion order.
    """

    def __init__(self) -> None:
        self._entries: list[ActivityLog] = []

    async def save(self, entry: ActivityLog) -> None:
        self._entries.append(entry)

    async def query(
        self,
        filters: ActivityLogFilter,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[ActivityLog], int]:
        matching = [e for e in self._entries if _matches(e, filters)]
        matching.sort(key=lambda e: e.created_at, reverse=True)
        total = len(matching)
        return matching[offset : offset + limit], total

    @property
    def entries(self) -> list[ActivityLog]:
        """All stored entries (for testing)."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
