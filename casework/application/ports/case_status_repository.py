"""Case status catalogue repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.case_status import CaseStatus


class CaseStatusRepositoryProtocol(Protocol):
    """Protocol for case status storage.

    Uniqueness of code is enforced by the service, not the repository.
    """

    async def save(self, status: CaseStatus) -> None:
        """Insert or replace a case status."""
        ...

    async def get(self, status_id: UUID) -> CaseStatus | None:
        ...

    async def get_by_code(self, code: str) -> CaseStatus | None:
        ...

    async def list(self, include_inactive: bool = False) -> list[CaseStatus]:
        """List case statuses ordered by sort_order.

        Args:
            include_inactive: Include soft-deleted statuses.
        """
        ...
