"""In-memory case status repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.case_status_repository import (
    CaseStatusRepositoryProtocol,
)
from casework.domain.models.case_status import CaseStatus


class CaseStatusRepositoryStub(CaseStatusRepositoryProtocol):
    """In-memory CaseStatusRepositoryProtocol.

    Attributes:
        _statuses: Dictionary mapping status id to CaseStatus.
    """

    def __init__(self) -> None:
        self._statuses: dict[UUID, CaseStatus] = {}

    async def save(self, status: CaseStatus) -> None:
        self._statuses[status.id] = status

    async def get(self, status_id: UUID) -> CaseStatus | None:
        return self._statuses.get(status_id)

    async def get_by_code(self, code: str) -> CaseStatus | None:
        return next((s for s in self._statuses.values() if s.code == code), None)

    async def list(self, include_inactive: bool = False) -> list[CaseStatus]:
        statuses = [
            s for s in self._statuses.values() if include_inactive or s.is_active
        ]
        statuses.sort(key=lambda s: (s.sort_order, s.name))
        return statuses

    def clear(self) -> None:
        self._statuses.clear()
