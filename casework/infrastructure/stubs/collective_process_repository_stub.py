"""In-memory collective process repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.collective_process_repository import (
    CollectiveProcessRepositoryProtocol,
)
from casework.domain.models.collective_process import CollectiveProcess


class CollectiveProcessRepositoryStub(CollectiveProcessRepositoryProtocol):
    """In-memory CollectiveProcessRepositoryProtocol."""

    def __init__(self) -> None:
        self._processes: dict[UUID, CollectiveProcess] = {}

    async def save(self, process: CollectiveProcess) -> None:
        self._processes[process.id] = process

    async def get(self, process_id: UUID) -> CollectiveProcess | None:
        return self._processes.get(process_id)

    async def get_by_reference(self, reference_number: str) -> CollectiveProcess | None:
        return next(
            (
                p
                for p in self._processes.values()
                if p.reference_number == reference_number
            ),
            None,
        )

    async def list(self, company_id: str | None = None) -> list[CollectiveProcess]:
        matching = [
            p
            for p in self._processes.values()
            if company_id is None or p.company_id == company_id
        ]
        matching.sort(key=lambda p: p.created_at, reverse=True)
        return matching

    async def delete(self, process_id: UUID) -> None:
        if process_id not in self._processes:
            raise KeyError(f"Collective process not found: {process_id}")
        del self._processes[process_id]

    def clear(self) -> None:
        self._processes.clear()
