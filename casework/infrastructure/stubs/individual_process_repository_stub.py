"""In-memory individual process repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.individual_process_repository import (
    IndividualProcessRepositoryProtocol,
)
from casework.domain.models.individual_process import IndividualProcess


class IndividualProcessRepositoryStub(IndividualProcessRepositoryProtocol):
    """In-memory IndividualProcessRepositoryProtocol.

    Attributes:
        _processes: Dictionary mapping process id to IndividualProcess.
    """

    def __init__(self) -> None:
        self._processes: dict[UUID, IndividualProcess] = {}

    async def save(self, process: IndividualProcess) -> None:
        self._processes[process.id] = process

    async def get(self, process_id: UUID) -> IndividualProcess | None:
        return self._processes.get(process_id)

    async def delete(self, process_id: UUID) -> None:
        if process_id not in self._processes:
            raise KeyError(f"Individual process not found: {process_id}")
        del self._processes[process_id]

    async def list(
        self,
        collective_process_id: UUID | None = None,
        case_status_id: UUID | None = None,
        is_active: bool | None = None,
        collective_process_ids: set[UUID] | None = None,
    ) -> list[IndividualProcess]:
        matching = list(self._processes.values())
        if collective_process_id is not None:
            matching = [
                p for p in matching if p.collective_process_id == collective_process_id
            ]
        if case_status_id is not None:
            matching = [p for p in matching if p.case_status_id == case_status_id]
        if is_active is not None:
            matching = [p for p in matching if p.is_active == is_active]
        if collective_process_ids is not None:
            matching = [
                p for p in matching if p.collective_process_id in collective_process_ids
            ]
        matching.sort(key=lambda p: p.created_at, reverse=True)
        return matching

    async def count_by_case_status(self, case_status_id: UUID) -> int:
        return sum(
            1 for p in self._processes.values() if p.case_status_id == case_status_id
        )

    async def find_in_collective(
        self, collective_process_id: UUID, person_id: UUID
    ) -> IndividualProcess | None:
        return next(
            (
                p
                for p in self._processes.values()
                if p.collective_process_id == collective_process_id
                and p.person_id == person_id
            ),
            None,
        )

    def clear(self) -> None:
        self._processes.clear()
