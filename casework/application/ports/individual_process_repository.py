"""Individual process repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.individual_process import IndividualProcess


class IndividualProcessRepositoryProtocol(Protocol):
    """Protocol for individual process storage.

    Methods:
        save: Insert or replace a process
        get: Retrieve by id
        delete: Remove a process
        list: Filtered listing, newest first
        count_by_case_status: Number of processes using a case status
        find_in_collective: Process of a person inside a collective process
    """

    async def save(self, process: IndividualProcess) -> None:
        ...

    async def get(self, process_id: UUID) -> IndividualProcess | None:
        ...

    async def delete(self, process_id: UUID) -> None:
        """Remove a process.

        Raises:
            KeyError: If the process does not exist.
        """
        ...

    async def list(
        self,
        collective_process_id: UUID | None = None,
        case_status_id: UUID | None = None,
        is_active: bool | None = None,
        collective_process_ids: set[UUID] | None = None,
    ) -> list[IndividualProcess]:
        """List processes ordered by created_at desc.

        Args:
            collective_process_id: Only members of this collective process.
            case_status_id: Only processes in this case status.
            is_active: Filter on the active flag.
            collective_process_ids: Restrict to these collective processes
                (used to scope client listings to their company).
        """
        ...

    async def count_by_case_status(self, case_status_id: UUID) -> int:
        ...

    async def find_in_collective(
        self, collective_process_id: UUID, person_id: UUID
    ) -> IndividualProcess | None:
        ...
