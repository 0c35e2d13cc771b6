"""Collective process repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.collective_process import CollectiveProcess


class CollectiveProcessRepositoryProtocol(Protocol):
    """Protocol for collective process storage."""

    async def save(self, process: CollectiveProcess) -> None:
        ...

    async def get(self, process_id: UUID) -> CollectiveProcess | None:
        ...

    async def get_by_reference(self, reference_number: str) -> CollectiveProcess | None:
        ...

    async def list(self, company_id: str | None = None) -> list[CollectiveProcess]:
        """List collective processes, newest first, optionally for one company."""
        ...

    async def delete(self, process_id: UUID) -> None:
        ...
