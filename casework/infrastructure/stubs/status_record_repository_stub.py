"""In-memory status history repository for development and testing."""

from __future__ import annotations

import asyncio
from uuid import UUID

from casework.application.ports.status_record_repository import (
    StatusRecordRepositoryProtocol,
)
from casework.domain.models.status_record import StatusRecord


class StatusRecordRepositoryStub(StatusRecordRepositoryProtocol):
    """In-memory StatusRecordRepositoryProtocol.

    Attributes:
        _records: Dictionary mapping record id to StatusRecord (insertion ordered).
    """

    def __init__(self) -> None:
        self._records: dict[UUID, StatusRecord] = {}
        # Serializes the active-status swap
        self._swap_lock = asyncio.Lock()

    async def save(self, record: StatusRecord) -> None:
        self._records[record.id] = record

    async def save_active(self, record: StatusRecord) -> list[StatusRecord]:
        if not record.is_active:
            raise ValueError("save_active requires an active record")
        async with self._swap_lock:
            deactivated = []
            for other in list(self._records.values()):
                if (
                    other.individual_process_id == record.individual_process_id
                    and other.id != record.id
                    and other.is_active
                ):
                    inactive = other.deactivated()
                    self._records[other.id] = inactive
                    deactivated.append(inactive)
            self._records[record.id] = record
            return deactivated

    async def get(self, record_id: UUID) -> StatusRecord | None:
        return self._records.get(record_id)

    async def get_active(self, individual_process_id: UUID) -> StatusRecord | None:
        return next(
            (
                r
                for r in self._records.values()
                if r.individual_process_id == individual_process_id and r.is_active
            ),
            None,
        )

    async def list_for_process(self, individual_process_id: UUID) -> list[StatusRecord]:
        return [
            r
            for r in self._records.values()
            if r.individual_process_id == individual_process_id
        ]

    async def delete(self, record_id: UUID) -> None:
        if record_id not in self._records:
            raise KeyError(f"Status record not found: {record_id}")
        del self._records[record_id]

    async def delete_for_process(self, individual_process_id: UUID) -> int:
        doomed = [
            r.id
            for r in self._records.values()
            if r.individual_process_id == individual_process_id
        ]
        for record_id in doomed:
            del self._records[record_id]
        return len(doomed)

    def clear(self) -> None:
        self._records.clear()
