"""Status history repository port.

The active-status swap (deactivate every other record of the process and
store the new active one) must be atomic; see save_active.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.status_record import StatusRecord


class StatusRecordRepositoryProtocol(Protocol):
    """Protocol for status history storage."""

    async def save(self, record: StatusRecord) -> None:
        """Insert or replace a record as-is."""
        ...

    async def save_active(self, record: StatusRecord) -> list[StatusRecord]:
        """Atomically deactivate the process's other records and store record.

        Args:
            record: An active record.

        Returns:
            The records that were deactivated.
        """
        ...

    async def get(self, record_id: UUID) -> StatusRecord | None:
        ...

    async def get_active(self, individual_process_id: UUID) -> StatusRecord | None:
        ...

    async def list_for_process(self, individual_process_id: UUID) -> list[StatusRecord]:
        """All records of a process, in insertion order."""
        ...

    async def delete(self, record_id: UUID) -> None:
        ...

    async def delete_for_process(self, individual_process_id: UUID) -> int:
        """Delete every record of a process; returns the number deleted."""
        ...
