"""Delivered document repository port.

Version history invariant: among the records sharing a history key
(process, document type, requirement), at most one has is_latest=True.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.document import DocumentDelivered, DocumentStatus


class DocumentRepositoryProtocol(Protocol):
    """Protocol for delivered document storage."""

    async def save(self, document: DocumentDelivered) -> None:
        """Insert or replace a document record as-is."""
        ...

    async def save_version(self, document: DocumentDelivered) -> DocumentDelivered:
        """Atomically store a new latest version.

        The current latest record with the same history key (if any and if
        it is not the same record) is marked is_latest=False and the new
        record's version becomes previous.version + 1.

        Returns:
            The stored record with its final version number.
        """
        ...

    async def get(self, document_id: UUID) -> DocumentDelivered | None:
        ...

    async def list_for_process(
        self,
        individual_process_id: UUID,
        status: DocumentStatus | None = None,
        latest_only: bool = True,
    ) -> list[DocumentDelivered]:
        """Documents of a process, newest first."""
        ...

    async def list_history(
        self,
        individual_process_id: UUID,
        document_type_id: UUID | None,
        document_requirement_id: UUID | None,
    ) -> list[DocumentDelivered]:
        """Every version sharing the history key, highest version first."""
        ...

    async def count_for_requirement(self, document_requirement_id: UUID) -> int:
        """Number of records (any version) fulfilling a template requirement."""
        ...
