"""In-memory delivered document repository for development and testing."""

from __future__ import annotations

import asyncio
from uuid import UUID

from casework.application.ports.document_repository import DocumentRepositoryProtocol
from casework.domain.models.document import DocumentDelivered, DocumentStatus


class DocumentRepositoryStub(DocumentRepositoryProtocol):
    """In-memory DocumentRepositoryProtocol.

    Attributes:
        _documents: Dictionary mapping document id to DocumentDelivered.
    """

    def __init__(self) -> None:
        self._documents: dict[UUID, DocumentDelivered] = {}
        # Serializes version demotion so one history never has two latest records
        self._version_lock = asyncio.Lock()

    async def save(self, document: DocumentDelivered) -> None:
        self._documents[document.id] = document

    async def save_version(self, document: DocumentDelivered) -> DocumentDelivered:
        async with self._version_lock:
            key = document.history_key()
            previous = next(
                (
                    d
                    for d in self._documents.values()
                    if d.is_latest and d.id != document.id and d.history_key() == key
                ),
                None,
            )
            if previous is not None:
                self._documents[previous.id] = previous.superseded()
                document = document.with_changes(version=previous.version + 1)
            document = document.with_changes(is_latest=True)
            self._documents[document.id] = document
            return document

    async def get(self, document_id: UUID) -> DocumentDelivered | None:
        return self._documents.get(document_id)

    async def list_for_process(
        self,
        individual_process_id: UUID,
        status: DocumentStatus | None = None,
        latest_only: bool = True,
    ) -> list[DocumentDelivered]:
        matching = [
            d
            for d in self._documents.values()
            if d.individual_process_id == individual_process_id
            and (not latest_only or d.is_latest)
            and (status is None or d.status == status)
        ]
        matching.sort(key=lambda d: d.created_at, reverse=True)
        return matching

    async def list_history(
        self,
        individual_process_id: UUID,
        document_type_id: UUID | None,
        document_requirement_id: UUID | None,
    ) -> list[DocumentDelivered]:
        key = (individual_process_id, document_type_id, document_requirement_id)
        history = [d for d in self._documents.values() if d.history_key() == key]
        history.sort(key=lambda d: d.version, reverse=True)
        return history

    async def count_for_requirement(self, document_requirement_id: UUID) -> int:
        return sum(
            1
            for d in self._documents.values()
            if d.document_requirement_id == document_requirement_id
        )

    def clear(self) -> None:
        self._documents.clear()
