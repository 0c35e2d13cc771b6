"""Document catalogue repository ports (types, templates, requirements)."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.document_catalog import (
    DocumentRequirement,
    DocumentTemplate,
    DocumentType,
)


class DocumentTypeRepositoryProtocol(Protocol):
    """Protocol for document type storage."""

    async def save(self, document_type: DocumentType) -> None:
        ...

    async def get(self, type_id: UUID) -> DocumentType | None:
        ...

    async def get_by_code(self, code: str) -> DocumentType | None:
        ...

    async def list(self, include_inactive: bool = False) -> list[DocumentType]:
        """List document types ordered by name."""
        ...


class DocumentTemplateRepositoryProtocol(Protocol):
    """Protocol for document templates and their requirements."""

    async def save(self, template: DocumentTemplate) -> None:
        ...

    async def get(self, template_id: UUID) -> DocumentTemplate | None:
        ...

    async def list(self, process_type_id: str | None = None) -> list[DocumentTemplate]:
        """List templates, highest version first."""
        ...

    async def save_requirement(self, requirement: DocumentRequirement) -> None:
        ...

    async def get_requirement(self, requirement_id: UUID) -> DocumentRequirement | None:
        ...

    async def list_requirements(self, template_id: UUID) -> list[DocumentRequirement]:
        """Requirements of a template ordered by sort_order."""
        ...

    async def delete_requirement(self, requirement_id: UUID) -> None:
        ...
