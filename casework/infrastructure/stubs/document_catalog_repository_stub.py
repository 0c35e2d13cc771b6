"""In-memory document catalogue repositories for development and testing."""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.document_catalog_repository import (
    DocumentTemplateRepositoryProtocol,
    DocumentTypeRepositoryProtocol,
)
from casework.domain.models.document_catalog import (
    DocumentRequirement,
    DocumentTemplate,
    DocumentType,
)


class DocumentTypeRepositoryStub(DocumentTypeRepositoryProtocol):
    """In-memory DocumentTypeRepositoryProtocol."""

    def __init__(self) -> None:
        self._types: dict[UUID, DocumentType] = {}

    async def save(self, document_type: DocumentType) -> None:
        self._types[document_type.id] = document_type

    async def get(self, type_id: UUID) -> DocumentType | None:
        return self._types.get(type_id)

    async def get_by_code(self, code: str) -> DocumentType | None:
        return next((t for t in self._types.values() if t.code == code), None)

    async def list(self, include_inactive: bool = False) -> list[DocumentType]:
        types = [t for t in self._types.values() if include_inactive or t.is_active]
        types.sort(key=lambda t: t.name.casefold())
        return types

    def clear(self) -> None:
        self._types.clear()


class DocumentTemplateRepositoryStub(DocumentTemplateRepositoryProtocol):
    """In-memory DocumentTemplateRepositoryProtocol.

    Attributes:
        _templates: Dictionary mapping template id to DocumentTemplate.
        _requirements: Dictionary mapping requirement id to DocumentRequirement.
    """

    def __init__(self) -> None:
        self._templates: dict[UUID, DocumentTemplate] = {}
        self._requirements: dict[UUID, DocumentRequirement] = {}

    async def save(self, template: DocumentTemplate) -> None:
        self._templates[template.id] = template

    async def get(self, template_id: UUID) -> DocumentTemplate | None:
        return self._templates.get(template_id)

    async def list(self, process_type_id: str | None = None) -> list[DocumentTemplate]:
        templates = [
            t
            for t in self._templates.values()
            if process_type_id is None or t.process_type_id == process_type_id
        ]
        templates.sort(key=lambda t: t.version, reverse=True)
        return templates

    async def save_requirement(self, requirement: DocumentRequirement) -> None:
        self._requirements[requirement.id] = requirement

    async def get_requirement(self, requirement_id: UUID) -> DocumentRequirement | None:
        return self._requirements.get(requirement_id)

    async def list_requirements(self, template_id: UUID) -> list[DocumentRequirement]:
        requirements = [
            r for r in self._requirements.values() if r.template_id == template_id
        ]
        requirements.sort(key=lambda r: r.sort_order)
        return requirements

    async def delete_requirement(self, requirement_id: UUID) -> None:
        if requirement_id not in self._requirements:
            raise KeyError(f"Document requirement not found: {requirement_id}")
        del self._requirements[requirement_id]

    def clear(self) -> None:
        self._templates.clear()
        self._requirements.clear()
