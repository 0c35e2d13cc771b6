"""Document catalogue service: document types, templates and requirements."""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID, uuid4

from casework.application.ports.document_catalog_repository import (
    DocumentTemplateRepositoryProtocol,
    DocumentTypeRepositoryProtocol,
)
from casework.application.ports.document_repository import DocumentRepositoryProtocol
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.reference_data_service import ReferenceDataService
from casework.domain.errors.entity import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from casework.domain.models.document_catalog import (
    DocumentRequirement,
    DocumentTemplate,
    DocumentType,
    ValidityType,
)
from casework.domain.models.user_profile import UserProfile


def _normalize_formats(formats: Iterable[str]) -> tuple[str, ...]:
    return tuple(f.lower().lstrip(".") for f in formats if f.strip())


class DocumentCatalogService(LoggingMixin):
    """Maintains document types and versioned checklist templates.

    Attributes:
        _types: Document type repository.
        _templates: Template and requirement repository.
        _documents: Delivered documents (usage checks).
    """

    def __init__(
        self,
        types: DocumentTypeRepositoryProtocol,
        templates: DocumentTemplateRepositoryProtocol,
        documents: DocumentRepositoryProtocol,
        access: AccessControlService,
        activity: ActivityLogService,
        reference: ReferenceDataService,
    ) -> None:
        self._types = types
        self._templates = templates
        self._documents = documents
        self._access = access
        self._activity = activity
        self._reference = reference
        self._init_logger(component="documents")

    # Document types

    async def get_type(self, type_id: UUID) -> DocumentType:
        document_type = await self._types.get(type_id)
        if document_type is None:
            raise EntityNotFoundError("Document type", type_id)
        return document_type

    async def list_types(self, include_inactive: bool = False) -> list[DocumentType]:
        return await self._types.list(include_inactive=include_inactive)

    async def list_active_types(self) -> list[DocumentType]:
        return await self._types.list()

    async def create_type(
        self,
        actor: UserProfile,
        name: str,
        code: str | None = None,
        category: str | None = None,
        description: str | None = None,
        validity_type: ValidityType | None = None,
        validity_days: int | None = None,
        allowed_file_types: Iterable[str] = (),
        max_file_size_mb: int | None = None,
    ) -> DocumentType:
        """Create a document type (admin only).

        Raises:
            DuplicateEntityError: If code is already used.
        """
        self._access.require_admin(actor)
        if code and await self._types.get_by_code(code) is not None:
            raise DuplicateEntityError(
                "Document type",
                "code",
                code,
                message="A document type with this code already exists",
            )
        document_type = DocumentType(
            id=uuid4(),
            name=name,
            code=code,
            category=category,
            description=description,
            validity_type=validity_type,
            validity_days=validity_days,
            allowed_file_types=_normalize_formats(allowed_file_types),
            max_file_size_mb=max_file_size_mb,
        )
        await self._types.save(document_type)
        self._log_operation("create_type", code=code).info(
            "document_type_created", document_type_id=str(document_type.id)
        )
        await self._activity.log_activity(
            actor.id,
            "created",
            "document_type",
            document_type.id,
            {"name": name, "code": code},
        )
        return document_type

    async def update_type(
        self, actor: UserProfile, type_id: UUID, **changes: object
    ) -> DocumentType:
        self._access.require_admin(actor)
        existing = await self.get_type(type_id)
        updates = {k: v for k, v in changes.items() if v is not None}
        new_code = updates.get("code")
        if new_code and new_code != existing.code:
            other = await self._types.get_by_code(str(new_code))
            if other is not None and other.id != type_id:
                raise DuplicateEntityError(
                    "Document type",
                    "code",
                    new_code,
                    message="A document type with this code already exists",
                )
        if "allowed_file_types" in updates:
            updates["allowed_file_types"] = _normalize_formats(
                updates["allowed_file_types"]  # type: ignore[arg-type]
            )
        updated = existing.with_changes(**updates)
        await self._types.save(updated)
        await self._activity.log_activity(
            actor.id, "updated", "document_type", type_id, {"fields": sorted(updates)}
        )
        return updated

    async def remove_type(self, actor: UserProfile, type_id: UUID) -> DocumentType:
        """Deactivate a document type (admin only)."""
        self._access.require_admin(actor)
        existing = await self.get_type(type_id)
        removed = existing.with_changes(is_active=False)
        await self._types.save(removed)
        await self._activity.log_activity(
            actor.id,
            "deleted",
            "document_type",
            type_id,
            {"name": existing.name, "code": existing.code},
        )
        return removed

    # Templates

    async def get_template(self, template_id: UUID) -> DocumentTemplate:
        template = await self._templates.get(template_id)
        if template is None:
            raise EntityNotFoundError("Document template", template_id)
        return template

    async def list_templates(
        self, process_type_id: str | None = None
    ) -> list[DocumentTemplate]:
        return await self._templates.list(process_type_id=process_type_id)

    async def _next_version(
        self, process_type_id: str, legal_framework_id: str | None
    ) -> int:
        siblings = [
            t
            for t in await self._templates.list(process_type_id=process_type_id)
            if t.legal_framework_id == legal_framework_id
        ]
        return max((t.version for t in siblings), default=0) + 1

    async def create_template(
        self,
        actor: UserProfile,
        name: str,
        process_type_id: str,
        legal_framework_id: str | None = None,
        description: str | None = None,
        is_active: bool = True,
    ) -> DocumentTemplate:
        """Create a template as the next version for its process type/framework.

        Raises:
            EntityNotFoundError: If the process type or legal framework is unknown.
        """
        self._access.require_admin(actor)
        await self._reference.require_process_type(process_type_id)
        await self._reference.require_legal_framework(legal_framework_id)
        template = DocumentTemplate(
            id=uuid4(),
            name=name,
            description=description,
            process_type_id=process_type_id,
            legal_framework_id=legal_framework_id,
            is_active=is_active,
            version=await self._next_version(process_type_id, legal_framework_id),
            created_by=actor.id,
        )
        await self._templates.save(template)
        self._log_operation("create_template", process_type_id=process_type_id).info(
            "document_template_created",
            template_id=str(template.id),
            version=template.version,
        )
        await self._activity.log_activity(
            actor.id,
            "created",
            "document_template",
            template.id,
            {"name": name, "version": template.version},
        )
        return template

    async def set_template_active(
        self, actor: UserProfile, template_id: UUID, is_active: bool
    ) -> DocumentTemplate:
        self._access.require_admin(actor)
        updated = (await self.get_template(template_id)).with_changes(is_active=is_active)
        await self._templates.save(updated)
        return updated

    async def clone_template(
        self, actor: UserProfile, template_id: UUID, name: str | None = None
    ) -> DocumentTemplate:
        """Create the next version of a template with its requirements copied."""
        self._access.require_admin(actor)
        source = await self.get_template(template_id)
        clone = DocumentTemplate(
            id=uuid4(),
            name=name or source.name,
            description=source.description,
            process_type_id=source.process_type_id,
            legal_framework_id=source.legal_framework_id,
            is_active=source.is_active,
            version=await self._next_version(
                source.process_type_id, source.legal_framework_id
            ),
            created_by=actor.id,
        )
        await self._templates.save(clone)
        requirements = await self._templates.list_requirements(template_id)
        for requirement in requirements:
            await self._templates.save_requirement(
                DocumentRequirement(
                    id=uuid4(),
                    template_id=clone.id,
                    document_type_id=requirement.document_type_id,
                    is_required=requirement.is_required,
                    is_critical=requirement.is_critical,
                    description=requirement.description,
                    max_size_mb=requirement.max_size_mb,
                    allowed_formats=requirement.allowed_formats,
                    sort_order=requirement.sort_order,
                    validity_days=requirement.validity_days,
                    requires_translation=requirement.requires_translation,
                    requires_notarization=requirement.requires_notarization,
                )
            )
        self._log_operation("clone_template", template_id=str(template_id)).info(
            "document_template_cloned",
            clone_id=str(clone.id),
            version=clone.version,
            requirements=len(requirements),
        )
        await self._activity.log_activity(
            actor.id,
            "cloned",
            "document_template",
            clone.id,
            {"source_template_id": str(template_id), "version": clone.version},
        )
        return clone

    # Requirements

    async def add_requirement(
        self,
        actor: UserProfile,
        template_id: UUID,
        document_type_id: UUID,
        is_required: bool = True,
        is_critical: bool = False,
        description: str | None = None,
        max_size_mb: int = 10,
        allowed_formats: Iterable[str] = ("pdf", "jpg", "jpeg", "png"),
        sort_order: int | None = None,
        validity_days: int | None = None,
        requires_translation: bool = False,
        requires_notarization: bool = False,
    ) -> DocumentRequirement:
        """Add a requirement to a template (appended when sort_order is None)."""
        self._access.require_admin(actor)
        await self.get_template(template_id)
        await self.get_type(document_type_id)
        if sort_order is None:
            existing = await self._templates.list_requirements(template_id)
            sort_order = max((r.sort_order for r in existing), default=-1) + 1
        requirement = DocumentRequirement(
            id=uuid4(),
            template_id=template_id,
            document_type_id=document_type_id,
            is_required=is_required,
            is_critical=is_critical,
            description=description,
            max_size_mb=max_size_mb,
            allowed_formats=_normalize_formats(allowed_formats),
            sort_order=sort_order,
            validity_days=validity_days,
            requires_translation=requires_translation,
            requires_notarization=requires_notarization,
        )
        await self._templates.save_requirement(requirement)
        return requirement

    async def list_requirements(self, template_id: UUID) -> list[DocumentRequirement]:
        await self.get_template(template_id)
        return await self._templates.list_requirements(template_id)

    async def remove_requirement(self, actor: UserProfile, requirement_id: UUID) -> None:
        """Delete a requirement no delivered document refers to.

        Raises:
            EntityInUseError: If documents were delivered for it.
        """
        self._access.require_admin(actor)
        if await self._templates.get_requirement(requirement_id) is None:
            raise EntityNotFoundError("Document requirement", requirement_id)
        if await self._documents.count_for_requirement(requirement_id) > 0:
            raise EntityInUseError(
                "Document requirement",
                requirement_id,
                "Cannot delete requirement that has documents delivered. "
                "Please remove or reassign the documents first.",
            )
        await self._templates.delete_requirement(requirement_id)
