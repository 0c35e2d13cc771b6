"""Reference data service: companies, process types and legal frameworks.

Other services call the require_* lookups before storing a reference so
that company_id, process_type_id and legal_framework_id always point at
an existing catalogue entry.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from casework.application.ports.reference_data_repository import (
    CompanyRepositoryProtocol,
    LegalFrameworkRepositoryProtocol,
    ProcessTypeRepositoryProtocol,
)
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.domain.errors.entity import DuplicateEntityError, EntityNotFoundError
from casework.domain.errors.validation import ValidationError
from casework.domain.models.reference_data import Company, LegalFramework, ProcessType
from casework.domain.models.user_profile import UserProfile

COMPANY_FIELDS = frozenset(
    {"name", "tax_id", "email", "phone_number", "website", "address", "notes", "is_active"}
)
PROCESS_TYPE_FIELDS = frozenset(
    {"name", "description", "estimated_days", "sort_order", "is_active"}
)
LEGAL_FRAMEWORK_FIELDS = frozenset(
    {"name", "process_type_id", "description", "is_active"}
)


def _check_fields(entity: str, changes: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise ValidationError(f"Unknown {entity} fields: {', '.join(unknown)}")


def _require_name(name: str | None) -> None:
    if not name or not name.strip():
        raise ValidationError("Name is required", field="name")


class ReferenceDataService(LoggingMixin):
    """Maintains the company, process type and legal framework catalogues.

    Attributes:
        _companies: Company repository.
        _process_types: Process type repository.
        _frameworks: Legal framework repository.
    """

    def __init__(
        self,
        companies: CompanyRepositoryProtocol,
        process_types: ProcessTypeRepositoryProtocol,
        frameworks: LegalFrameworkRepositoryProtocol,
        access: AccessControlService,
        activity: ActivityLogService,
    ) -> None:
        self._companies = companies
        self._process_types = process_types
        self._frameworks = frameworks
        self._access = access
        self._activity = activity
        self._init_logger(component="reference_data")

    # Reference checks

    async def require_company(self, company_id: str | None) -> Company | None:
        """Return the company for company_id; None passes through.

        Raises:
            EntityNotFoundError: If company_id is set but unknown.
        """
        if company_id is None:
            return None
        return await self.get_company(company_id)

    async def require_process_type(self, process_type_id: str | None) -> ProcessType | None:
        if process_type_id is None:
            return None
        return await self.get_process_type(process_type_id)

    async def require_legal_framework(
        self, legal_framework_id: str | None
    ) -> LegalFramework | None:
        if legal_framework_id is None:
            return None
        return await self.get_legal_framework(legal_framework_id)

    async def check_references(self, fields: dict[str, Any]) -> None:
        """Check every catalogue reference present in a field mapping.

        Raises:
            EntityNotFoundError: If a referenced entry does not exist.
        """
        if fields.get("company_id") is not None:
            await self.require_company(fields["company_id"])
        if fields.get("process_type_id") is not None:
            await self.require_process_type(fields["process_type_id"])
        if fields.get("legal_framework_id") is not None:
            await self.require_legal_framework(fields["legal_framework_id"])

    # Companies

    async def get_company(self, company_id: str) -> Company:
        company = await self._companies.get(company_id)
        if company is None:
            raise EntityNotFoundError("Company", company_id)
        return company

    async def read_company(self, actor: UserProfile, company_id: str) -> Company:
        """A company the actor may see.

        Raises:
            AccessDeniedError: If a client asks for another company.
        """
        self._access.require_company_access(actor, company_id)
        return await self.get_company(company_id)

    async def list_companies(
        self, actor: UserProfile, include_inactive: bool = False
    ) -> list[Company]:
        """Companies visible to the actor; a client sees only their own."""
        companies = await self._companies.list(include_inactive=include_inactive)
        if actor.is_admin:
            return companies
        return [c for c in companies if c.id == actor.company_id]

    async def create_company(self, actor: UserProfile, name: str, **fields: Any) -> Company:
        """Create a company (admin only).

        Raises:
            ValidationError: If the name is blank or a field is unknown.
            DuplicateEntityError: If the tax id is taken.
        """
        self._access.require_admin(actor)
        _check_fields("company", fields, COMPANY_FIELDS)
        _require_name(name)
        await self._check_tax_id(fields.get("tax_id"), None)

        company = Company(id=str(uuid4()), name=name.strip(), **fields)
        await self._companies.save(company)
        self._log_operation("create_company", company_id=company.id).info("company_created")
        await self._activity.log_activity(
            actor.id, "created", "company", company.id, {"name": company.name}
        )
        return company

    async def update_company(
        self, actor: UserProfile, company_id: str, **changes: Any
    ) -> Company:
        """Change company fields (admin only); None values are ignored."""
        self._access.require_admin(actor)
        _check_fields("company", changes, COMPANY_FIELDS)
        existing = await self.get_company(company_id)
        updates = {k: v for k, v in changes.items() if v is not None}
        if "name" in updates:
            _require_name(updates["name"])
        await self._check_tax_id(updates.get("tax_id"), company_id)

        updated = existing.with_changes(**updates)
        await self._companies.save(updated)
        self._log_operation("update_company", company_id=company_id).info(
            "company_updated", fields=sorted(updates)
        )
        await self._activity.log_activity(
            actor.id, "updated", "company", company_id, {"fields": sorted(updates)}
        )
        return updated

    async def _check_tax_id(self, tax_id: str | None, company_id: str | None) -> None:
        if not tax_id:
            return
        other = await self._companies.get_by_tax_id(tax_id)
        if other is not None and other.id != company_id:
            raise DuplicateEntityError(
                "Company",
                "tax_id",
                tax_id,
                message=f"A company with tax id {tax_id} already exists",
            )

    # Process types

    async def get_process_type(self, process_type_id: str) -> ProcessType:
        process_type = await self._process_types.get(process_type_id)
        if process_type is None:
            raise EntityNotFoundError("Process type", process_type_id)
        return process_type

    async def list_process_types(self, include_inactive: bool = False) -> list[ProcessType]:
        return await self._process_types.list(include_inactive=include_inactive)

    async def create_process_type(
        self, actor: UserProfile, name: str, **fields: Any
    ) -> ProcessType:
        self._access.require_admin(actor)
        _check_fields("process type", fields, PROCESS_TYPE_FIELDS)
        _require_name(name)

        process_type = ProcessType(id=str(uuid4()), name=name.strip(), **fields)
        await self._process_types.save(process_type)
        self._log_operation("create_process_type", process_type_id=process_type.id).info(
            "process_type_created"
        )
        await self._activity.log_activity(
            actor.id, "created", "process_type", process_type.id, {"name": process_type.name}
        )
        return process_type

    async def update_process_type(
        self, actor: UserProfile, process_type_id: str, **changes: Any
    ) -> ProcessType:
        self._access.require_admin(actor)
        _check_fields("process type", changes, PROCESS_TYPE_FIELDS)
        existing = await self.get_process_type(process_type_id)
        updates = {k: v for k, v in changes.items() if v is not None}
        if "name" in updates:
            _require_name(updates["name"])

        updated = existing.with_changes(**updates)
        await self._process_types.save(updated)
        await self._activity.log_activity(
            actor.id,
            "updated",
            "process_type",
            process_type_id,
            {"fields": sorted(updates)},
        )
        return updated

    # Legal frameworks

    async def get_legal_framework(self, framework_id: str) -> LegalFramework:
        framework = await self._frameworks.get(framework_id)
        if framework is None:
            raise EntityNotFoundError("Legal framework", framework_id)
        return framework

    async def list_legal_frameworks(
        self, process_type_id: str | None = None, include_inactive: bool = False
    ) -> list[LegalFramework]:
        return await self._frameworks.list(
            process_type_id=process_type_id, include_inactive=include_inactive
        )

    async def create_legal_framework(
        self, actor: UserProfile, name: str, **fields: Any
    ) -> LegalFramework:
        """Create a legal framework (admin only).

        Raises:
            EntityNotFoundError: If process_type_id is set but unknown.
        """
        self._access.require_admin(actor)
        _check_fields("legal framework", fields, LEGAL_FRAMEWORK_FIELDS)
        _require_name(name)
        await self.require_process_type(fields.get("process_type_id"))

        framework = LegalFramework(id=str(uuid4()), name=name.strip(), **fields)
        await self._frameworks.save(framework)
        self._log_operation("create_legal_framework", framework_id=framework.id).info(
            "legal_framework_created", process_type_id=framework.process_type_id
        )
        await self._activity.log_activity(
            actor.id, "created", "legal_framework", framework.id, {"name": framework.name}
        )
        return framework

    async def update_legal_framework(
        self, actor: UserProfile, framework_id: str, **changes: Any
    ) -> LegalFramework:
        self._access.require_admin(actor)
        _check_fields("legal framework", changes, LEGAL_FRAMEWORK_FIELDS)
        existing = await self.get_legal_framework(framework_id)
        updates = {k: v for k, v in changes.items() if v is not None}
        if "name" in updates:
            _require_name(updates["name"])
        await self.require_process_type(updates.get("process_type_id"))

        updated = existing.with_changes(**updates)
        await self._frameworks.save(updated)
        await self._activity.log_activity(
            actor.id,
            "updated",
            "legal_framework",
            framework_id,
            {"fields": sorted(updates)},
        )
        return updated
