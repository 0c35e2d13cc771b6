"""Case status catalogue service.

Admins maintain the catalogue of case statuses. A status referenced by
any individual process cannot change its code, be removed, or be
deactivated.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID, uuid4

from casework.application.ports.case_status_repository import (
    CaseStatusRepositoryProtocol,
)
from casework.application.ports.individual_process_repository import (
    IndividualProcessRepositoryProtocol,
)
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.domain.errors.entity import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from casework.domain.errors.validation import ValidationError
from casework.domain.models.case_status import CaseStatus
from casework.domain.models.user_profile import UserProfile
from casework.domain.services.fillable_fields import validate_fillable_field_names

ENTITY_TYPE = "case_status"


class CaseStatusService(LoggingMixin):
    """CRUD and ordering for the case status catalogue.

    Attributes:
        _statuses: Case status repository.
        _processes: Individual process repository (usage checks).
        _access: Access control.
        _activity: Activity log.
    """

    def __init__(
        self,
        statuses: CaseStatusRepositoryProtocol,
        processes: IndividualProcessRepositoryProtocol,
        access: AccessControlService,
        activity: ActivityLogService,
    ) -> None:
        self._statuses = statuses
        self._processes = processes
        self._access = access
        self._activity = activity
        self._init_logger(component="case_statuses")

    async def list(self, include_inactive: bool = False) -> list[CaseStatus]:
        return await self._statuses.list(include_inactive=include_inactive)

    async def list_active(self) -> list[CaseStatus]:
        return await self._statuses.list(include_inactive=False)

    async def list_by_category(self, category: str) -> list[CaseStatus]:
        return [s for s in await self._statuses.list() if s.category == category]

    async def get(self, status_id: UUID) -> CaseStatus:
        status = await self._statuses.get(status_id)
        if status is None:
            raise EntityNotFoundError("Case status", status_id)
        return status

    async def get_by_code(self, code: str) -> CaseStatus | None:
        return await self._statuses.get_by_code(code)

    async def _is_in_use(self, status_id: UUID) -> bool:
        return await self._processes.count_by_case_status(status_id) > 0

    async def create(
        self,
        actor: UserProfile,
        name: str,
        code: str,
        name_en: str | None = None,
        description: str | None = None,
        category: str | None = None,
        color: str | None = None,
        sort_order: int = 0,
        fillable_fields: Iterable[str] = (),
    ) -> CaseStatus:
        """Create an active case status.

        Raises:
            AdminRequiredError: If actor is not an admin.
            DuplicateEntityError: If code is taken.
            InvalidFillableFieldsError: If a fillable field name is unknown.
        """
        self._access.require_admin(actor)
        log = self._log_operation("create", code=code)

        if await self._statuses.get_by_code(code) is not None:
            raise DuplicateEntityError(
                "Case status",
                "code",
                code,
                message=f'Case status with code "{code}" already exists',
            )

        status = CaseStatus(
            id=uuid4(),
            name=name,
            name_en=name_en,
            code=code,
            description=description,
            category=category,
            color=color,
            sort_order=sort_order,
            fillable_fields=tuple(validate_fillable_field_names(fillable_fields)),
        )
        await self._statuses.save(status)
        log.info("case_status_created", case_status_id=str(status.id))
        await self._activity.log_activity(
            actor.id, "created", ENTITY_TYPE, status.id, {"code": code, "name": name}
        )
        return status

    async def update(
        self,
        actor: UserProfile,
        status_id: UUID,
        **changes: object,
    ) -> CaseStatus:
        """Update catalogue attributes.

        Args:
            actor: Must be an admin.
            status_id: Status to update.
            **changes: Any of name, name_en, code, description, category,
                color, sort_order, fillable_fields. None values are ignored.

        Raises:
            ValidationError: If an attribute is not editable.
            EntityInUseError: If changing the code of a status in use.
            DuplicateEntityError: If the new code is taken.
        """
        self._access.require_admin(actor)
        existing = await self.get(status_id)
        allowed = {
            "name",
            "name_en",
            "code",
            "description",
            "category",
            "color",
            "sort_order",
            "fillable_fields",
        }
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(
                f"Unknown case status attributes: {', '.join(sorted(unknown))}"
            )
        updates = {k: v for k, v in changes.items() if v is not None}

        new_code = updates.get("code")
        if new_code is not None and new_code != existing.code:
            if await self._is_in_use(status_id):
                raise EntityInUseError(
                    "Case status",
                    status_id,
                    "Cannot change code of case status that is in use",
                )
            if await self._statuses.get_by_code(str(new_code)) is not None:
                raise DuplicateEntityError(
                    "Case status",
                    "code",
                    new_code,
                    message=f'Case status with code "{new_code}" already exists',
                )
        if "fillable_fields" in updates:
            updates["fillable_fields"] = tuple(
                validate_fillable_field_names(updates["fillable_fields"])  # type: ignore[arg-type]
            )

        updated = existing.with_changes(**updates)
        await self._statuses.save(updated)
        self._log_operation("update", case_status_id=str(status_id)).info(
            "case_status_updated", fields=sorted(updates)
        )
        await self._activity.log_activity(
            actor.id, "updated", ENTITY_TYPE, status_id, {"fields": sorted(updates)}
        )
        return updated

    async def remove(self, actor: UserProfile, status_id: UUID) -> CaseStatus:
        """Soft delete (deactivate) a status that nothing uses."""
        self._access.require_admin(actor)
        existing = await self.get(status_id)
        if await self._is_in_use(status_id):
            raise EntityInUseError(
                "Case status",
                status_id,
                "Cannot delete case status that is in use. "
                "You can deactivate it instead.",
            )
        removed = existing.with_changes(is_active=False)
        await self._statuses.save(removed)
        await self._activity.log_activity(
            actor.id, "deleted", ENTITY_TYPE, status_id, {"code": existing.code}
        )
        return removed

    async def toggle_active(
        self, actor: UserProfile, status_id: UUID, is_active: bool
    ) -> CaseStatus:
        self._access.require_admin(actor)
        existing = await self.get(status_id)
        if not is_active and await self._is_in_use(status_id):
            raise EntityInUseError(
                "Case status", status_id, "Cannot deactivate case status that is in use"
            )
        updated = existing.with_changes(is_active=is_active)
        await self._statuses.save(updated)
        await self._activity.log_activity(
            actor.id,
            "activated" if is_active else "deactivated",
            ENTITY_TYPE,
            status_id,
        )
        return updated

    async def reorder(
        self, actor: UserProfile, updates: Iterable[tuple[UUID, int]]
    ) -> int:
        """Apply new sort orders; returns the number of statuses updated.

        Every id is checked before anything is written.

        Raises:
            EntityNotFoundError: If any id is unknown.
        """
        self._access.require_admin(actor)
        pending = []
        for status_id, sort_order in updates:
            pending.append((await self.get(status_id), sort_order))
        for status, sort_order in pending:
            await self._statuses.save(status.with_changes(sort_order=sort_order))
        self._log_operation("reorder").info("case_statuses_reordered", count=len(pending))
        await self._activity.log_activity(
            actor.id, "reordered", ENTITY_TYPE, "catalogue", {"updated": len(pending)}
        )
        return len(pending)
