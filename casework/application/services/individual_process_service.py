"""Individual process service.

Creating a process records its initial status (when a case status is
given) and generates its document checklist. Checklist generation is a
side effect: its failure is logged and does not fail the creation.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from casework.application.ports.case_status_repository import (
    CaseStatusRepositoryProtocol,
)
from casework.application.ports.collective_process_repository import (
    CollectiveProcessRepositoryProtocol,
)
from casework.application.ports.individual_process_repository import (
    IndividualProcessRepositoryProtocol,
)
from casework.application.ports.person_repository import PersonRepositoryProtocol
from casework.application.ports.status_record_repository import (
    StatusRecordRepositoryProtocol,
)
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.document_checklist_service import (
    DocumentChecklistService,
)
from casework.application.services.reference_data_service import ReferenceDataService
from casework.application.services.status_history_service import StatusHistoryService
from casework.domain.errors.entity import DuplicateEntityError, EntityNotFoundError
from casework.domain.errors.validation import ValidationError
from casework.domain.models.case_status import CaseStatus
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.individual_process import (
    PROCESS_FIELD_NAMES,
    IndividualProcess,
)
from casework.domain.models.user_profile import UserProfile

ENTITY_TYPE = "individual_process"

INITIAL_STATUS_NOTES = "Initial status on creation"

# Maintained by the status history, never written directly.
MANAGED_FIELDS = frozenset({"case_status_id", "status_code"})
EDITABLE_FIELDS = PROCESS_FIELD_NAMES - MANAGED_FIELDS - {"person_id"}


def _check_fields(changes: dict[str, Any]) -> None:
    unknown = sorted(set(changes) - EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(
            f"Unknown or read-only process fields: {', '.join(unknown)}",
            field=unknown[0],
        )


class IndividualProcessService(LoggingMixin):
    """Creates, reads, updates and removes individual processes.

    Attributes:
        _processes: Individual process repository.
        _people: Person repository.
        _collectives: Collective process repository.
        _statuses: Case status repository.
        _records: Status record repository.
        _history: Status history (initial status records).
        _checklists: Document checklist generation.
        _access: Access control.
        _activity: Activity log.
        _reference: Company, process type and legal framework lookups.
    """

    def __init__(
        self,
        processes: IndividualProcessRepositoryProtocol,
        people: PersonRepositoryProtocol,
        collectives: CollectiveProcessRepositoryProtocol,
        statuses: CaseStatusRepositoryProtocol,
        records: StatusRecordRepositoryProtocol,
        history: StatusHistoryService,
        checklists: DocumentChecklistService,
        access: AccessControlService,
        activity: ActivityLogService,
        reference: ReferenceDataService,
    ) -> None:
        self._processes = processes
        self._people = people
        self._collectives = collectives
        self._statuses = statuses
        self._records = records
        self._history = history
        self._checklists = checklists
        self._access = access
        self._activity = activity
        self._reference = reference
        self._init_logger(component="individual_processes")

    async def _get_process(self, process_id: UUID) -> IndividualProcess:
        process = await self._processes.get(process_id)
        if process is None:
            raise EntityNotFoundError("Individual process", process_id)
        return process

    async def get_collective(self, collective_id: UUID) -> CollectiveProcess:
        collective = await self._collectives.get(collective_id)
        if collective is None:
            raise EntityNotFoundError("Collective process", collective_id)
        return collective

    async def get_case_status(self, case_status_id: UUID) -> CaseStatus:
        case_status = await self._statuses.get(case_status_id)
        if case_status is None:
            raise EntityNotFoundError("Case status", case_status_id)
        return case_status

    async def register(
        self,
        actor: UserProfile,
        person_id: UUID,
        collective: CollectiveProcess | None = None,
        case_status: CaseStatus | None = None,
        status_date: str | None = None,
        status_notes: str = INITIAL_STATUS_NOTES,
        source: str = "create",
        duplicate_scope: str = "main process",
        **fields: Any,
    ) -> IndividualProcess:
        """Create a process with its initial status and checklist.

        Shared by create, collective add_people and bulk creation; the
        caller is responsible for authorization and activity logging.

        Raises:
            EntityNotFoundError: If the person or a referenced process type
                or legal framework does not exist.
            DuplicateEntityError: If the person is already in the collective.
        """
        _check_fields(fields)
        await self._reference.check_references(fields)
        person = await self._people.get(person_id)
        if person is None:
            raise EntityNotFoundError("Person", person_id)
        if collective is not None:
            existing = await self._processes.find_in_collective(collective.id, person_id)
            if existing is not None:
                raise DuplicateEntityError(
                    "Individual process",
                    "person_id",
                    person_id,
                    message=f"{person.full_name} is already in this {duplicate_scope}",
                )
        fields.pop("collective_process_id", None)

        process = IndividualProcess(
            id=uuid4(),
            person_id=person_id,
            collective_process_id=collective.id if collective else None,
            **fields,
        )
        await self._processes.save(process)

        if case_status is not None:
            _, process = await self._history.record_status(
                actor,
                process,
                case_status,
                date=status_date,
                notes=status_notes,
                source=source,
            )

        try:
            await self._checklists.generate(actor, process)
        except Exception as e:
            self._log_operation("register", process_id=str(process.id)).warning(
                "checklist_generation_failed", error=str(e)
            )
        return process

    async def create(
        self,
        actor: UserProfile,
        person_id: UUID,
        collective_process_id: UUID | None = None,
        case_status_id: UUID | None = None,
        status_date: str | None = None,
        **fields: Any,
    ) -> IndividualProcess:
        """Create an individual process (admin only).

        Args:
            actor: Must be an admin.
            person_id: The applicant.
            collective_process_id: Owning collective process, if any.
            case_status_id: Initial case status; records the first status.
            status_date: Date of the initial status (defaults to today).
            **fields: Other process fields.

        Returns:
            The created process, mirroring its initial status.
        """
        self._access.require_admin(actor)
        log = self._log_operation("create", person_id=str(person_id))
        collective = (
            await self.get_collective(collective_process_id)
            if collective_process_id
            else None
        )
        case_status = await self.get_case_status(case_status_id) if case_status_id else None

        process = await self.register(
            actor,
            person_id,
            collective=collective,
            case_status=case_status,
            status_date=status_date,
            **fields,
        )
        log.info("individual_process_created", process_id=str(process.id))
        await self._activity.log_activity(
            actor.id,
            "created",
            ENTITY_TYPE,
            process.id,
            {
                "person_id": str(person_id),
                "collective_process_id": (
                    str(collective_process_id) if collective_process_id else None
                ),
                "case_status_id": str(case_status_id) if case_status_id else None,
            },
        )
        return process

    async def get(self, actor: UserProfile, process_id: UUID) -> IndividualProcess:
        process = await self._get_process(process_id)
        await self._access.require_process_access(actor, process)
        return process

    async def list(
        self,
        actor: UserProfile,
        collective_process_id: UUID | None = None,
        case_status_id: UUID | None = None,
        is_active: bool | None = None,
    ) -> list[IndividualProcess]:
        """List processes; clients only see their company's."""
        return await self._processes.list(
            collective_process_id=collective_process_id,
            case_status_id=case_status_id,
            is_active=is_active,
            collective_process_ids=await self._access.accessible_collective_ids(actor),
        )

    async def update(
        self, actor: UserProfile, process_id: UUID, **changes: Any
    ) -> IndividualProcess:
        """Change process fields (admin only).

        Raises:
            ValidationError: If a field is unknown or maintained by the
                status history.
            DuplicateEntityError: If the target collective process already
                holds a process for the same person.
        """
        self._access.require_admin(actor)
        _check_fields(changes)
        await self._reference.check_references(changes)
        process = await self._get_process(process_id)
        target_id = changes.get("collective_process_id")
        if target_id and target_id != process.collective_process_id:
            collective = await self.get_collective(target_id)
            existing = await self._processes.find_in_collective(
                collective.id, process.person_id
            )
            if existing is not None and existing.id != process.id:
                person = await self._people.get(process.person_id)
                name = person.full_name if person else "This person"
                raise DuplicateEntityError(
                    "Individual process",
                    "person_id",
                    process.person_id,
                    message=f"{name} is already in this main process",
                )

        updated = process.with_changes(**changes)
        await self._processes.save(updated)
        self._log_operation("update", process_id=str(process_id)).info(
            "individual_process_updated", fields=sorted(changes)
        )
        await self._activity.log_activity(
            actor.id,
            "updated",
            ENTITY_TYPE,
            process_id,
            {
                "changes": {
                    name: {
                        "before": _display(process.field_value(name)),
                        "after": _display(value),
                    }
                    for name, value in changes.items()
                    if process.field_value(name) != value
                }
            },
        )
        return updated

    async def remove(self, actor: UserProfile, process_id: UUID) -> None:
        """Delete a process with its status records (admin only)."""
        self._access.require_admin(actor)
        process = await self._get_process(process_id)
        removed_records = await self._records.delete_for_process(process_id)
        await self._processes.delete(process_id)
        self._log_operation("remove", process_id=str(process_id)).info(
            "individual_process_deleted", status_records=removed_records
        )
        await self._activity.log_activity(
            actor.id,
            "deleted",
            ENTITY_TYPE,
            process_id,
            {"person_id": str(process.person_id), "status_records": removed_records},
        )


def _display(value: Any) -> Any:
    return str(value) if isinstance(value, UUID) else value
