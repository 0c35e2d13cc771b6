"""Collective process service.

A collective process groups the individual processes of one sponsor. Its
status is never stored: calculate_status derives it from the members.
Adding people and cascading a status are per-item operations that collect
failures instead of aborting.
"""

from __future__ import annotations

from collections.abc import Mapping
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
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.individual_process_service import (
    IndividualProcessService,
)
from casework.application.services.reference_data_service import ReferenceDataService
from casework.application.services.status_history_service import StatusHistoryService
from casework.domain.errors.entity import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from casework.domain.errors.status import NoIndividualProcessesError
from casework.domain.errors.validation import ValidationError
from casework.domain.exceptions import CaseworkError
from casework.domain.models.bulk_result import BulkOperationResult
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.user_profile import UserProfile
from casework.domain.services.dates import validate_iso_date
from casework.domain.services.status_calculation import (
    CollectiveStatusSummary,
    calculate_collective_status,
)
from casework.infrastructure.monitoring.metrics import get_metrics_collector

ENTITY_TYPE = "collective_process"

CASCADE_NOTES = "Bulk status update from collective process"

EDITABLE_FIELDS = frozenset(
    {
        "reference_number",
        "company_id",
        "contact_person_id",
        "process_type_id",
        "workplace_city_id",
        "consulate_id",
        "is_urgent",
        "request_date",
        "notes",
    }
)


class CollectiveProcessService(LoggingMixin):
    """Manages collective processes and their members.

    Attributes:
        _collectives: Collective process repository.
        _processes: Individual process repository.
        _statuses: Case status repository.
        _individuals: Individual process creation.
        _history: Status history (cascaded status records).
        _access: Access control.
        _activity: Activity log.
    """

    def __init__(
        self,
        collectives: CollectiveProcessRepositoryProtocol,
        processes: IndividualProcessRepositoryProtocol,
        statuses: CaseStatusRepositoryProtocol,
        individuals: IndividualProcessService,
        history: StatusHistoryService,
        access: AccessControlService,
        activity: ActivityLogService,
        reference: ReferenceDataService,
    ) -> None:
        self._collectives = collectives
        self._processes = processes
        self._statuses = statuses
        self._individuals = individuals
        self._history = history
        self._access = access
        self._activity = activity
        self._reference = reference
        self._init_logger(component="collective_processes")

    async def _get(self, collective_id: UUID) -> CollectiveProcess:
        collective = await self._collectives.get(collective_id)
        if collective is None:
            raise EntityNotFoundError("Collective process", collective_id)
        return collective

    async def _require_unique_reference(
        self, reference_number: str, exclude_id: UUID | None = None
    ) -> None:
        existing = await self._collectives.get_by_reference(reference_number)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError(
                "Collective process",
                "reference_number",
                reference_number,
                message=(
                    f"Collective process with reference number "
                    f"{reference_number} already exists"
                ),
            )

    async def create(
        self, actor: UserProfile, reference_number: str, **fields: Any
    ) -> CollectiveProcess:
        """Create a collective process (admin only).

        Raises:
            DuplicateEntityError: If the reference number is taken.
            ValidationError: If a field is unknown or request_date malformed.
            EntityNotFoundError: If the company or process type is unknown.
        """
        self._access.require_admin(actor)
        unknown = sorted(set(fields) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(unknown)}", field=unknown[0])
        if fields.get("request_date"):
            validate_iso_date(fields["request_date"], field="request_date")
        await self._require_unique_reference(reference_number)
        await self._reference.check_references(fields)

        collective = CollectiveProcess(
            id=uuid4(), reference_number=reference_number, **fields
        )
        await self._collectives.save(collective)
        self._log_operation("create", reference_number=reference_number).info(
            "collective_process_created", collective_id=str(collective.id)
        )
        await self._activity.log_activity(
            actor.id,
            "created",
            ENTITY_TYPE,
            collective.id,
            {"referenceNumber": reference_number, "companyId": collective.company_id},
        )
        return collective

    async def update(
        self, actor: UserProfile, collective_id: UUID, **changes: Any
    ) -> CollectiveProcess:
        """Change a collective process (admin only).

        The activity entry records every changed field with its before and
        after values.
        """
        self._access.require_admin(actor)
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(unknown)}", field=unknown[0])
        collective = await self._get(collective_id)
        if changes.get("reference_number") and (
            changes["reference_number"] != collective.reference_number
        ):
            await self._require_unique_reference(
                changes["reference_number"], exclude_id=collective.id
            )
        if changes.get("request_date"):
            validate_iso_date(changes["request_date"], field="request_date")
        await self._reference.check_references(changes)

        changed = {
            name: {"before": getattr(collective, name), "after": value}
            for name, value in changes.items()
            if getattr(collective, name) != value
        }
        updated = collective.with_changes(**changes)
        await self._collectives.save(updated)
        self._log_operation("update", collective_id=str(collective_id)).info(
            "collective_process_updated", fields=sorted(changed)
        )
        await self._activity.log_activity(
            actor.id, "updated", ENTITY_TYPE, collective_id, {"changes": changed}
        )
        return updated

    async def remove(self, actor: UserProfile, collective_id: UUID) -> None:
        """Delete a collective process without members (admin only).

        Raises:
            EntityInUseError: If individual processes reference it.
        """
        self._access.require_admin(actor)
        collective = await self._get(collective_id)
        if await self._processes.list(collective_process_id=collective_id):
            raise EntityInUseError(
                "Collective process",
                collective_id,
                "Cannot delete collective process with associated individual processes",
            )
        await self._collectives.delete(collective_id)
        self._log_operation("remove", collective_id=str(collective_id)).info(
            "collective_process_deleted"
        )
        await self._activity.log_activity(
            actor.id,
            "deleted",
            ENTITY_TYPE,
            collective_id,
            {"referenceNumber": collective.reference_number},
        )

    async def get(self, actor: UserProfile, collective_id: UUID) -> CollectiveProcess:
        collective = await self._get(collective_id)
        self._access.require_company_access(actor, collective.company_id)
        return collective

    async def get_by_reference(
        self, actor: UserProfile, reference_number: str
    ) -> CollectiveProcess | None:
        collective = await self._collectives.get_by_reference(reference_number)
        if collective is None:
            return None
        self._access.require_company_access(actor, collective.company_id)
        return collective

    async def list(
        self, actor: UserProfile, company_id: str | None = None
    ) -> list[CollectiveProcess]:
        """List collective processes; clients only see their company's."""
        if not actor.is_admin:
            if company_id is not None:
                self._access.require_company_access(actor, company_id)
            company_id = actor.company_id
            if company_id is None:
                return []
        return await self._collectives.list(company_id=company_id)

    async def calculate_status(
        self, actor: UserProfile, collective_id: UUID
    ) -> CollectiveStatusSummary:
        """Derive the status of a collective process from its members."""
        await self.get(actor, collective_id)
        members = await self._processes.list(collective_process_id=collective_id)
        statuses = {s.id: s for s in await self._statuses.list(include_inactive=True)}
        return calculate_collective_status(members, statuses)

    async def add_people(
        self,
        actor: UserProfile,
        collective_id: UUID,
        person_ids: list[UUID],
        request_date: str,
        case_status_id: UUID,
        consulate_id: str | None = None,
    ) -> BulkOperationResult:
        """Create one individual process per person (admin only).

        Missing people and people already in the collective (including
        repeats within the batch) are reported as failures.
        """
        self._access.require_admin(actor)
        log = self._log_operation(
            "add_people", collective_id=str(collective_id), people=len(person_ids)
        )
        collective = await self._get(collective_id)
        case_status = await self._individuals.get_case_status(case_status_id)
        validate_iso_date(request_date, field="request_date")

        result = BulkOperationResult()
        for person_id in person_ids:
            try:
                process = await self._individuals.register(
                    actor,
                    person_id,
                    collective=collective,
                    case_status=case_status,
                    status_date=request_date,
                    source="add_people",
                    duplicate_scope="collective process",
                    process_type_id=collective.process_type_id,
                    consulate_id=consulate_id or collective.consulate_id,
                    date_process=request_date,
                )
            except EntityNotFoundError:
                result.record_failure(person_id, "Person not found")
                continue
            except CaseworkError as e:
                result.record_failure(person_id, str(e))
                continue
            result.record_success(process.id)
            await self._activity.log_activity(
                actor.id,
                "add_person_to_collective",
                "individual_process",
                process.id,
                {
                    "personId": str(person_id),
                    "collectiveProcessId": str(collective_id),
                    "caseStatusId": str(case_status_id),
                    "caseStatusName": case_status.name,
                },
            )

        get_metrics_collector().record_bulk_items(
            "add_people", len(result.successful), len(result.failed)
        )
        log.info("people_added", **result.summary())
        await self._activity.log_activity(
            actor.id,
            "add_people_to_collective_completed",
            ENTITY_TYPE,
            collective_id,
            result.summary(),
        )
        return result

    async def update_statuses(
        self,
        actor: UserProfile,
        collective_id: UUID,
        case_status_id: UUID,
        date: str,
        notes: str | None = None,
        filled_fields_data: Mapping[str, Any] | None = None,
    ) -> BulkOperationResult:
        """Cascade a case status to every member process (admin only).

        Raises:
            NoIndividualProcessesError: If the collective has no members.
        """
        self._access.require_admin(actor)
        log = self._log_operation(
            "update_statuses",
            collective_id=str(collective_id),
            case_status_id=str(case_status_id),
        )
        await self._get(collective_id)
        case_status = await self._individuals.get_case_status(case_status_id)
        validate_iso_date(date)
        members = await self._processes.list(collective_process_id=collective_id)
        if not members:
            raise NoIndividualProcessesError(str(collective_id))

        result = BulkOperationResult()
        for process in members:
            try:
                await self._history.record_status(
                    actor,
                    process,
                    case_status,
                    date=date,
                    notes=notes or CASCADE_NOTES,
                    filled_fields_data=filled_fields_data,
                    source="collective_cascade",
                )
            except CaseworkError as e:
                result.record_failure(process.id, str(e))
                continue
            result.record_success(process.id)
            await self._activity.log_activity(
                actor.id,
                "collective_status_update",
                "individual_process",
                process.id,
                {
                    "previousCaseStatusId": (
                        str(process.case_status_id) if process.case_status_id else None
                    ),
                    "newCaseStatusId": str(case_status_id),
                    "newCaseStatusName": case_status.name,
                    "collectiveProcessId": str(collective_id),
                    "notes": notes,
                },
            )

        get_metrics_collector().record_bulk_items(
            "collective_status_update", len(result.successful), len(result.failed)
        )
        log.info("collective_statuses_updated", **result.summary())
        await self._activity.log_activity(
            actor.id,
            "collective_status_update_completed",
            ENTITY_TYPE,
            collective_id,
            {
                "newCaseStatusId": str(case_status_id),
                "newCaseStatusName": case_status.name,
                **result.summary(),
            },
        )
        return result
