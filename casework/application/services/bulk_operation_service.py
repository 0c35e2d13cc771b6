"""Admin bulk operations.

Every item is processed independently: a failing item is recorded with
its reason and the batch continues. Each call ends with a summary
activity entry ("<operation>_completed") and bulk item metrics.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from casework.application.ports.individual_process_repository import (
    IndividualProcessRepositoryProtocol,
)
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.document_service import DocumentService
from casework.application.services.individual_process_service import (
    IndividualProcessService,
)
from casework.application.services.person_service import PersonService
from casework.application.services.status_history_service import StatusHistoryService
from casework.domain.errors.document import RejectionReasonRequiredError
from casework.domain.errors.entity import EntityNotFoundError
from casework.domain.errors.status import InvalidStatusTransitionError
from casework.domain.exceptions import CaseworkError
from casework.domain.models.bulk_result import BulkOperationResult
from casework.domain.models.user_profile import UserProfile
from casework.domain.services.status_transitions import (
    is_legacy_individual_status,
    is_valid_individual_transition,
    next_allowed_individual_statuses,
)
from casework.infrastructure.monitoring.metrics import get_metrics_collector

BULK_STATUS_NOTES = "Bulk status update"
BULK_CREATION_NOTES = "Initial status on bulk creation"


class BulkOperationService(LoggingMixin):
    """Runs admin operations over many items at once."""

    def __init__(
        self,
        processes: IndividualProcessRepositoryProtocol,
        individuals: IndividualProcessService,
        history: StatusHistoryService,
        documents: DocumentService,
        people: PersonService,
        access: AccessControlService,
        activity: ActivityLogService,
    ) -> None:
        self._processes = processes
        self._individuals = individuals
        self._history = history
        self._documents = documents
        self._people = people
        self._access = access
        self._activity = activity
        self._init_logger(component="bulk")

    async def _complete(
        self,
        actor: UserProfile,
        operation: str,
        entity_type: str,
        result: BulkOperationResult,
        entity_id: object = "bulk",
        **details: Any,
    ) -> BulkOperationResult:
        get_metrics_collector().record_bulk_items(
            operation, len(result.successful), len(result.failed)
        )
        self._log_operation(operation, user_id=str(actor.id)).info(
            "bulk_operation_completed", **result.summary()
        )
        await self._activity.log_activity(
            actor.id,
            f"{operation}_completed",
            entity_type,
            entity_id,
            {**details, **result.summary()},
        )
        return result

    async def bulk_update_status(
        self,
        actor: UserProfile,
        process_ids: Iterable[UUID],
        case_status_id: UUID,
        reason: str | None = None,
    ) -> BulkOperationResult:
        """Record a new active case status on many processes.

        When both the current and the new status codes belong to the legacy
        workflow, the transition must be allowed by the legacy matrix.
        """
        self._access.require_admin(actor)
        case_status = await self._individuals.get_case_status(case_status_id)

        result = BulkOperationResult()
        for process_id in process_ids:
            try:
                process = await self._processes.get(process_id)
                if process is None:
                    raise EntityNotFoundError("Individual process", process_id)
                current = process.status_code
                if (
                    current
                    and is_legacy_individual_status(current)
                    and is_legacy_individual_status(case_status.code)
                    and not is_valid_individual_transition(current, case_status.code)
                ):
                    raise InvalidStatusTransitionError(
                        current,
                        case_status.code,
                        next_allowed_individual_statuses(current),
                    )
                await self._history.record_status(
                    actor,
                    process,
                    case_status,
                    notes=reason or BULK_STATUS_NOTES,
                    source="bulk_update",
                )
            except CaseworkError as e:
                result.record_failure(process_id, str(e))
                continue
            result.record_success(process_id)
            await self._activity.log_activity(
                actor.id,
                "bulk_update_status",
                "individual_process",
                process_id,
                {
                    "previousCaseStatusId": (
                        str(process.case_status_id) if process.case_status_id else None
                    ),
                    "previousStatus": current,
                    "newCaseStatusId": str(case_status_id),
                    "newCaseStatusName": case_status.name,
                    "reason": reason,
                },
            )

        return await self._complete(
            actor,
            "bulk_update_status",
            "individual_process",
            result,
            newStatus=case_status.code,
        )

    async def bulk_create_individual_processes(
        self,
        actor: UserProfile,
        collective_process_id: UUID,
        person_ids: Iterable[UUID],
        case_status_id: UUID,
        legal_framework_id: str | None = None,
        cbo_id: str | None = None,
        deadline_date: str | None = None,
    ) -> BulkOperationResult:
        """Create one individual process per person in a collective process."""
        self._access.require_admin(actor)
        collective = await self._individuals.get_collective(collective_process_id)
        case_status = await self._individuals.get_case_status(case_status_id)

        result = BulkOperationResult()
        for person_id in person_ids:
            try:
                process = await self._individuals.register(
                    actor,
                    person_id,
                    collective=collective,
                    case_status=case_status,
                    status_notes=BULK_CREATION_NOTES,
                    source="bulk_create",
                    legal_framework_id=legal_framework_id,
                    cbo_id=cbo_id,
                    deadline_date=deadline_date,
                    process_type_id=collective.process_type_id,
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
                "bulk_create_individual_process",
                "individual_process",
                process.id,
                {
                    "personId": str(person_id),
                    "collectiveProcessId": str(collective_process_id),
                    "caseStatusName": case_status.name,
                },
            )

        return await self._complete(
            actor,
            "bulk_create_individual_processes",
            "collective_process",
            result,
            entity_id=collective_process_id,
        )

    async def bulk_approve_documents(
        self,
        actor: UserProfile,
        document_ids: Iterable[UUID],
        notes: str | None = None,
    ) -> BulkOperationResult:
        self._access.require_admin(actor)
        result = BulkOperationResult()
        for document_id in document_ids:
            try:
                await self._documents.approve(
                    actor, document_id, notes=notes, action="bulk_approved"
                )
            except CaseworkError as e:
                result.record_failure(document_id, str(e))
                continue
            result.record_success(document_id)
        return await self._complete(
            actor, "bulk_approve_documents", "document", result, notes=notes
        )

    async def bulk_reject_documents(
        self,
        actor: UserProfile,
        document_ids: Iterable[UUID],
        reason: str,
    ) -> BulkOperationResult:
        """Reject many documents with one reason.

        Raises:
            RejectionReasonRequiredError: If the reason is blank (nothing is
                processed).
        """
        self._access.require_admin(actor)
        if not reason or not reason.strip():
            raise RejectionReasonRequiredError()
        result = BulkOperationResult()
        for document_id in document_ids:
            try:
                await self._documents.reject(
                    actor, document_id, reason, action="bulk_rejected"
                )
            except CaseworkError as e:
                result.record_failure(document_id, str(e))
                continue
            result.record_success(document_id)
        return await self._complete(
            actor,
            "bulk_reject_documents",
            "document",
            result,
            rejectionReason=reason.strip(),
        )

    async def bulk_delete_documents(
        self, actor: UserProfile, document_ids: Iterable[UUID]
    ) -> BulkOperationResult:
        """Soft delete many documents; approved ones are refused."""
        self._access.require_admin(actor)
        result = BulkOperationResult()
        for document_id in document_ids:
            try:
                await self._documents.remove(actor, document_id, action="bulk_deleted")
            except CaseworkError as e:
                result.record_failure(document_id, str(e))
                continue
            result.record_success(document_id)
        return await self._complete(actor, "bulk_delete_documents", "document", result)

    async def bulk_import_people(
        self, actor: UserProfile, rows: Iterable[Mapping[str, Any]]
    ) -> BulkOperationResult:
        """Create people from imported rows.

        Failures are keyed by the row's 1-based index.
        """
        self._access.require_admin(actor)
        result = BulkOperationResult()
        for index, row in enumerate(rows, start=1):
            data = dict(row)
            try:
                person = await self._people.register(
                    actor,
                    data.pop("full_name", ""),
                    email=data.pop("email", None),
                    cpf=data.pop("cpf", None),
                    birth_date=data.pop("birth_date", None),
                    action="bulk_import_person",
                    **data,
                )
            except CaseworkError as e:
                result.record_failure(index, str(e))
                continue
            except (TypeError, ValueError) as e:
                result.record_failure(index, f"Invalid row: {e}")
                continue
            result.record_success(person.id)
        return await self._complete(actor, "bulk_import_people", "person", result)
