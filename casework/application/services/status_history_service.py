"""Status history service for individual processes.

Invariant: at most one status record per individual process is active,
and the process's case_status_id/status_code mirror that record.

Rules applied when a status is recorded:
- The date must be YYYY-MM-DD (defaults to today, UTC).
- Filled data may only target the case status's fillable fields and is
  copied onto the process.
- Recording "em_preparacao" as active copies the date into date_process.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from casework.application.ports.case_status_repository import (
    CaseStatusRepositoryProtocol,
)
from casework.application.ports.individual_process_repository import (
    IndividualProcessRepositoryProtocol,
)
from casework.application.ports.status_record_repository import (
    StatusRecordRepositoryProtocol,
)
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.domain.errors.entity import EntityNotFoundError
from casework.domain.errors.validation import InvalidFillableFieldsError
from casework.domain.models.case_status import PREPARATION_STATUS_CODE, CaseStatus
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.status_record import StatusRecord
from casework.domain.models.user_profile import UserProfile
from casework.domain.services.dates import today_iso, validate_iso_date
from casework.domain.services.fillable_fields import (
    apply_filled_fields,
    clear_filled_fields,
    merge_fillable_data,
    validate_fillable_field_names,
    validate_filled_data,
)
from casework.infrastructure.monitoring.metrics import get_metrics_collector

ENTITY_TYPE = "individual_process_status"


def _jsonable(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass(frozen=True)
class FillableFieldsView:
    """Fillable fields of a status record with their current values.

    Attributes:
        fillable_fields: Field names the record asks for.
        filled_fields_data: Process values overlaid with the record's data.
    """

    fillable_fields: tuple[str, ...]
    filled_fields_data: dict[str, Any]


class StatusHistoryService(LoggingMixin):
    """Maintains the status history of individual processes.

    Attributes:
        _processes: Individual process repository.
        _records: Status record repository.
        _statuses: Case status repository.
        _access: Access control.
        _activity: Activity log.
    """

    def __init__(
        self,
        processes: IndividualProcessRepositoryProtocol,
        records: StatusRecordRepositoryProtocol,
        statuses: CaseStatusRepositoryProtocol,
        access: AccessControlService,
        activity: ActivityLogService,
    ) -> None:
        self._processes = processes
        self._records = records
        self._statuses = statuses
        self._access = access
        self._activity = activity
        self._init_logger(component="status_history")

    async def _get_process(self, process_id: UUID) -> IndividualProcess:
        process = await self._processes.get(process_id)
        if process is None:
            raise EntityNotFoundError("Individual process", process_id)
        return process

    async def _get_case_status(self, status_id: UUID) -> CaseStatus:
        status = await self._statuses.get(status_id)
        if status is None:
            raise EntityNotFoundError("Case status", status_id)
        return status

    async def _get_record(self, record_id: UUID) -> StatusRecord:
        record = await self._records.get(record_id)
        if record is None:
            raise EntityNotFoundError("Status record", record_id)
        return record

    async def _fillable_for(self, record: StatusRecord) -> tuple[str, ...]:
        """The record's fillable fields, falling back to its case status's."""
        if record.fillable_fields:
            return record.fillable_fields
        status = await self._statuses.get(record.case_status_id)
        return status.fillable_fields if status else ()

    async def record_status(
        self,
        actor: UserProfile,
        process: IndividualProcess,
        case_status: CaseStatus,
        date: str | None = None,
        notes: str | None = None,
        filled_fields_data: Mapping[str, Any] | None = None,
        is_active: bool = True,
        source: str = "add_status",
    ) -> tuple[StatusRecord, IndividualProcess]:
        """Write a status record and mirror it on the process.

        Shared by add_status, process creation and bulk operations; the
        caller is responsible for authorization and activity logging.

        Returns:
            Tuple of (new record, updated process).

        Raises:
            InvalidDateFormatError: If date is malformed.
            InvalidFillableFieldsError: If data targets non-fillable fields.
        """
        status_date = validate_iso_date(date) if date else today_iso()
        data = dict(filled_fields_data or {})
        if data:
            invalid = [k for k in data if k not in case_status.fillable_fields]
            if invalid:
                raise InvalidFillableFieldsError(
                    invalid,
                    message=f'Field "{invalid[0]}" is not a fillable field for this status',
                )

        record = StatusRecord(
            id=uuid4(),
            individual_process_id=process.id,
            case_status_id=case_status.id,
            status_name=case_status.name,
            status_code=case_status.code,
            date=status_date,
            is_active=is_active,
            notes=notes,
            fillable_fields=case_status.fillable_fields,
            filled_fields_data=data,
            changed_by=actor.id,
        )
        if is_active:
            await self._records.save_active(record)
        else:
            await self._records.save(record)

        updated = apply_filled_fields(process, data)
        if is_active:
            updated = updated.with_case_status(case_status.id, case_status.code)
            if case_status.code == PREPARATION_STATUS_CODE:
                updated = updated.with_changes(date_process=status_date)
        if updated is not process:
            await self._processes.save(updated)

        get_metrics_collector().increment_status_changes(source)
        return record, updated

    async def add_status(
        self,
        actor: UserProfile,
        process_id: UUID,
        case_status_id: UUID,
        date: str | None = None,
        notes: str | None = None,
        is_active: bool = True,
        filled_fields_data: Mapping[str, Any] | None = None,
    ) -> StatusRecord:
        """Record a new status for an individual process (admin only).

        Args:
            actor: Must be an admin.
            process_id: The individual process.
            case_status_id: The case status to record.
            date: Effective date, YYYY-MM-DD (defaults to today).
            notes: Operator notes.
            is_active: Make this the current status (deactivates the others).
            filled_fields_data: Values for the case status's fillable fields.

        Returns:
            The new status record.
        """
        self._access.require_admin(actor)
        log = self._log_operation(
            "add_status",
            process_id=str(process_id),
            case_status_id=str(case_status_id),
        )
        process = await self._get_process(process_id)
        case_status = await self._get_case_status(case_status_id)

        record, _ = await self.record_status(
            actor,
            process,
            case_status,
            date=date,
            notes=notes,
            filled_fields_data=filled_fields_data,
            is_active=is_active,
        )
        log.info("status_added", record_id=str(record.id), is_active=is_active)
        await self._activity.log_activity(
            actor.id,
            "status_added",
            ENTITY_TYPE,
            record.id,
            {
                "individual_process_id": str(process_id),
                "case_status_id": str(case_status_id),
                "case_status_name": case_status.name,
                "date": record.date,
                "is_active": is_active,
            },
        )
        return record

    async def update_status(
        self,
        actor: UserProfile,
        record_id: UUID,
        case_status_id: UUID | None = None,
        date: str | None = None,
        notes: str | None = None,
        is_active: bool | None = None,
    ) -> StatusRecord:
        """Edit a status record (admin only).

        Activating a record deactivates the others. When the record is (or
        becomes) active the process mirrors its case status; deactivating
        the active record clears the process's case status.
        """
        self._access.require_admin(actor)
        log = self._log_operation("update_status", record_id=str(record_id))
        record = await self._get_record(record_id)
        if date is not None:
            validate_iso_date(date)
        new_status = (
            await self._get_case_status(case_status_id) if case_status_id else None
        )

        changes: dict[str, Any] = {}
        old_values: dict[str, Any] = {}
        if new_status is not None:
            changes.update(
                case_status_id=new_status.id,
                status_name=new_status.name,
                status_code=new_status.code,
                fillable_fields=new_status.fillable_fields,
            )
            old_values.update(
                case_status_id=str(record.case_status_id),
                case_status_name=record.status_name,
            )
        if date is not None:
            changes["date"] = date
            old_values["date"] = record.date
        if notes is not None:
            changes["notes"] = notes
            old_values["notes"] = record.notes
        if is_active is not None:
            changes["is_active"] = is_active
            old_values["is_active"] = record.is_active

        updated = record.with_changes(actor.id, **changes)
        if updated.is_active and not record.is_active:
            await self._records.save_active(updated)
        else:
            await self._records.save(updated)

        process = await self._get_process(record.individual_process_id)
        synced = process
        # Date sync follows the status the record had before this edit
        if date is not None and record.status_code == PREPARATION_STATUS_CODE:
            synced = synced.with_changes(date_process=date)
        if updated.is_active and (new_status is not None or not record.is_active):
            synced = synced.with_case_status(updated.case_status_id, updated.status_code)
        elif record.is_active and not updated.is_active:
            synced = synced.with_case_status(None, None)
        if synced is not process:
            await self._processes.save(synced)

        get_metrics_collector().increment_status_changes("update_status")
        log.info("status_updated", fields=sorted(changes))
        await self._activity.log_activity(
            actor.id,
            "status_updated",
            ENTITY_TYPE,
            record_id,
            {
                "individual_process_id": str(record.individual_process_id),
                "old_values": old_values,
                "new_values": {k: _jsonable(v) for k, v in changes.items()},
            },
        )
        return updated

    async def delete_status(self, actor: UserProfile, record_id: UUID) -> None:
        """Delete a status record (admin only), including the active one.

        Deleting the active record clears the process's case status. Process
        fields filled by this record are cleared.
        """
        self._access.require_admin(actor)
        record = await self._get_record(record_id)
        fillable = await self._fillable_for(record)

        process = await self._get_process(record.individual_process_id)
        updated = process
        if record.is_active:
            updated = updated.with_case_status(None, None)
        filled = [name for name in record.filled_fields_data if name in fillable]
        updated = clear_filled_fields(updated, filled)
        if updated is not process:
            await self._processes.save(updated)

        await self._records.delete(record_id)
        self._log_operation("delete_status", record_id=str(record_id)).info(
            "status_deleted", was_active=record.is_active
        )
        await self._activity.log_activity(
            actor.id,
            "status_deleted",
            ENTITY_TYPE,
            record_id,
            {
                "individual_process_id": str(record.individual_process_id),
                "status_name": record.status_name,
            },
        )

    async def get_active_status(
        self, actor: UserProfile, process_id: UUID
    ) -> StatusRecord | None:
        await self._access.require_process_access(actor, await self._get_process(process_id))
        return await self._records.get_active(process_id)

    async def list(self, actor: UserProfile, process_id: UUID) -> list[StatusRecord]:
        """Records of a process in the order they were written."""
        await self._access.require_process_access(actor, await self._get_process(process_id))
        return await self._records.list_for_process(process_id)

    async def get_status_history(
        self, actor: UserProfile, process_id: UUID
    ) -> list[StatusRecord]:
        """Records newest first by effective date (changed_at when undated)."""
        records = await self.list(actor, process_id)
        return sorted(records, key=lambda r: (r.sort_key(), r.changed_at), reverse=True)

    async def save_filled_fields(
        self, actor: UserProfile, record_id: UUID, data: Mapping[str, Any]
    ) -> StatusRecord:
        """Store filled values on a record and copy them onto the process.

        Clients may fill fields of processes of their own company.

        Raises:
            InvalidFillableFieldsError: If data targets non-fillable fields.
        """
        record = await self._get_record(record_id)
        process = await self._get_process(record.individual_process_id)
        await self._access.require_process_access(actor, process)

        validate_filled_data(data, await self._fillable_for(record))
        updated = record.with_changes(actor.id, filled_fields_data=dict(data))
        await self._records.save(updated)

        synced = apply_filled_fields(process, data)
        if synced is not process:
            await self._processes.save(synced)

        self._log_operation("save_filled_fields", record_id=str(record_id)).info(
            "filled_fields_saved", fields=sorted(data)
        )
        await self._activity.log_activity(
            actor.id,
            "filled_fields_saved",
            ENTITY_TYPE,
            record_id,
            {"filled_fields": sorted(data)},
        )
        return updated

    async def get_fillable_fields(
        self, actor: UserProfile, record_id: UUID
    ) -> FillableFieldsView:
        record = await self._get_record(record_id)
        process = await self._get_process(record.individual_process_id)
        await self._access.require_process_access(actor, process)
        fillable = await self._fillable_for(record)
        return FillableFieldsView(
            fillable_fields=fillable,
            filled_fields_data=merge_fillable_data(
                process, fillable, record.filled_fields_data
            ),
        )

    async def update_fillable_fields(
        self, actor: UserProfile, record_id: UUID, names: Iterable[str]
    ) -> StatusRecord:
        """Replace the fillable field configuration of one record (admin only)."""
        self._access.require_admin(actor)
        record = await self._get_record(record_id)
        names = validate_fillable_field_names(names)
        updated = record.with_changes(actor.id, fillable_fields=tuple(names))
        await self._records.save(updated)
        await self._activity.log_activity(
            actor.id,
            "fillable_fields_updated",
            ENTITY_TYPE,
            record_id,
            {"fillable_fields": names},
        )
        return updated
