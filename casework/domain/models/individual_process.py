"""Individual process domain model.

An individual process is one applicant's case. It mirrors the case status
of its single active status record and stores the process fields filled
in along the way (protocol numbers, DOU publication, RNM data, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class IndividualProcess:
    """A single applicant's case record.

    Attributes:
        id: Unique identifier.
        person_id: The applicant.
        collective_process_id: Owning collective process, if any.
        case_status_id: Case status of the active status record.
        status_code: Code of that case status.
        date_process: Date the process entered preparation.
        is_active: Archived processes are inactive.

    The remaining optional attributes are the fillable process fields.
    """

    id: UUID
    person_id: UUID
    collective_process_id: UUID | None = None
    case_status_id: UUID | None = None
    status_code: str | None = None
    consulate_id: str | None = None
    date_process: str | None = None
    passport_id: str | None = None
    applicant_id: str | None = None
    process_type_id: str | None = None
    legal_framework_id: str | None = None
    cbo_id: str | None = None
    mre_office_number: str | None = None
    dou_number: str | None = None
    dou_section: str | None = None
    dou_page: str | None = None
    dou_date: str | None = None
    protocol_number: str | None = None
    rnm_number: str | None = None
    rnm_deadline: str | None = None
    appointment_date_time: str | None = None
    deadline_date: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def field_value(self, name: str) -> Any:
        """Return the current value of a process field by name."""
        return getattr(self, name)

    def with_changes(self, **changes: Any) -> IndividualProcess:
        """Return a copy with the given fields replaced and updated_at bumped."""
        return replace(self, updated_at=_utc_now(), **changes)

    def with_case_status(
        self, case_status_id: UUID | None, status_code: str | None
    ) -> IndividualProcess:
        """Return a copy mirroring the given case status (None clears it)."""
        return self.with_changes(case_status_id=case_status_id, status_code=status_code)


PROCESS_FIELD_NAMES: frozenset[str] = frozenset(
    f.name
    for f in fields(IndividualProcess)
    if f.name not in {"id", "created_at", "updated_at"}
)
