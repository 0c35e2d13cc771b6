"""Status history entry for an individual process.

Invariant: at most one record per individual process is active, and the
process's case_status_id mirrors it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class StatusRecord:
    """One entry of an individual process's status history.

    Attributes:
        id: Unique identifier.
        individual_process_id: The process this entry belongs to.
        case_status_id: The recorded case status.
        status_name: Case status name at recording time.
        status_code: Case status code at recording time.
        date: Effective date (YYYY-MM-DD) chosen by the operator.
        is_active: Whether this is the process's current status.
        notes: Operator notes.
        fillable_fields: Field names copied from the case status.
        filled_fields_data: Values filled for those fields.
        changed_by: User that recorded or last changed the entry.
        changed_at: When it was recorded or last changed.
    """

    id: UUID
    individual_process_id: UUID
    case_status_id: UUID
    status_name: str
    status_code: str
    date: str
    changed_by: UUID
    is_active: bool = True
    notes: str | None = None
    fillable_fields: tuple[str, ...] = ()
    filled_fields_data: dict[str, Any] = field(default_factory=dict)
    changed_at: datetime = field(default_factory=_utc_now)
    created_at: datetime = field(default_factory=_utc_now)

    def with_changes(self, changed_by: UUID, **changes: Any) -> StatusRecord:
        """Return a copy with the given attributes replaced.

        changed_by/changed_at are always refreshed.
        """
        if "fillable_fields" in changes and changes["fillable_fields"] is not None:
            changes["fillable_fields"] = tuple(changes["fillable_fields"])
        return replace(self, changed_by=changed_by, changed_at=_utc_now(), **changes)

    def deactivated(self) -> StatusRecord:
        """Return an inactive copy (changed_by/changed_at untouched)."""
        return replace(self, is_active=False)

    def sort_key(self) -> str:
        """Key for newest-first ordering: the effective date, else changed_at date."""
        return self.date or self.changed_at.date().isoformat()
