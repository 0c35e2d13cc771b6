"""Collective process domain model.

A collective process groups the individual applications filed under one
corporate sponsor. Its status is derived from its members and never
stored (see casework.domain.services.status_calculation).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class CollectiveProcess:
    """A group of individual processes under one sponsor.

    Attributes:
        id: Unique identifier.
        reference_number: Unique human reference (e.g. "2024-ACME-001").
        company_id: Sponsoring company.
        contact_person_id: Company contact for the group.
        process_type_id: Authorization type, drives document checklists.
        workplace_city_id: City where the applicants will work.
        consulate_id: Default consulate for members.
        is_urgent: Priority flag.
        request_date: Date the sponsor requested the process.
        notes: Free text.
    """

    id: UUID
    reference_number: str
    company_id: str | None = None
    contact_person_id: str | None = None
    process_type_id: str | None = None
    workplace_city_id: str | None = None
    consulate_id: str | None = None
    is_urgent: bool = False
    request_date: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.reference_number or not self.reference_number.strip():
            raise ValueError("reference_number is required")

    def with_changes(self, **changes: Any) -> CollectiveProcess:
        """Return a copy with the given attributes replaced and updated_at bumped."""
        return replace(self, updated_at=_utc_now(), **changes)
