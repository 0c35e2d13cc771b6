"""Person domain model (the applicant behind an individual process)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Person:
    """A foreign national tracked by the system.

    Attributes:
        id: Unique identifier.
        full_name: Name as it appears on the passport.
        email: Contact e-mail, stored lower-cased.
        cpf: Brazilian taxpayer number, when issued.
        birth_date: ISO date (YYYY-MM-DD).
        nationality: Country of citizenship.
        company_id: Employer, when known.
    """

    id: UUID
    full_name: str
    email: str | None = None
    cpf: str | None = None
    birth_date: str | None = None
    nationality: str | None = None
    company_id: str | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.full_name or not self.full_name.strip():
            raise ValueError("full_name is required")
