"""Reference data: companies, process types and legal frameworks.

Processes, people, user profiles and document templates point at these
catalogues by id. Ids are strings so that seeded entries can keep
readable ids (e.g. "work-visa"); entries created through the API get a
random one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Company:
    """An employer whose staff are processed.

    Attributes:
        id: Unique identifier.
        name: Display name.
        tax_id: CNPJ or other registration number, unique when set.
        email: Contact e-mail.
        phone_number: Contact phone.
        website: Company website.
        address: Postal address.
        notes: Free text.
        is_active: Inactive companies are hidden from listings.
    """

    id: str
    name: str
    tax_id: str | None = None
    email: str | None = None
    phone_number: str | None = None
    website: str | None = None
    address: str | None = None
    notes: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name is required")

    def with_changes(self, **changes: Any) -> Company:
        return replace(self, updated_at=_utc_now(), **changes)


@dataclass(frozen=True, eq=True)
class ProcessType:
    """A kind of authorization (work visa, residence, ...).

    Attributes:
        id: Unique identifier.
        name: Display name.
        description: Free text.
        estimated_days: Typical duration of the process.
        sort_order: Position in listings.
        is_active: Inactive types are hidden from listings.
    """

    id: str
    name: str
    description: str | None = None
    estimated_days: int | None = None
    sort_order: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name is required")
        if self.estimated_days is not None and self.estimated_days < 0:
            raise ValueError(
                f"estimated_days must be non-negative, got {self.estimated_days}"
            )

    def with_changes(self, **changes: Any) -> ProcessType:
        return replace(self, **changes)


@dataclass(frozen=True, eq=True)
class LegalFramework:
    """A normative basis (resolution) an authorization is granted under.

    Attributes:
        id: Unique identifier.
        name: Display name (e.g. "RN 36").
        process_type_id: Process type the framework belongs to, if any.
        description: Free text.
        is_active: Inactive frameworks are hidden from listings.
    """

    id: str
    name: str
    process_type_id: str | None = None
    description: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name is required")

    def with_changes(self, **changes: Any) -> LegalFramework:
        return replace(self, **changes)
