"""Case status catalogue model.

Case statuses are the configurable stages of an individual process. Each
carries a Portuguese name, an optional English name, a unique code used
by workflow rules, and the process fields an operator is asked to fill
when the status is recorded.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

# Recording this status (active) copies the status date into date_process.
PREPARATION_STATUS_CODE = "em_preparacao"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class CaseStatus:
    """A named stage in an application's lifecycle.

    Attributes:
        id: Unique identifier.
        name: Portuguese display name.
        name_en: English display name (falls back to name).
        code: Unique machine code (e.g. "em_preparacao").
        description: Free text.
        category: Grouping used by listings (e.g. "government").
        color: Hex colour for badges.
        sort_order: Position in ordered listings.
        is_active: Inactive statuses are hidden from pickers.
        fillable_fields: Process fields filled when this status is recorded.
    """

    id: UUID
    name: str
    code: str
    name_en: str | None = None
    description: str | None = None
    category: str | None = None
    color: str | None = None
    sort_order: int = 0
    is_active: bool = True
    fillable_fields: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name is required")
        if not self.code:
            raise ValueError("code is required")

    def display_name(self, locale: str = "pt") -> str:
        """Return the name for a locale, falling back to Portuguese."""
        if locale == "en" and self.name_en:
            return self.name_en
        return self.name

    def with_changes(self, **changes: Any) -> CaseStatus:
        """Return a copy with the given attributes replaced and updated_at bumped."""
        if "fillable_fields" in changes and changes["fillable_fields"] is not None:
            changes["fillable_fields"] = tuple(changes["fillable_fields"])
        return replace(self, updated_at=_utc_now(), **changes)
