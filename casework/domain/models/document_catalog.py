"""Document catalogue: document types, templates and their requirements.

Templates describe which documents a process type (and optionally a legal
framework) requires. Checklists for new individual processes are
generated from the highest active template version.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ValidityType(str, Enum):
    """How a document type's validity window is measured.

    MIN_REMAINING: the document must still be valid for N days.
    MAX_AGE: the document must have been issued within the last N days.
    """

    MIN_REMAINING = "min_remaining"
    MAX_AGE = "max_age"


@dataclass(frozen=True, eq=True)
class DocumentType:
    """A kind of document (passport copy, criminal record, ...).

    Attributes:
        id: Unique identifier.
        name: Display name.
        code: Optional unique code.
        category: Grouping for checklists (e.g. "personal").
        description: Free text.
        is_active: Inactive types cannot be assigned.
        validity_type: Validity rule, if any.
        validity_days: Days used by the validity rule.
        allowed_file_types: Allowed extensions, lower-case without dot
            (empty means any).
        max_file_size_mb: Upload size limit, if any.
    """

    id: UUID
    name: str
    code: str | None = None
    category: str | None = None
    description: str | None = None
    is_active: bool = True
    validity_type: ValidityType | None = None
    validity_days: int | None = None
    allowed_file_types: tuple[str, ...] = ()
    max_file_size_mb: int | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name is required")
        if self.validity_days is not None and self.validity_days < 0:
            raise ValueError(
                f"validity_days must be non-negative, got {self.validity_days}"
            )

    def with_changes(self, **changes: Any) -> DocumentType:
        return replace(self, updated_at=_utc_now(), **changes)


@dataclass(frozen=True, eq=True)
class DocumentTemplate:
    """A versioned checklist definition for a process type.

    Attributes:
        id: Unique identifier.
        name: Display name.
        process_type_id: Process type the template applies to.
        legal_framework_id: Legal framework it is restricted to (None = any
            process without a framework).
        version: Monotonic version; the highest active version is used.
        is_active: Inactive templates are ignored.
        created_by: Admin that created the template.
    """

    id: UUID
    name: str
    process_type_id: str
    created_by: UUID
    description: str | None = None
    legal_framework_id: str | None = None
    version: int = 1
    is_active: bool = True
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def matches(self, process_type_id: str | None, legal_framework_id: str | None) -> bool:
        """True when the template applies to the given process type and framework."""
        return (
            self.is_active
            and self.process_type_id == process_type_id
            and self.legal_framework_id == legal_framework_id
        )

    def with_changes(self, **changes: Any) -> DocumentTemplate:
        return replace(self, updated_at=_utc_now(), **changes)


@dataclass(frozen=True, eq=True)
class DocumentRequirement:
    """One document required by a template.

    Attributes:
        id: Unique identifier.
        template_id: Owning template.
        document_type_id: Required document type.
        is_required: Mandatory for the process to progress.
        is_critical: Blocks submission when missing.
        max_size_mb: Upload size limit.
        allowed_formats: Allowed file extensions, lower-case without dot.
        sort_order: Position in the checklist.
        validity_days: Overrides the document type's validity window.
    """

    id: UUID
    template_id: UUID
    document_type_id: UUID
    is_required: bool = True
    is_critical: bool = False
    description: str | None = None
    max_size_mb: int = 10
    allowed_formats: tuple[str, ...] = ("pdf", "jpg", "jpeg", "png")
    sort_order: int = 0
    validity_days: int | None = None
    requires_translation: bool = False
    requires_notarization: bool = False

    def __post_init__(self) -> None:
        if self.max_size_mb < 1:
            raise ValueError(f"max_size_mb must be positive, got {self.max_size_mb}")
