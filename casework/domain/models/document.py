"""Delivered document domain model.

A DocumentDelivered is one uploaded version of a document for an
individual process. Versions of the same (process, document type,
requirement) form a history in which exactly one record is the latest.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStatus(str, Enum):
    """Review lifecycle of a delivered document."""

    NOT_STARTED = "not_started"
    PENDING_UPLOAD = "pending_upload"
    UPLOADED = "uploaded"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    EXPIRED = "expired"


# Checklist slots that hold no file yet.
EMPTY_SLOT_STATUSES: frozenset[DocumentStatus] = frozenset(
    {DocumentStatus.NOT_STARTED, DocumentStatus.PENDING_UPLOAD}
)


@dataclass(frozen=True, eq=True)
class DocumentDelivered:
    """An uploaded (or still pending) document version.

    Attributes:
        id: Unique identifier.
        individual_process_id: The process the document belongs to.
        document_type_id: Type of document (None for loose uploads).
        document_requirement_id: Template requirement it fulfils, if any.
        person_id: Applicant the document is about.
        company_id: Sponsor company, used for client access checks.
        file_name: Original file name ("" for empty checklist slots).
        file_url: Where the bytes can be fetched.
        file_size: Size in bytes.
        mime_type: Content type reported at upload.
        status: Review status.
        uploaded_by: User that uploaded this version.
        reviewed_by: Admin that approved or rejected it.
        rejection_reason: Reason given on rejection.
        issue_date: Issue date printed on the document.
        expiry_date: Expiry date printed on the document.
        is_required: Whether the checklist requires it (None for loose uploads).
        version: 1-based version within its history.
        is_latest: Only the latest version is listed.
    """

    id: UUID
    individual_process_id: UUID
    document_type_id: UUID | None = None
    document_requirement_id: UUID | None = None
    person_id: UUID | None = None
    company_id: str | None = None
    file_name: str = ""
    file_url: str = ""
    file_size: int = 0
    mime_type: str = ""
    status: DocumentStatus = DocumentStatus.NOT_STARTED
    uploaded_by: UUID | None = None
    uploaded_at: datetime | None = None
    reviewed_by: UUID | None = None
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
    issue_date: str | None = None
    expiry_date: str | None = None
    is_required: bool | None = None
    version: int = 1
    is_latest: bool = True
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if self.version < 1:
            raise ValueError(f"version must be >= 1, got {self.version}")
        if self.file_size < 0:
            raise ValueError(f"file_size must be non-negative, got {self.file_size}")

    @property
    def is_empty_slot(self) -> bool:
        """True for checklist entries that hold no file yet."""
        return self.status in EMPTY_SLOT_STATUSES

    def history_key(self) -> tuple[UUID, UUID | None, UUID | None]:
        """Key shared by every version of the same document."""
        return (
            self.individual_process_id,
            self.document_type_id,
            self.document_requirement_id,
        )

    def approved(self, reviewer_id: UUID) -> DocumentDelivered:
        """Return an approved copy reviewed by reviewer_id."""
        return replace(
            self,
            status=DocumentStatus.APPROVED,
            reviewed_by=reviewer_id,
            reviewed_at=_utc_now(),
            rejection_reason=None,
        )

    def rejected(self, reviewer_id: UUID, reason: str) -> DocumentDelivered:
        """Return a rejected copy carrying the reason."""
        return replace(
            self,
            status=DocumentStatus.REJECTED,
            reviewed_by=reviewer_id,
            reviewed_at=_utc_now(),
            rejection_reason=reason,
        )

    def superseded(self) -> DocumentDelivered:
        """Return a copy that is no longer the latest version."""
        return replace(self, is_latest=False)

    def with_changes(self, **changes: Any) -> DocumentDelivered:
        return replace(self, **changes)
