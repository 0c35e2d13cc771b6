"""Bulk operation request models."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from casework.api.models.common import ISO_DATE_PATTERN


class BulkStatusUpdateRequest(BaseModel):
    process_ids: list[UUID] = Field(..., min_length=1)
    case_status_id: UUID
    reason: str | None = None


class BulkCreateProcessesRequest(BaseModel):
    collective_process_id: UUID
    person_ids: list[UUID] = Field(..., min_length=1)
    case_status_id: UUID
    legal_framework_id: str | None = None
    cbo_id: str | None = None
    deadline_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)


class BulkDocumentsRequest(BaseModel):
    document_ids: list[UUID] = Field(..., min_length=1)


class BulkApproveRequest(BulkDocumentsRequest):
    notes: str | None = None


class BulkRejectRequest(BulkDocumentsRequest):
    reason: str


class BulkImportPeopleRequest(BaseModel):
    """Rows with full_name and optional email, cpf, birth_date and extra fields."""

    rows: list[dict[str, Any]] = Field(..., min_length=1)
