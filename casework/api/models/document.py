"""Document, upload and document catalogue models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from casework.api.models.common import ISO_DATE_PATTERN, DateTimeWithZ
from casework.domain.models.document import DocumentStatus
from casework.domain.models.document_catalog import ValidityType
from casework.domain.services.document_validity import ValidityStatus


class UploadTargetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    token: str
    upload_url: str
    expires_at: DateTimeWithZ


class StoredFileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    token: str
    file_url: str
    size: int
    content_type: str


class _UploadFields(BaseModel):
    token: str = Field(..., min_length=1, description="Token of the stored bytes")
    file_name: str = Field(..., min_length=1)
    mime_type: str | None = None


class DocumentUploadRequest(_UploadFields):
    individual_process_id: UUID
    document_type_id: UUID
    document_requirement_id: UUID | None = None
    issue_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    expiry_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)


class PendingUploadRequest(_UploadFields):
    issue_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    expiry_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)


class LooseUploadRequest(_UploadFields):
    individual_process_id: UUID


class AssignTypeRequest(BaseModel):
    document_type_id: UUID


class ApproveRequest(BaseModel):
    notes: str | None = None


class RejectRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    individual_process_id: UUID
    document_type_id: UUID | None
    document_requirement_id: UUID | None
    person_id: UUID | None
    company_id: str | None
    file_name: str
    file_url: str
    file_size: int
    mime_type: str
    status: DocumentStatus
    uploaded_by: UUID | None
    uploaded_at: DateTimeWithZ | None
    reviewed_by: UUID | None
    reviewed_at: DateTimeWithZ | None
    rejection_reason: str | None
    issue_date: str | None
    expiry_date: str | None
    is_required: bool | None
    version: int
    is_latest: bool
    created_at: DateTimeWithZ


class DocumentSummaryResponse(BaseModel):
    total_required: int = Field(..., alias="totalRequired")
    total_optional: int = Field(..., alias="totalOptional")
    total_loose: int = Field(..., alias="totalLoose")
    required_uploaded: int = Field(..., alias="requiredUploaded")
    required_approved: int = Field(..., alias="requiredApproved")
    optional_uploaded: int = Field(..., alias="optionalUploaded")
    optional_approved: int = Field(..., alias="optionalApproved")

    model_config = ConfigDict(populate_by_name=True)


class GroupedDocumentsResponse(BaseModel):
    required: list[DocumentResponse]
    optional: list[DocumentResponse]
    loose: list[DocumentResponse]
    summary: DocumentSummaryResponse


class ValidityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: ValidityStatus
    message_key: str
    days_value: int | None


# Catalogue


class DocumentTypeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    code: str | None = None
    category: str | None = None
    description: str | None = None
    validity_type: ValidityType | None = None
    validity_days: int | None = Field(default=None, ge=0)
    allowed_file_types: list[str] = Field(default_factory=list)
    max_file_size_mb: int | None = Field(default=None, gt=0)


class DocumentTypeUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    code: str | None = None
    category: str | None = None
    description: str | None = None
    is_active: bool | None = None
    validity_type: ValidityType | None = None
    validity_days: int | None = Field(default=None, ge=0)
    allowed_file_types: list[str] | None = None
    max_file_size_mb: int | None = Field(default=None, gt=0)


class DocumentTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    code: str | None
    category: str | None
    description: str | None
    is_active: bool
    validity_type: ValidityType | None
    validity_days: int | None
    allowed_file_types: list[str]
    max_file_size_mb: int | None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class TemplateCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    process_type_id: str = Field(..., min_length=1)
    legal_framework_id: str | None = None
    description: str | None = None
    is_active: bool = True


class TemplateActiveRequest(BaseModel):
    is_active: bool


class TemplateCloneRequest(BaseModel):
    name: str | None = None


class TemplateResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    process_type_id: str
    legal_framework_id: str | None
    description: str | None
    version: int
    is_active: bool
    created_by: UUID
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class RequirementCreateRequest(BaseModel):
    document_type_id: UUID
    is_required: bool = True
    is_critical: bool = False
    description: str | None = None
    max_size_mb: int = Field(default=10, gt=0)
    allowed_formats: list[str] = Field(
        default_factory=lambda: ["pdf", "jpg", "jpeg", "png"]
    )
    sort_order: int | None = None
    validity_days: int | None = Field(default=None, ge=0)
    requires_translation: bool = False
    requires_notarization: bool = False


class RequirementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    template_id: UUID
    document_type_id: UUID
    is_required: bool
    is_critical: bool
    description: str | None
    max_size_mb: int
    allowed_formats: list[str]
    sort_order: int
    validity_days: int | None
    requires_translation: bool
    requires_notarization: bool
