"""Company, process type and legal framework models."""

from pydantic import BaseModel, ConfigDict, Field

from casework.api.models.common import DateTimeWithZ


class CompanyCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    tax_id: str | None = None
    email: str | None = None
    phone_number: str | None = None
    website: str | None = None
    address: str | None = None
    notes: str | None = None


class CompanyUpdateRequest(BaseModel):
    """Attributes to change; omitted fields keep their value."""

    name: str | None = None
    tax_id: str | None = None
    email: str | None = None
    phone_number: str | None = None
    website: str | None = None
    address: str | None = None
    notes: str | None = None
    is_active: bool | None = None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    tax_id: str | None
    email: str | None
    phone_number: str | None
    website: str | None
    address: str | None
    notes: str | None
    is_active: bool
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class ProcessTypeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    estimated_days: int | None = Field(default=None, ge=0)
    sort_order: int = 0


class ProcessTypeUpdateRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    estimated_days: int | None = Field(default=None, ge=0)
    sort_order: int | None = None
    is_active: bool | None = None


class ProcessTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    estimated_days: int | None
    sort_order: int
    is_active: bool


class LegalFrameworkCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    process_type_id: str | None = None
    description: str | None = None


class LegalFrameworkUpdateRequest(BaseModel):
    name: str | None = None
    process_type_id: str | None = None
    description: str | None = None
    is_active: bool | None = None


class LegalFrameworkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    process_type_id: str | None
    description: str | None
    is_active: bool
