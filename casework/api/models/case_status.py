"""Case status catalogue models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from casework.api.models.common import DateTimeWithZ


class CaseStatusCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    name_en: str | None = None
    description: str | None = None
    category: str | None = None
    color: str | None = None
    sort_order: int = 0
    fillable_fields: list[str] = Field(default_factory=list)


class CaseStatusUpdateRequest(BaseModel):
    """Attributes to change; omitted fields keep their value."""

    name: str | None = None
    code: str | None = None
    name_en: str | None = None
    description: str | None = None
    category: str | None = None
    color: str | None = None
    sort_order: int | None = None
    fillable_fields: list[str] | None = None


class CaseStatusToggleRequest(BaseModel):
    is_active: bool


class CaseStatusOrder(BaseModel):
    id: UUID
    sort_order: int


class CaseStatusReorderRequest(BaseModel):
    updates: list[CaseStatusOrder]


class CaseStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    code: str
    name_en: str | None
    description: str | None
    category: str | None
    color: str | None
    sort_order: int
    is_active: bool
    fillable_fields: list[str]
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ
