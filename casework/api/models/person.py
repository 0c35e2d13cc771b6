"""Person and user profile models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from casework.api.models.common import ISO_DATE_PATTERN, DateTimeWithZ
from casework.domain.models.user_profile import UserRole


class PersonCreateRequest(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: str | None = None
    cpf: str | None = None
    birth_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    nationality: str | None = None
    company_id: str | None = None


class PersonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    email: str | None
    cpf: str | None
    birth_date: str | None
    nationality: str | None
    company_id: str | None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str
    role: UserRole
    company_id: str | None
    is_active: bool


class UserProfileCreateRequest(BaseModel):
    email: str = Field(..., min_length=3)
    full_name: str = Field(..., min_length=1)
    role: UserRole
    company_id: str | None = None


class UserProfileUpdateRequest(BaseModel):
    email: str | None = Field(default=None, min_length=3)
    full_name: str | None = Field(default=None, min_length=1)
    role: UserRole | None = None
    company_id: str | None = None
    is_active: bool | None = None
