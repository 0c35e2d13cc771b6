"""Individual process, collective process and status history models."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from casework.api.models.common import ISO_DATE_PATTERN, DateTimeWithZ


class _ProcessFields(BaseModel):
    """Editable attributes shared by create and update requests."""

    consulate_id: str | None = None
    date_process: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    passport_id: str | None = None
    applicant_id: str | None = None
    process_type_id: str | None = None
    legal_framework_id: str | None = None
    cbo_id: str | None = None
    mre_office_number: str | None = None
    dou_number: str | None = None
    dou_section: str | None = None
    dou_page: str | None = None
    dou_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    protocol_number: str | None = None
    rnm_number: str | None = None
    rnm_deadline: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    appointment_date_time: str | None = None
    deadline_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)


class IndividualProcessCreateRequest(_ProcessFields):
    person_id: UUID
    collective_process_id: UUID | None = None
    case_status_id: UUID | None = None
    status_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)


class IndividualProcessUpdateRequest(_ProcessFields):
    collective_process_id: UUID | None = None
    is_active: bool | None = None


class IndividualProcessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    person_id: UUID
    collective_process_id: UUID | None
    case_status_id: UUID | None
    status_code: str | None
    consulate_id: str | None
    date_process: str | None
    passport_id: str | None
    applicant_id: str | None
    process_type_id: str | None
    legal_framework_id: str | None
    cbo_id: str | None
    mre_office_number: str | None
    dou_number: str | None
    dou_section: str | None
    dou_page: str | None
    dou_date: str | None
    protocol_number: str | None
    rnm_number: str | None
    rnm_deadline: str | None
    appointment_date_time: str | None
    deadline_date: str | None
    is_active: bool
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


# Status history


class StatusRecordCreateRequest(BaseModel):
    case_status_id: UUID
    date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    notes: str | None = None
    is_active: bool = True
    filled_fields_data: dict[str, Any] | None = None


class StatusRecordUpdateRequest(BaseModel):
    case_status_id: UUID | None = None
    date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    notes: str | None = None
    is_active: bool | None = None


class FilledFieldsRequest(BaseModel):
    data: dict[str, Any]


class FillableFieldsUpdateRequest(BaseModel):
    fillable_fields: list[str]


class FillableFieldsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fillable_fields: list[str]
    filled_fields_data: dict[str, Any]


class StatusRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    individual_process_id: UUID
    case_status_id: UUID
    status_name: str
    status_code: str
    date: str
    is_active: bool
    notes: str | None
    fillable_fields: list[str]
    filled_fields_data: dict[str, Any]
    changed_by: UUID
    changed_at: DateTimeWithZ
    created_at: DateTimeWithZ


# Collective processes


class CollectiveProcessCreateRequest(BaseModel):
    reference_number: str = Field(..., min_length=1)
    company_id: str | None = None
    contact_person_id: str | None = None
    process_type_id: str | None = None
    workplace_city_id: str | None = None
    consulate_id: str | None = None
    is_urgent: bool = False
    request_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    notes: str | None = None


class CollectiveProcessUpdateRequest(BaseModel):
    reference_number: str | None = Field(default=None, min_length=1)
    company_id: str | None = None
    contact_person_id: str | None = None
    process_type_id: str | None = None
    workplace_city_id: str | None = None
    consulate_id: str | None = None
    is_urgent: bool | None = None
    request_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    notes: str | None = None


class CollectiveProcessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    reference_number: str
    company_id: str | None
    contact_person_id: str | None
    process_type_id: str | None
    workplace_city_id: str | None
    consulate_id: str | None
    is_urgent: bool
    request_date: str | None
    notes: str | None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ


class AddPeopleRequest(BaseModel):
    person_ids: list[UUID] = Field(..., min_length=1)
    request_date: str = Field(..., pattern=ISO_DATE_PATTERN)
    case_status_id: UUID
    consulate_id: str | None = None


class CollectiveStatusUpdateRequest(BaseModel):
    case_status_id: UUID
    date: str = Field(..., pattern=ISO_DATE_PATTERN)
    notes: str | None = None
    filled_fields_data: dict[str, Any] | None = None


class StatusBreakdownResponse(BaseModel):
    case_status_id: UUID
    name: str
    color: str | None
    count: int


class CollectiveStatusResponse(BaseModel):
    """Calculated status of a collective process in the caller's locale."""

    display_text: str
    color: str | None
    breakdown: list[StatusBreakdownResponse]
    total_processes: int
    has_multiple_statuses: bool
