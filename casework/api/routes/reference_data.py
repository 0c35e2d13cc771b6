"""Company, process type and legal framework routes.

Reads are open to every authenticated user (clients only see their own
company); changes are admin only.
"""

from fastapi import APIRouter, Depends, Query, Request, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_reference_data_service
from casework.api.errors import problem_from_error
from casework.api.models.common import ErrorResponse
from casework.api.models.reference_data import (
    CompanyCreateRequest,
    CompanyResponse,
    CompanyUpdateRequest,
    LegalFrameworkCreateRequest,
    LegalFrameworkResponse,
    LegalFrameworkUpdateRequest,
    ProcessTypeCreateRequest,
    ProcessTypeResponse,
    ProcessTypeUpdateRequest,
)
from casework.application.services.reference_data_service import ReferenceDataService
from casework.domain.exceptions import CaseworkError

companies_router = APIRouter(prefix="/v1/companies", tags=["reference-data"])
process_types_router = APIRouter(prefix="/v1/process-types", tags=["reference-data"])
legal_frameworks_router = APIRouter(prefix="/v1/legal-frameworks", tags=["reference-data"])

WRITE_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


# Companies


@companies_router.get("", response_model=list[CompanyResponse])
async def list_companies(
    actor: CurrentActor,
    include_inactive: bool = Query(default=False),
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> list[CompanyResponse]:
    companies = await service.list_companies(actor, include_inactive=include_inactive)
    return [CompanyResponse.model_validate(c) for c in companies]


@companies_router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_company(
    company_id: str,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> CompanyResponse:
    try:
        company = await service.read_company(actor, company_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CompanyResponse.model_validate(company)


@companies_router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses=WRITE_RESPONSES,
)
async def create_company(
    body: CompanyCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> CompanyResponse:
    fields = body.model_dump()
    try:
        company = await service.create_company(actor, fields.pop("name"), **fields)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CompanyResponse.model_validate(company)


@companies_router.patch(
    "/{company_id}", response_model=CompanyResponse, responses=WRITE_RESPONSES
)
async def update_company(
    company_id: str,
    body: CompanyUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> CompanyResponse:
    try:
        company = await service.update_company(
            actor, company_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CompanyResponse.model_validate(company)


# Process types


@process_types_router.get("", response_model=list[ProcessTypeResponse])
async def list_process_types(
    actor: CurrentActor,
    include_inactive: bool = Query(default=False),
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> list[ProcessTypeResponse]:
    types = await service.list_process_types(include_inactive=include_inactive)
    return [ProcessTypeResponse.model_validate(t) for t in types]


@process_types_router.get(
    "/{process_type_id}",
    response_model=ProcessTypeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_process_type(
    process_type_id: str,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> ProcessTypeResponse:
    try:
        process_type = await service.get_process_type(process_type_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return ProcessTypeResponse.model_validate(process_type)


@process_types_router.post(
    "",
    response_model=ProcessTypeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=WRITE_RESPONSES,
)
async def create_process_type(
    body: ProcessTypeCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> ProcessTypeResponse:
    fields = body.model_dump()
    try:
        process_type = await service.create_process_type(
            actor, fields.pop("name"), **fields
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return ProcessTypeResponse.model_validate(process_type)


@process_types_router.patch(
    "/{process_type_id}", response_model=ProcessTypeResponse, responses=WRITE_RESPONSES
)
async def update_process_type(
    process_type_id: str,
    body: ProcessTypeUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> ProcessTypeResponse:
    try:
        process_type = await service.update_process_type(
            actor, process_type_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return ProcessTypeResponse.model_validate(process_type)


# Legal frameworks


@legal_frameworks_router.get("", response_model=list[LegalFrameworkResponse])
async def list_legal_frameworks(
    actor: CurrentActor,
    process_type_id: str | None = Query(default=None),
    include_inactive: bool = Query(default=False),
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> list[LegalFrameworkResponse]:
    frameworks = await service.list_legal_frameworks(
        process_type_id=process_type_id, include_inactive=include_inactive
    )
    return [LegalFrameworkResponse.model_validate(f) for f in frameworks]


@legal_frameworks_router.get(
    "/{framework_id}",
    response_model=LegalFrameworkResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_legal_framework(
    framework_id: str,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> LegalFrameworkResponse:
    try:
        framework = await service.get_legal_framework(framework_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return LegalFrameworkResponse.model_validate(framework)


@legal_frameworks_router.post(
    "",
    response_model=LegalFrameworkResponse,
    status_code=status.HTTP_201_CREATED,
    responses=WRITE_RESPONSES,
)
async def create_legal_framework(
    body: LegalFrameworkCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> LegalFrameworkResponse:
    fields = body.model_dump()
    try:
        framework = await service.create_legal_framework(
            actor, fields.pop("name"), **fields
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return LegalFrameworkResponse.model_validate(framework)


@legal_frameworks_router.patch(
    "/{framework_id}", response_model=LegalFrameworkResponse, responses=WRITE_RESPONSES
)
async def update_legal_framework(
    framework_id: str,
    body: LegalFrameworkUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: ReferenceDataService = Depends(get_reference_data_service),
) -> LegalFrameworkResponse:
    try:
        framework = await service.update_legal_framework(
            actor, framework_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return LegalFrameworkResponse.model_validate(framework)
