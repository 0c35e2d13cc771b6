"""Case status catalogue routes.

Reads are open to every authenticated user; changes are admin only.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_case_status_service
from casework.api.errors import problem_from_error
from casework.api.models.case_status import (
    CaseStatusCreateRequest,
    CaseStatusReorderRequest,
    CaseStatusResponse,
    CaseStatusToggleRequest,
    CaseStatusUpdateRequest,
)
from casework.api.models.common import CountResponse, ErrorResponse
from casework.application.services.case_status_service import CaseStatusService
from casework.domain.exceptions import CaseworkError

router = APIRouter(prefix="/v1/case-statuses", tags=["case-statuses"])


@router.get("", response_model=list[CaseStatusResponse])
async def list_case_statuses(
    actor: CurrentActor,
    include_inactive: bool = Query(default=False),
    category: str | None = Query(default=None),
    service: CaseStatusService = Depends(get_case_status_service),
) -> list[CaseStatusResponse]:
    """List case statuses ordered by sort order."""
    if category:
        statuses = await service.list_by_category(category)
    else:
        statuses = await service.list(include_inactive=include_inactive)
    return [CaseStatusResponse.model_validate(s) for s in statuses]


@router.get(
    "/{status_id}",
    response_model=CaseStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_case_status(
    status_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: CaseStatusService = Depends(get_case_status_service),
) -> CaseStatusResponse:
    try:
        case_status = await service.get(status_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CaseStatusResponse.model_validate(case_status)


@router.post(
    "",
    response_model=CaseStatusResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_case_status(
    body: CaseStatusCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: CaseStatusService = Depends(get_case_status_service),
) -> CaseStatusResponse:
    try:
        case_status = await service.create(actor, **body.model_dump())
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CaseStatusResponse.model_validate(case_status)


@router.patch(
    "/{status_id}",
    response_model=CaseStatusResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_case_status(
    status_id: UUID,
    body: CaseStatusUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: CaseStatusService = Depends(get_case_status_service),
) -> CaseStatusResponse:
    try:
        case_status = await service.update(
            actor, status_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CaseStatusResponse.model_validate(case_status)


@router.delete(
    "/{status_id}",
    response_model=CaseStatusResponse,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_case_status(
    status_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: CaseStatusService = Depends(get_case_status_service),
) -> CaseStatusResponse:
    """Deactivate a case status that no process uses."""
    try:
        case_status = await service.remove(actor, status_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CaseStatusResponse.model_validate(case_status)


@router.post("/{status_id}/active", response_model=CaseStatusResponse)
async def toggle_case_status(
    status_id: UUID,
    body: CaseStatusToggleRequest,
    request: Request,
    actor: CurrentActor,
    service: CaseStatusService = Depends(get_case_status_service),
) -> CaseStatusResponse:
    try:
        case_status = await service.toggle_active(actor, status_id, body.is_active)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CaseStatusResponse.model_validate(case_status)


@router.post("/reorder", response_model=CountResponse)
async def reorder_case_statuses(
    body: CaseStatusReorderRequest,
    request: Request,
    actor: CurrentActor,
    service: CaseStatusService = Depends(get_case_status_service),
) -> CountResponse:
    try:
        count = await service.reorder(
            actor, [(item.id, item.sort_order) for item in body.updates]
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CountResponse(count=count)
