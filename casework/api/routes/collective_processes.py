"""Collective process routes.

A collective process groups the individual processes of one corporate
sponsorship. Adding people and cascading a status touch every member
and answer with a per-item bulk result.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from casework.api.auth import CurrentActor, Locale
from casework.api.dependencies.casework import get_collective_process_service
from casework.api.errors import problem_from_error
from casework.api.models.common import BulkOperationResponse, ErrorResponse
from casework.api.models.process import (
    AddPeopleRequest,
    CollectiveProcessCreateRequest,
    CollectiveProcessResponse,
    CollectiveProcessUpdateRequest,
    CollectiveStatusResponse,
    CollectiveStatusUpdateRequest,
    StatusBreakdownResponse,
)
from casework.application.services.collective_process_service import (
    CollectiveProcessService,
)
from casework.domain.exceptions import CaseworkError

router = APIRouter(prefix="/v1/collective-processes", tags=["collective-processes"])


@router.get("", response_model=list[CollectiveProcessResponse])
async def list_collective_processes(
    request: Request,
    actor: CurrentActor,
    company_id: str | None = Query(default=None),
    reference_number: str | None = Query(default=None),
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> list[CollectiveProcessResponse]:
    """List collective processes; clients only see their own company's."""
    try:
        if reference_number:
            found = await service.get_by_reference(actor, reference_number)
            collectives = [found] if found else []
        else:
            collectives = await service.list(actor, company_id=company_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [CollectiveProcessResponse.model_validate(c) for c in collectives]


@router.post(
    "",
    response_model=CollectiveProcessResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_collective_process(
    body: CollectiveProcessCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> CollectiveProcessResponse:
    fields = body.model_dump()
    try:
        collective = await service.create(
            actor, fields.pop("reference_number"), **fields
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CollectiveProcessResponse.model_validate(collective)


@router.get(
    "/{collective_id}",
    response_model=CollectiveProcessResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_collective_process(
    collective_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> CollectiveProcessResponse:
    try:
        collective = await service.get(actor, collective_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CollectiveProcessResponse.model_validate(collective)


@router.patch(
    "/{collective_id}",
    response_model=CollectiveProcessResponse,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_collective_process(
    collective_id: UUID,
    body: CollectiveProcessUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> CollectiveProcessResponse:
    try:
        collective = await service.update(
            actor, collective_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CollectiveProcessResponse.model_validate(collective)


@router.delete(
    "/{collective_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Has individual processes"},
    },
)
async def delete_collective_process(
    collective_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> Response:
    try:
        await service.remove(actor, collective_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{collective_id}/status", response_model=CollectiveStatusResponse)
async def get_collective_status(
    collective_id: UUID,
    request: Request,
    actor: CurrentActor,
    locale: Locale,
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> CollectiveStatusResponse:
    """Status calculated from the members, in the Accept-Language locale."""
    try:
        summary = await service.calculate_status(actor, collective_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return CollectiveStatusResponse(
        display_text=summary.text_for(locale),
        color=summary.color,
        breakdown=[
            StatusBreakdownResponse(
                case_status_id=entry.case_status_id,
                name=entry.display_name(locale),
                color=entry.color,
                count=entry.count,
            )
            for entry in summary.breakdown
        ],
        total_processes=summary.total_processes,
        has_multiple_statuses=summary.has_multiple_statuses,
    )


@router.post(
    "/{collective_id}/people",
    response_model=BulkOperationResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def add_people(
    collective_id: UUID,
    body: AddPeopleRequest,
    request: Request,
    actor: CurrentActor,
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> BulkOperationResponse:
    """Create an individual process for each person; failures are per person."""
    try:
        result = await service.add_people(
            actor,
            collective_id,
            body.person_ids,
            body.request_date,
            body.case_status_id,
            consulate_id=body.consulate_id,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)


@router.post(
    "/{collective_id}/statuses",
    response_model=BulkOperationResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No individual processes"},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_member_statuses(
    collective_id: UUID,
    body: CollectiveStatusUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: CollectiveProcessService = Depends(get_collective_process_service),
) -> BulkOperationResponse:
    """Record the same status on every member process."""
    try:
        result = await service.update_statuses(
            actor,
            collective_id,
            body.case_status_id,
            body.date,
            notes=body.notes,
            filled_fields_data=body.filled_fields_data,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)
