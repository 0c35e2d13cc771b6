"""Individual process routes, including the status history of a process.

Status records are addressed both under their process
(/v1/individual-processes/{process_id}/statuses) and on their own
(/v1/status-records/{record_id}) for edits.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import (
    get_individual_process_service,
    get_status_history_service,
)
from casework.api.errors import problem_from_error
from casework.api.models.common import ErrorResponse
from casework.api.models.process import (
    FillableFieldsResponse,
    FillableFieldsUpdateRequest,
    FilledFieldsRequest,
    IndividualProcessCreateRequest,
    IndividualProcessResponse,
    IndividualProcessUpdateRequest,
    StatusRecordCreateRequest,
    StatusRecordResponse,
    StatusRecordUpdateRequest,
)
from casework.application.services.individual_process_service import (
    IndividualProcessService,
)
from casework.application.services.status_history_service import StatusHistoryService
from casework.domain.exceptions import CaseworkError

router = APIRouter(prefix="/v1/individual-processes", tags=["individual-processes"])
records_router = APIRouter(prefix="/v1/status-records", tags=["individual-processes"])


@router.get("", response_model=list[IndividualProcessResponse])
async def list_individual_processes(
    request: Request,
    actor: CurrentActor,
    collective_process_id: UUID | None = Query(default=None),
    case_status_id: UUID | None = Query(default=None),
    is_active: bool | None = Query(default=None),
    service: IndividualProcessService = Depends(get_individual_process_service),
) -> list[IndividualProcessResponse]:
    """List the processes the caller may see.

    Clients only see processes of their company's collective processes.
    """
    try:
        processes = await service.list(
            actor,
            collective_process_id=collective_process_id,
            case_status_id=case_status_id,
            is_active=is_active,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [IndividualProcessResponse.model_validate(p) for p in processes]


@router.post(
    "",
    response_model=IndividualProcessResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Person already in the process"},
    },
)
async def create_individual_process(
    body: IndividualProcessCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: IndividualProcessService = Depends(get_individual_process_service),
) -> IndividualProcessResponse:
    """Create a process; with a case status its initial status record is written."""
    fields = body.model_dump(exclude_unset=True)
    try:
        process = await service.create(
            actor,
            person_id=fields.pop("person_id"),
            collective_process_id=fields.pop("collective_process_id", None),
            case_status_id=fields.pop("case_status_id", None),
            status_date=fields.pop("status_date", None),
            **fields,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return IndividualProcessResponse.model_validate(process)


@router.get(
    "/{process_id}",
    response_model=IndividualProcessResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_individual_process(
    process_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: IndividualProcessService = Depends(get_individual_process_service),
) -> IndividualProcessResponse:
    try:
        process = await service.get(actor, process_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return IndividualProcessResponse.model_validate(process)


@router.patch(
    "/{process_id}",
    response_model=IndividualProcessResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_individual_process(
    process_id: UUID,
    body: IndividualProcessUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: IndividualProcessService = Depends(get_individual_process_service),
) -> IndividualProcessResponse:
    try:
        process = await service.update(
            actor, process_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return IndividualProcessResponse.model_validate(process)


@router.delete(
    "/{process_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_individual_process(
    process_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: IndividualProcessService = Depends(get_individual_process_service),
) -> Response:
    """Delete a process together with its status records."""
    try:
        await service.remove(actor, process_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Status history


@router.get("/{process_id}/statuses", response_model=list[StatusRecordResponse])
async def get_status_history(
    process_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> list[StatusRecordResponse]:
    """Status records newest first by effective date."""
    try:
        records = await service.get_status_history(actor, process_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [StatusRecordResponse.model_validate(r) for r in records]


@router.get(
    "/{process_id}/statuses/active",
    response_model=StatusRecordResponse | None,
)
async def get_active_status(
    process_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> StatusRecordResponse | None:
    try:
        record = await service.get_active_status(actor, process_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return StatusRecordResponse.model_validate(record) if record else None


@router.post(
    "/{process_id}/statuses",
    response_model=StatusRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def add_status(
    process_id: UUID,
    body: StatusRecordCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> StatusRecordResponse:
    """Record a status; an active record replaces the current one."""
    try:
        record = await service.add_status(
            actor,
            process_id,
            body.case_status_id,
            date=body.date,
            notes=body.notes,
            is_active=body.is_active,
            filled_fields_data=body.filled_fields_data,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return StatusRecordResponse.model_validate(record)


@records_router.patch(
    "/{record_id}",
    response_model=StatusRecordResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_status_record(
    record_id: UUID,
    body: StatusRecordUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> StatusRecordResponse:
    try:
        record = await service.update_status(
            actor, record_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return StatusRecordResponse.model_validate(record)


@records_router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_status_record(
    record_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> Response:
    """Delete a record; deleting the active one clears the process's case status."""
    try:
        await service.delete_status(actor, record_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@records_router.get("/{record_id}/fillable-fields", response_model=FillableFieldsResponse)
async def get_fillable_fields(
    record_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> FillableFieldsResponse:
    try:
        view = await service.get_fillable_fields(actor, record_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return FillableFieldsResponse.model_validate(view)


@records_router.put("/{record_id}/fillable-fields", response_model=StatusRecordResponse)
async def update_fillable_fields(
    record_id: UUID,
    body: FillableFieldsUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> StatusRecordResponse:
    try:
        record = await service.update_fillable_fields(
            actor, record_id, body.fillable_fields
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return StatusRecordResponse.model_validate(record)


@records_router.put("/{record_id}/filled-fields", response_model=StatusRecordResponse)
async def save_filled_fields(
    record_id: UUID,
    body: FilledFieldsRequest,
    request: Request,
    actor: CurrentActor,
    service: StatusHistoryService = Depends(get_status_history_service),
) -> StatusRecordResponse:
    """Store filled values; they are copied onto the process as well."""
    try:
        record = await service.save_filled_fields(actor, record_id, body.data)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return StatusRecordResponse.model_validate(record)
