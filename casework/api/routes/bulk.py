"""Bulk operation routes.

Each item is processed on its own: failures are reported per item and do
not stop the others.
"""

from fastapi import APIRouter, Depends, Request

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_bulk_operation_service
from casework.api.errors import problem_from_error
from casework.api.models.bulk import (
    BulkApproveRequest,
    BulkCreateProcessesRequest,
    BulkDocumentsRequest,
    BulkImportPeopleRequest,
    BulkRejectRequest,
    BulkStatusUpdateRequest,
)
from casework.api.models.common import BulkOperationResponse, ErrorResponse
from casework.application.services.bulk_operation_service import BulkOperationService
from casework.domain.exceptions import CaseworkError

router = APIRouter(
    prefix="/v1/bulk",
    tags=["bulk"],
    responses={403: {"model": ErrorResponse, "description": "Admin only"}},
)


@router.post("/process-status", response_model=BulkOperationResponse)
async def bulk_update_status(
    body: BulkStatusUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: BulkOperationService = Depends(get_bulk_operation_service),
) -> BulkOperationResponse:
    """Record one case status on many individual processes."""
    try:
        result = await service.bulk_update_status(
            actor, body.process_ids, body.case_status_id, reason=body.reason
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)


@router.post("/individual-processes", response_model=BulkOperationResponse)
async def bulk_create_individual_processes(
    body: BulkCreateProcessesRequest,
    request: Request,
    actor: CurrentActor,
    service: BulkOperationService = Depends(get_bulk_operation_service),
) -> BulkOperationResponse:
    try:
        result = await service.bulk_create_individual_processes(
            actor,
            body.collective_process_id,
            body.person_ids,
            body.case_status_id,
            legal_framework_id=body.legal_framework_id,
            cbo_id=body.cbo_id,
            deadline_date=body.deadline_date,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)


@router.post("/documents/approve", response_model=BulkOperationResponse)
async def bulk_approve_documents(
    body: BulkApproveRequest,
    request: Request,
    actor: CurrentActor,
    service: BulkOperationService = Depends(get_bulk_operation_service),
) -> BulkOperationResponse:
    try:
        result = await service.bulk_approve_documents(
            actor, body.document_ids, notes=body.notes
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)


@router.post(
    "/documents/reject",
    response_model=BulkOperationResponse,
    responses={400: {"model": ErrorResponse, "description": "Reason required"}},
)
async def bulk_reject_documents(
    body: BulkRejectRequest,
    request: Request,
    actor: CurrentActor,
    service: BulkOperationService = Depends(get_bulk_operation_service),
) -> BulkOperationResponse:
    try:
        result = await service.bulk_reject_documents(
            actor, body.document_ids, body.reason
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)


@router.post("/documents/delete", response_model=BulkOperationResponse)
async def bulk_delete_documents(
    body: BulkDocumentsRequest,
    request: Request,
    actor: CurrentActor,
    service: BulkOperationService = Depends(get_bulk_operation_service),
) -> BulkOperationResponse:
    try:
        result = await service.bulk_delete_documents(actor, body.document_ids)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)


@router.post("/people", response_model=BulkOperationResponse)
async def bulk_import_people(
    body: BulkImportPeopleRequest,
    request: Request,
    actor: CurrentActor,
    service: BulkOperationService = Depends(get_bulk_operation_service),
) -> BulkOperationResponse:
    """Create people from rows; failed rows are reported by 1-based index."""
    try:
        result = await service.bulk_import_people(actor, body.rows)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return BulkOperationResponse.from_result(result)
