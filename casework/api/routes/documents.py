"""Document routes.

Uploads take two steps: POST /v1/documents/upload-target hands out a
token, the bytes are PUT to /v1/documents/uploads/{token}, then the
token is registered as a document (typed, for a pending slot, or loose).
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_document_service
from casework.api.errors import problem_from_error
from casework.api.models.common import ErrorResponse
from casework.api.models.document import (
    ApproveRequest,
    AssignTypeRequest,
    DocumentResponse,
    DocumentSummaryResponse,
    DocumentUploadRequest,
    GroupedDocumentsResponse,
    LooseUploadRequest,
    PendingUploadRequest,
    RejectRequest,
    StoredFileResponse,
    UploadTargetResponse,
    ValidityResponse,
)
from casework.application.services.document_service import DocumentService
from casework.domain.exceptions import CaseworkError
from casework.domain.models.document import DocumentStatus

router = APIRouter(prefix="/v1/documents", tags=["documents"])

DEFAULT_CONTENT_TYPE = "application/octet-stream"


# Two-step upload


@router.post(
    "/upload-target",
    response_model=UploadTargetResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_upload_target(
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> UploadTargetResponse:
    try:
        target = await service.create_upload_target(actor)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return UploadTargetResponse.model_validate(target)


@router.put(
    "/uploads/{token}",
    response_model=StoredFileResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown or expired token"},
        413: {"model": ErrorResponse, "description": "Body exceeds the upload limit"},
    },
)
async def put_upload_bytes(
    token: str,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> StoredFileResponse:
    """Transfer the raw request body for an upload token.

    A declared Content-Length over the limit is refused before reading;
    otherwise the body is counted as it streams in.
    """
    content_type = request.headers.get("content-type") or DEFAULT_CONTENT_TYPE
    try:
        declared = request.headers.get("content-length")
        if declared and declared.isdigit():
            service.check_upload_size(int(declared))
        chunks: list[bytes] = []
        received = 0
        async for chunk in request.stream():
            received += len(chunk)
            service.check_upload_size(received)
            chunks.append(chunk)
        stored = await service.store_file(actor, token, b"".join(chunks), content_type)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return StoredFileResponse.model_validate(stored)


@router.post(
    "",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
    },
)
async def upload_document(
    body: DocumentUploadRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Register stored bytes as the latest version of a typed document.

    An empty checklist slot of the same type is filled in place; otherwise
    a new version is saved and the previous one stops being the latest.
    """
    try:
        document = await service.upload(
            actor,
            body.individual_process_id,
            body.document_type_id,
            body.token,
            body.file_name,
            document_requirement_id=body.document_requirement_id,
            mime_type=body.mime_type,
            issue_date=body.issue_date,
            expiry_date=body.expiry_date,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


@router.post(
    "/loose",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def upload_loose_document(
    body: LooseUploadRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Register stored bytes without a document type."""
    try:
        document = await service.upload_loose(
            actor,
            body.individual_process_id,
            body.token,
            body.file_name,
            mime_type=body.mime_type,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    request: Request,
    actor: CurrentActor,
    individual_process_id: UUID = Query(...),
    document_status: DocumentStatus | None = Query(default=None, alias="status"),
    service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    """Latest versions of a process's documents."""
    try:
        documents = await service.list(
            actor, individual_process_id, status=document_status
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [DocumentResponse.model_validate(d) for d in documents]


@router.get("/grouped", response_model=GroupedDocumentsResponse)
async def list_documents_grouped(
    request: Request,
    actor: CurrentActor,
    individual_process_id: UUID = Query(...),
    service: DocumentService = Depends(get_document_service),
) -> GroupedDocumentsResponse:
    """Latest documents split into required, optional and loose, with counts."""
    try:
        groups = await service.list_grouped_by_category(actor, individual_process_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return GroupedDocumentsResponse(
        required=[DocumentResponse.model_validate(d) for d in groups.required],
        optional=[DocumentResponse.model_validate(d) for d in groups.optional],
        loose=[DocumentResponse.model_validate(d) for d in groups.loose],
        summary=DocumentSummaryResponse.model_validate(groups.summary),
    )


@router.get(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_document(
    document_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    try:
        document = await service.get(actor, document_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


@router.get(
    "/{document_id}/file",
    response_class=Response,
    responses={
        200: {"description": "The stored bytes", "content": {"application/octet-stream": {}}},
        404: {"model": ErrorResponse},
    },
)
async def download_document_file(
    document_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    try:
        document, data = await service.read_file(actor, document_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return Response(
        content=data,
        media_type=document.mime_type or DEFAULT_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{document.file_name}"'},
    )


@router.post(
    "/{document_id}/upload",
    response_model=DocumentResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Document already has a file"},
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
    },
)
async def upload_for_pending_document(
    document_id: UUID,
    body: PendingUploadRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Attach stored bytes to a checklist slot that has no file yet."""
    try:
        document = await service.upload_for_pending(
            actor,
            document_id,
            body.token,
            body.file_name,
            mime_type=body.mime_type,
            issue_date=body.issue_date,
            expiry_date=body.expiry_date,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


@router.post(
    "/{document_id}/assign-type",
    response_model=DocumentResponse,
    responses={409: {"model": ErrorResponse, "description": "Already typed"}},
)
async def assign_document_type(
    document_id: UUID,
    body: AssignTypeRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    try:
        document = await service.assign_type(actor, document_id, body.document_type_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


# Review


@router.post(
    "/{document_id}/approve",
    response_model=DocumentResponse,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def approve_document(
    document_id: UUID,
    body: ApproveRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    try:
        document = await service.approve(actor, document_id, notes=body.notes)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


@router.post(
    "/{document_id}/reject",
    response_model=DocumentResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def reject_document(
    document_id: UUID,
    body: RejectRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    try:
        document = await service.reject(actor, document_id, body.reason)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


@router.delete(
    "/{document_id}",
    response_model=DocumentResponse,
    responses={
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Approved documents are kept"},
    },
)
async def delete_document(
    document_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Soft delete: the document stops being the latest version."""
    try:
        document = await service.remove(actor, document_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentResponse.model_validate(document)


@router.get("/{document_id}/versions", response_model=list[DocumentResponse])
async def get_version_history(
    document_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    """Every version of the document, highest version first."""
    try:
        versions = await service.get_version_history(actor, document_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [DocumentResponse.model_validate(d) for d in versions]


@router.get("/{document_id}/validity", response_model=ValidityResponse)
async def check_document_validity(
    document_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentService = Depends(get_document_service),
) -> ValidityResponse:
    try:
        result = await service.check_validity(actor, document_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return ValidityResponse.model_validate(result)
