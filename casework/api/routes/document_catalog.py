"""Document type and checklist template routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_document_catalog_service
from casework.api.errors import problem_from_error
from casework.api.models.common import ErrorResponse
from casework.api.models.document import (
    DocumentTypeCreateRequest,
    DocumentTypeResponse,
    DocumentTypeUpdateRequest,
    RequirementCreateRequest,
    RequirementResponse,
    TemplateActiveRequest,
    TemplateCloneRequest,
    TemplateCreateRequest,
    TemplateResponse,
)
from casework.application.services.document_catalog_service import (
    DocumentCatalogService,
)
from casework.domain.exceptions import CaseworkError

types_router = APIRouter(prefix="/v1/document-types", tags=["document-catalog"])
templates_router = APIRouter(prefix="/v1/document-templates", tags=["document-catalog"])


@types_router.get("", response_model=list[DocumentTypeResponse])
async def list_document_types(
    actor: CurrentActor,
    include_inactive: bool = Query(default=False),
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> list[DocumentTypeResponse]:
    types = await service.list_types(include_inactive=include_inactive)
    return [DocumentTypeResponse.model_validate(t) for t in types]


@types_router.get(
    "/{type_id}",
    response_model=DocumentTypeResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_document_type(
    type_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> DocumentTypeResponse:
    try:
        document_type = await service.get_type(type_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentTypeResponse.model_validate(document_type)


@types_router.post(
    "",
    response_model=DocumentTypeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_document_type(
    body: DocumentTypeCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> DocumentTypeResponse:
    try:
        document_type = await service.create_type(actor, **body.model_dump())
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentTypeResponse.model_validate(document_type)


@types_router.patch(
    "/{type_id}",
    response_model=DocumentTypeResponse,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_document_type(
    type_id: UUID,
    body: DocumentTypeUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> DocumentTypeResponse:
    try:
        document_type = await service.update_type(
            actor, type_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentTypeResponse.model_validate(document_type)


@types_router.delete(
    "/{type_id}",
    response_model=DocumentTypeResponse,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_document_type(
    type_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> DocumentTypeResponse:
    """Deactivate a document type."""
    try:
        document_type = await service.remove_type(actor, type_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return DocumentTypeResponse.model_validate(document_type)


# Templates


@templates_router.get("", response_model=list[TemplateResponse])
async def list_templates(
    actor: CurrentActor,
    process_type_id: str | None = Query(default=None),
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> list[TemplateResponse]:
    templates = await service.list_templates(process_type_id=process_type_id)
    return [TemplateResponse.model_validate(t) for t in templates]


@templates_router.get(
    "/{template_id}",
    response_model=TemplateResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_template(
    template_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> TemplateResponse:
    try:
        template = await service.get_template(template_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return TemplateResponse.model_validate(template)


@templates_router.post(
    "",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}},
)
async def create_template(
    body: TemplateCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> TemplateResponse:
    try:
        template = await service.create_template(actor, **body.model_dump())
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return TemplateResponse.model_validate(template)


@templates_router.post("/{template_id}/active", response_model=TemplateResponse)
async def set_template_active(
    template_id: UUID,
    body: TemplateActiveRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> TemplateResponse:
    try:
        template = await service.set_template_active(actor, template_id, body.is_active)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return TemplateResponse.model_validate(template)


@templates_router.post(
    "/{template_id}/clone",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def clone_template(
    template_id: UUID,
    body: TemplateCloneRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> TemplateResponse:
    """Copy a template and its requirements as the next template version."""
    try:
        template = await service.clone_template(actor, template_id, name=body.name)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return TemplateResponse.model_validate(template)


@templates_router.get(
    "/{template_id}/requirements", response_model=list[RequirementResponse]
)
async def list_requirements(
    template_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> list[RequirementResponse]:
    try:
        requirements = await service.list_requirements(template_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [RequirementResponse.model_validate(r) for r in requirements]


@templates_router.post(
    "/{template_id}/requirements",
    response_model=RequirementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def add_requirement(
    template_id: UUID,
    body: RequirementCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> RequirementResponse:
    try:
        requirement = await service.add_requirement(
            actor, template_id, **body.model_dump()
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return RequirementResponse.model_validate(requirement)


@templates_router.delete(
    "/requirements/{requirement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_requirement(
    requirement_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: DocumentCatalogService = Depends(get_document_catalog_service),
) -> Response:
    try:
        await service.remove_requirement(actor, requirement_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
