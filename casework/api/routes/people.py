"""Person routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_person_service
from casework.api.errors import problem_from_error
from casework.api.models.common import ErrorResponse
from casework.api.models.person import PersonCreateRequest, PersonResponse
from casework.application.services.person_service import PersonService
from casework.domain.exceptions import CaseworkError

router = APIRouter(prefix="/v1/people", tags=["people"])


@router.get("", response_model=list[PersonResponse])
async def list_people(
    actor: CurrentActor,
    search: str | None = Query(default=None, description="Matches name, email or CPF"),
    service: PersonService = Depends(get_person_service),
) -> list[PersonResponse]:
    people = await service.list(actor, search=search)
    return [PersonResponse.model_validate(p) for p in people]


@router.post(
    "",
    response_model=PersonResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Email or CPF already exists"},
    },
)
async def create_person(
    body: PersonCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: PersonService = Depends(get_person_service),
) -> PersonResponse:
    fields = body.model_dump()
    try:
        person = await service.create(actor, fields.pop("full_name"), **fields)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return PersonResponse.model_validate(person)


@router.get(
    "/{person_id}",
    response_model=PersonResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_person(
    person_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: PersonService = Depends(get_person_service),
) -> PersonResponse:
    try:
        person = await service.get(actor, person_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return PersonResponse.model_validate(person)
