"""User profile routes.

Admins create, change and deactivate profiles; clients list the profiles
of their company and edit their own name and e-mail.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_user_profile_service
from casework.api.errors import problem_from_error
from casework.api.models.common import ErrorResponse
from casework.api.models.person import (
    UserProfileCreateRequest,
    UserProfileResponse,
    UserProfileUpdateRequest,
)
from casework.application.services.user_profile_service import UserProfileService
from casework.domain.exceptions import CaseworkError
from casework.domain.models.user_profile import UserRole

router = APIRouter(prefix="/v1/users", tags=["users"])


@router.get("/me", response_model=UserProfileResponse)
async def get_me(actor: CurrentActor) -> UserProfileResponse:
    """The profile behind X-User-Id."""
    return UserProfileResponse.model_validate(actor)


@router.get("/admins", response_model=list[UserProfileResponse])
async def list_admin_users(
    actor: CurrentActor,
    service: UserProfileService = Depends(get_user_profile_service),
) -> list[UserProfileResponse]:
    """Active admins."""
    return [UserProfileResponse.model_validate(p) for p in await service.list_admins()]


@router.get(
    "",
    response_model=list[UserProfileResponse],
    responses={403: {"model": ErrorResponse}},
)
async def list_users(
    request: Request,
    actor: CurrentActor,
    role: UserRole | None = Query(default=None),
    is_active: bool | None = Query(default=None),
    service: UserProfileService = Depends(get_user_profile_service),
) -> list[UserProfileResponse]:
    try:
        profiles = await service.list(actor, role=role, is_active=is_active)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [UserProfileResponse.model_validate(p) for p in profiles]


@router.post(
    "",
    response_model=UserProfileResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Unknown company"},
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
)
async def create_user(
    body: UserProfileCreateRequest,
    request: Request,
    actor: CurrentActor,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileResponse:
    try:
        profile = await service.create(actor, **body.model_dump())
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return UserProfileResponse.model_validate(profile)


@router.get(
    "/{user_id}",
    response_model=UserProfileResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_user(
    user_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileResponse:
    try:
        profile = await service.get(actor, user_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return UserProfileResponse.model_validate(profile)


@router.patch(
    "/{user_id}",
    response_model=UserProfileResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_user(
    user_id: UUID,
    body: UserProfileUpdateRequest,
    request: Request,
    actor: CurrentActor,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileResponse:
    try:
        profile = await service.update(
            actor, user_id, **body.model_dump(exclude_unset=True)
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return UserProfileResponse.model_validate(profile)


@router.post(
    "/{user_id}/deactivate",
    response_model=UserProfileResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def deactivate_user(
    user_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileResponse:
    """Switch a profile off; it can no longer authenticate."""
    try:
        profile = await service.deactivate(actor, user_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return UserProfileResponse.model_validate(profile)
