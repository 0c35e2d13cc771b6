"""Notification routes for the calling user."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import get_notification_service
from casework.api.errors import problem_from_error
from casework.api.models.audit import NotificationResponse
from casework.api.models.common import CountResponse, ErrorResponse
from casework.application.services.notification_service import NotificationService
from casework.domain.exceptions import CaseworkError

router = APIRouter(prefix="/v1/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    actor: CurrentActor,
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=500),
    service: NotificationService = Depends(get_notification_service),
) -> list[NotificationResponse]:
    """The caller's notifications, newest first."""
    notifications = await service.list_for_user(
        actor, unread_only=unread_only, limit=limit
    )
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.get("/unread-count", response_model=CountResponse)
async def unread_count(
    actor: CurrentActor,
    service: NotificationService = Depends(get_notification_service),
) -> CountResponse:
    return CountResponse(count=await service.unread_count(actor))


@router.post("/read-all", response_model=CountResponse)
async def mark_all_as_read(
    actor: CurrentActor,
    service: NotificationService = Depends(get_notification_service),
) -> CountResponse:
    """Mark every unread notification read; returns how many changed."""
    return CountResponse(count=await service.mark_all_as_read(actor))


@router.post(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def mark_as_read(
    notification_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    try:
        notification = await service.mark_as_read(actor, notification_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return NotificationResponse.model_validate(notification)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_notification(
    notification_id: UUID,
    request: Request,
    actor: CurrentActor,
    service: NotificationService = Depends(get_notification_service),
) -> Response:
    try:
        await service.delete(actor, notification_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
