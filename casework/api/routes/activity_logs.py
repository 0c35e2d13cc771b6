"""Activity log routes.

Admins see every entry; other users only see entries they caused.
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from casework.api.auth import CurrentActor
from casework.api.dependencies.casework import (
    get_activity_log_service,
    get_casework_config,
)
from casework.api.errors import problem_from_error
from casework.api.models.audit import ActivityLogPageResponse, ActivityLogResponse
from casework.application.services.activity_log_service import ActivityLogService
from casework.domain.exceptions import CaseworkError

router = APIRouter(prefix="/v1/activity-logs", tags=["activity-logs"])


@router.get("", response_model=ActivityLogPageResponse)
async def query_activity_logs(
    request: Request,
    actor: CurrentActor,
    user_id: UUID | None = Query(default=None),
    entity_type: str | None = Query(default=None),
    entity_id: str | None = Query(default=None),
    action: str | None = Query(default=None),
    start: datetime | None = Query(default=None),
    end: datetime | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    service: ActivityLogService = Depends(get_activity_log_service),
) -> ActivityLogPageResponse:
    """Filter the activity log; entries come newest first."""
    try:
        entries, total = await service.query(
            actor,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            start=start,
            end=end,
            limit=limit,
            offset=offset,
        )
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return ActivityLogPageResponse(
        items=[ActivityLogResponse.model_validate(entry) for entry in entries],
        total=total,
        limit=limit or get_casework_config().activity_log_limit,
        offset=offset,
    )


@router.get("/{entity_type}/{entity_id}", response_model=list[ActivityLogResponse])
async def get_entity_history(
    entity_type: str,
    entity_id: str,
    request: Request,
    actor: CurrentActor,
    service: ActivityLogService = Depends(get_activity_log_service),
) -> list[ActivityLogResponse]:
    """Every entry about one entity, newest first."""
    try:
        entries = await service.entity_history(actor, entity_type, entity_id)
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
    return [ActivityLogResponse.model_validate(entry) for entry in entries]
