"""Activity log and notification models."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from casework.api.models.common import DateTimeWithZ
from casework.domain.models.notification import NotificationType


class ActivityLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    action: str
    entity_type: str
    entity_id: str
    details: dict[str, Any]
    ip_address: str | None
    user_agent: str | None
    created_at: DateTimeWithZ


class ActivityLogPageResponse(BaseModel):
    """One page of activity log entries, newest first."""

    items: list[ActivityLogResponse]
    total: int
    limit: int
    offset: int


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    entity_type: str | None
    entity_id: str | None
    is_read: bool
    read_at: DateTimeWithZ | None
    created_at: DateTimeWithZ
