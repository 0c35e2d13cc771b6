"""In-app notification service."""

from __future__ import annotations

from uuid import UUID, uuid4

from casework.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from casework.application.services.base import LoggingMixin
from casework.domain.errors.access import AccessDeniedError
from casework.domain.errors.entity import EntityNotFoundError
from casework.domain.models.notification import Notification, NotificationType
from casework.domain.models.user_profile import UserProfile


class NotificationService(LoggingMixin):
    """Creates notifications and lets users manage their own."""

    def __init__(self, repository: NotificationRepositoryProtocol) -> None:
        self._repository = repository
        self._init_logger(component="notifications")

    async def create(
        self,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        entity_type: str | None = None,
        entity_id: object | None = None,
    ) -> Notification:
        notification = Notification(
            id=uuid4(),
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
        )
        await self._repository.save(notification)
        self._log_operation(
            "create", user_id=str(user_id), type=notification_type.value
        ).info("notification_created", notification_id=str(notification.id))
        return notification

    async def list_for_user(
        self, actor: UserProfile, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        return await self._repository.list_for_user(
            actor.id, unread_only=unread_only, limit=limit
        )

    async def unread_count(self, actor: UserProfile) -> int:
        return await self._repository.count_unread(actor.id)

    async def _get_owned(
        self, actor: UserProfile, notification_id: UUID, denial: str
    ) -> Notification:
        notification = await self._repository.get(notification_id)
        if notification is None:
            raise EntityNotFoundError("Notification", notification_id)
        if notification.user_id != actor.id:
            raise AccessDeniedError(denial, user_id=str(actor.id))
        return notification

    async def mark_as_read(self, actor: UserProfile, notification_id: UUID) -> Notification:
        """Mark one of the actor's notifications read.

        Raises:
            EntityNotFoundError: If the notification does not exist.
            AccessDeniedError: If it belongs to someone else.
        """
        notification = await self._get_owned(
            actor,
            notification_id,
            "Access denied: You can only mark your own notifications as read",
        )
        updated = notification.marked_read()
        await self._repository.save(updated)
        return updated

    async def mark_all_as_read(self, actor: UserProfile) -> int:
        count = await self._repository.mark_all_read(actor.id)
        self._log_operation("mark_all_as_read", user_id=str(actor.id)).info(
            "notifications_marked_read", count=count
        )
        return count

    async def delete(self, actor: UserProfile, notification_id: UUID) -> None:
        await self._get_owned(
            actor,
            notification_id,
            "Access denied: You can only delete your own notifications",
        )
        await self._repository.delete(notification_id)
