"""In-memory notification repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from casework.domain.models.notification import Notification


class NotificationRepositoryStub(NotificationRepositoryProtocol):
    """In-memory NotificationRepositoryProtocol."""

    def __init__(self) -> None:
        self._notifications: dict[UUID, Notification] = {}

    async def save(self, notification: Notification) -> None:
        self._notifications[notification.id] = notification

    async def get(self, notification_id: UUID) -> Notification | None:
        return self._notifications.get(notification_id)

    async def list_for_user(
        self, user_id: UUID, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        matching = [
            n
            for n in self._notifications.values()
            if n.user_id == user_id and (not unread_only or not n.is_read)
        ]
        matching.sort(key=lambda n: n.created_at, reverse=True)
        return matching[:limit]

    async def count_unread(self, user_id: UUID) -> int:
        return sum(
            1
            for n in self._notifications.values()
            if n.user_id == user_id and not n.is_read
        )

    async def mark_all_read(self, user_id: UUID) -> int:
        updated = 0
        for notification in list(self._notifications.values()):
            if notification.user_id == user_id and not notification.is_read:
                self._notifications[notification.id] = notification.marked_read()
                updated += 1
        return updated

    async def delete(self, notification_id: UUID) -> None:
        if notification_id not in self._notifications:
            raise KeyError(f"Notification not found: {notification_id}")
        del self._notifications[notification_id]

    def clear(self) -> None:
        self._notifications.clear()
