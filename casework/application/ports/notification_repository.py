"""Notification repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.notification import Notification


class NotificationRepositoryProtocol(Protocol):
    """Protocol for notification storage."""

    async def save(self, notification: Notification) -> None:
        ...

    async def get(self, notification_id: UUID) -> Notification | None:
        ...

    async def list_for_user(
        self, user_id: UUID, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        """Notifications of a user, newest first."""
        ...

    async def count_unread(self, user_id: UUID) -> int:
        ...

    async def mark_all_read(self, user_id: UUID) -> int:
        """Mark every unread notification of a user read; returns the count."""
        ...

    async def delete(self, notification_id: UUID) -> None:
        ...
