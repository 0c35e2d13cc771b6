"""PostgreSQL notification repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from casework.domain.models.notification import Notification, NotificationType

_COLUMNS = """
    id, user_id, type, title, message, entity_type, entity_id,
    is_read, read_at, created_at
"""


def _row_to_notification(row: Any) -> Notification:
    return Notification(
        id=row.id,
        user_id=row.user_id,
        type=NotificationType(row.type),
        title=row.title,
        message=row.message,
        entity_type=row.entity_type,
        entity_id=row.entity_id,
        is_read=row.is_read,
        read_at=row.read_at,
        created_at=row.created_at,
    )


class PostgresNotificationRepository:
    """Notifications stored in the notifications table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, notification: Notification) -> None:
        async with self._session_factory() as session:
            await session.execute(
                text(f"""
                    INSERT INTO notifications ({_COLUMNS})
                    VALUES (
                        :id, :user_id, :type, :title, :message, :entity_type,
                        :entity_id, :is_read, :read_at, :created_at
                    )
                    ON CONFLICT (id) DO UPDATE SET
                        is_read = EXCLUDED.is_read,
                        read_at = EXCLUDED.read_at
                """),
                {
                    "id": notification.id,
                    "user_id": notification.user_id,
                    "type": notification.type.value,
                    "title": notification.title,
                    "message": notification.message,
                    "entity_type": notification.entity_type,
                    "entity_id": notification.entity_id,
                    "is_read": notification.is_read,
                    "read_at": notification.read_at,
                    "created_at": notification.created_at,
                },
            )
            await session.commit()

    async def get(self, notification_id: UUID) -> Notification | None:
        async with self._session_factory() as session:
            result = await session.execute(
                text(f"SELECT {_COLUMNS} FROM notifications WHERE id = :id"),
                {"id": notification_id},
            )
            row = result.fetchone()
            return _row_to_notification(row) if row else None

    async def list_for_user(
        self, user_id: UUID, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        unread = "AND is_read = FALSE" if unread_only else ""
        async with self._session_factory() as session:
            result = await session.execute(
                text(f"""
                    SELECT {_COLUMNS}
                    FROM notifications
                    WHERE user_id = :user_id {unread}
                    ORDER BY created_at DESC
                    LIMIT :limit
                """),
                {"user_id": user_id, "limit": limit},
            )
            return [_row_to_notification(row) for row in result.fetchall()]

    async def count_unread(self, user_id: UUID) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                text("""
                    SELECT COUNT(*) FROM notifications
                    WHERE user_id = :user_id AND is_read = FALSE
                """),
                {"user_id": user_id},
            )
            return result.scalar() or 0

    async def mark_all_read(self, user_id: UUID) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                text("""
                    UPDATE notifications
                    SET is_read = TRUE, read_at = :read_at
                    WHERE user_id = :user_id AND is_read = FALSE
                """),
                {"user_id": user_id, "read_at": datetime.now(timezone.utc)},
            )
            await session.commit()
            return result.rowcount or 0

    async def delete(self, notification_id: UUID) -> None:
        async with self._session_factory() as session:
            await session.execute(
                text("DELETE FROM notifications WHERE id = :id"),
                {"id": notification_id},
            )
            await session.commit()
