"""Integration tests for the PostgreSQL activity log and notification repositories.

Requires Docker (testcontainers PostgreSQL 16).
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from casework.application.ports.activity_log_repository import ActivityLogFilter
from casework.domain.models.activity_log import ActivityLog
from casework.domain.models.notification import Notification, NotificationType
from casework.infrastructure.adapters.persistence import (
    PostgresActivityLogRepository,
    PostgresNotificationRepository,
)

pytestmark = pytest.mark.integration

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _entry(**overrides: object) -> ActivityLog:
    values: dict = {
        "id": uuid4(),
        "user_id": uuid4(),
        "action": "status_added",
        "entity_type": "individual_process",
        "entity_id": "proc-1",
        "details": {"newStatus": "submitted"},
        "created_at": NOW,
    }
    values.update(overrides)
    return ActivityLog(**values)


def _notification(user_id, **overrides: object) -> Notification:  # type: ignore[no-untyped-def]
    values: dict = {
        "id": uuid4(),
        "user_id": user_id,
        "type": NotificationType.DOCUMENT_APPROVED,
        "title": "Document approved",
        "message": 'Your document "Passaporte" has been approved',
        "entity_type": "document",
        "entity_id": "doc-1",
        "created_at": NOW,
    }
    values.update(overrides)
    return Notification(**values)


class TestPostgresActivityLogRepository:
    """Tests for PostgresActivityLogRepository."""

    async def test_save_and_query_round_trip(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Details survive the JSONB column."""
        repository = PostgresActivityLogRepository(session_factory)
        entry = _entry(details={"newStatus": "submitted", "failed": 0})

        await repository.save(entry)
        entries, total = await repository.query(ActivityLogFilter())

        assert total == 1
        assert entries[0] == entry

    async def test_newest_first_with_paging(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        repository = PostgresActivityLogRepository(session_factory)
        for minutes in range(5):
            await repository.save(_entry(created_at=NOW + timedelta(minutes=minutes)))

        entries, total = await repository.query(ActivityLogFilter(), limit=2, offset=1)

        assert total == 5
        assert [e.created_at for e in entries] == [
            NOW + timedelta(minutes=3),
            NOW + timedelta(minutes=2),
        ]

    async def test_filters_combine(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        repository = PostgresActivityLogRepository(session_factory)
        user_id = uuid4()
        await repository.save(_entry(user_id=user_id))
        await repository.save(_entry(user_id=user_id, action="approved"))
        await repository.save(_entry(action="approved"))
        await repository.save(
            _entry(user_id=user_id, action="approved", created_at=NOW - timedelta(days=2))
        )

        entries, total = await repository.query(
            ActivityLogFilter(
                user_id=user_id,
                action="approved",
                start=NOW - timedelta(days=1),
            )
        )

        assert total == 1
        assert entries[0].user_id == user_id
        assert entries[0].action == "approved"


class TestPostgresNotificationRepository:
    """Tests for PostgresNotificationRepository."""

    async def test_save_and_get(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        repository = PostgresNotificationRepository(session_factory)
        notification = _notification(uuid4())

        await repository.save(notification)

        assert await repository.get(notification.id) == notification
        assert await repository.get(uuid4()) is None

    async def test_save_existing_updates_read_state(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        repository = PostgresNotificationRepository(session_factory)
        notification = _notification(uuid4())
        await repository.save(notification)

        await repository.save(notification.marked_read())

        stored = await repository.get(notification.id)
        assert stored is not None
        assert stored.is_read is True
        assert stored.read_at is not None

    async def test_unread_listing_and_count(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        repository = PostgresNotificationRepository(session_factory)
        user_id = uuid4()
        read = _notification(user_id).marked_read()
        unread = _notification(user_id, created_at=NOW + timedelta(minutes=1))
        await repository.save(read)
        await repository.save(unread)
        await repository.save(_notification(uuid4()))

        assert [n.id for n in await repository.list_for_user(user_id)] == [
            unread.id,
            read.id,
        ]
        assert [n.id for n in await repository.list_for_user(user_id, unread_only=True)] == [
            unread.id
        ]
        assert await repository.count_unread(user_id) == 1

    async def test_mark_all_read_and_delete(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        repository = PostgresNotificationRepository(session_factory)
        user_id = uuid4()
        first = _notification(user_id)
        await repository.save(first)
        await repository.save(_notification(user_id))

        assert await repository.mark_all_read(user_id) == 2
        assert await repository.count_unread(user_id) == 0

        await repository.delete(first.id)
        assert await repository.get(first.id) is None
        assert len(await repository.list_for_user(user_id)) == 1
