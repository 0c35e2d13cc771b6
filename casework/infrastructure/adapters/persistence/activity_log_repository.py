"""PostgreSQL activity log repository.

Usage:
    from casework.bootstrap.database import get_session_factory

    repository = PostgresActivityLogRepository(get_session_factory())
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from casework.application.ports.activity_log_repository import ActivityLogFilter
from casework.domain.models.activity_log import ActivityLog


def _where(filters: ActivityLogFilter) -> tuple[str, dict[str, Any]]:
    clauses = []
    params: dict[str, Any] = {}
    if filters.user_id is not None:
        clauses.append("user_id = :user_id")
        params["user_id"] = filters.user_id
    if filters.entity_type is not None:
        clauses.append("entity_type = :entity_type")
        params["entity_type"] = filters.entity_type
    if filters.entity_id is not None:
        clauses.append("entity_id = :entity_id")
        params["entity_id"] = filters.entity_id
    if filters.action is not None:
        clauses.append("action = :action")
        params["action"] = filters.action
    if filters.start is not None:
        clauses.append("created_at >= :start")
        params["start"] = filters.start
    if filters.end is not None:
        clauses.append("created_at <= :end")
        params["end"] = filters.end
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


def _row_to_entry(row: Any) -> ActivityLog:
    details = row.details
    if isinstance(details, str):
        details = json.loads(details)
    return ActivityLog(
        id=row.id,
        user_id=row.user_id,
        action=row.action,
        entity_type=row.entity_type,
        entity_id=row.entity_id,
        details=details or {},
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        created_at=row.created_at,
    )


class PostgresActivityLogRepository:
    """Append-only activity log stored in the activity_logs table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, entry: ActivityLog) -> None:
        async with self._session_factory() as session:
            await session.execute(
                text("""
                    INSERT INTO activity_logs (
                        id, user_id, action, entity_type, entity_id,
                        details, ip_address, user_agent, created_at
                    ) VALUES (
                        :id, :user_id, :action, :entity_type, :entity_id,
                        CAST(:details AS JSONB), :ip_address, :user_agent, :created_at
                    )
                """),
                {
                    "id": entry.id,
                    "user_id": entry.user_id,
                    "action": entry.action,
                    "entity_type": entry.entity_type,
                    "entity_id": entry.entity_id,
                    "details": json.dumps(entry.details, default=str),
                    "ip_address": entry.ip_address,
                    "user_agent": entry.user_agent,
                    "created_at": entry.created_at,
                },
            )
            await session.commit()

    async def query(
        self,
        filters: ActivityLogFilter,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[ActivityLog], int]:
        where, params = _where(filters)
        async with self._session_factory() as session:
            total = (
                await session.execute(
                    text(f"SELECT COUNT(*) FROM activity_logs {where}"), params
                )
            ).scalar() or 0
            result = await session.execute(
                text(f"""
                    SELECT id, user_id, action, entity_type, entity_id,
                           details, ip_address, user_agent, created_at
                    FROM activity_logs
                    {where}
                    ORDER BY created_at DESC
                    LIMIT :limit OFFSET :offset
                """),
                {**params, "limit": limit, "offset": offset},
            )
            return [_row_to_entry(row) for row in result.fetchall()], total
