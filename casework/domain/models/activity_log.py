"""Activity log entry model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ActivityLog:
    """An audit trail entry for a write operation.

    Attributes:
        id: Unique identifier.
        user_id: Actor that performed the action.
        action: Snake-case verb (e.g. "status_added", "approved").
        entity_type: Kind of entity acted on (e.g. "individual_process").
        entity_id: The entity acted on.
        details: Action-specific payload (old/new values, counts, ...).
        ip_address: Client address, when known.
        user_agent: Client user agent, when known.
        created_at: When the action happened.
    """

    id: UUID
    user_id: UUID
    action: str
    entity_type: str
    entity_id: str
    details: dict[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = field(default_factory=_utc_now)
