"""In-app notification model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NotificationType(str, Enum):
    """Kinds of notification raised by the system."""

    DOCUMENT_APPROVED = "document_approved"
    DOCUMENT_REJECTED = "document_rejected"
    STATUS_CHANGED = "status_changed"
    PROCESS_CREATED = "process_created"
    GENERAL = "general"


@dataclass(frozen=True, eq=True)
class Notification:
    """A message addressed to one user.

    Attributes:
        id: Unique identifier.
        user_id: Recipient.
        type: Notification kind.
        title: Short headline.
        message: Body text.
        entity_type: Kind of entity the notification is about.
        entity_id: The entity it is about.
        is_read: Whether the recipient has read it.
        read_at: When it was marked read.
    """

    id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    entity_type: str | None = None
    entity_id: str | None = None
    is_read: bool = False
    read_at: datetime | None = None
    created_at: datetime = field(default_factory=_utc_now)

    def marked_read(self) -> Notification:
        """Return a read copy (read_at kept if already read)."""
        if self.is_read:
            return self
        return replace(self, is_read=True, read_at=_utc_now())
