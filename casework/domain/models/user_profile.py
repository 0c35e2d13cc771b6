"""User profile domain model.

A user profile is the actor behind every request. Admins operate the back
office; clients belong to a company and only see that company's processes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles a user profile can hold."""

    ADMIN = "admin"
    CLIENT = "client"


@dataclass(frozen=True, eq=True)
class UserProfile:
    """An authenticated user of the system.

    Attributes:
        id: Unique identifier of the profile.
        email: Login e-mail address.
        full_name: Display name.
        role: ADMIN or CLIENT.
        company_id: Company a client belongs to (None for most admins).
        is_active: Inactive profiles cannot authenticate.
    """

    id: UUID
    email: str
    full_name: str
    role: UserRole
    company_id: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.email:
            raise ValueError("email is required")

    @property
    def is_admin(self) -> bool:
        """True when the profile holds the admin role."""
        return self.role == UserRole.ADMIN
