"""User profile repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.user_profile import UserProfile, UserRole


class UserProfileRepositoryProtocol(Protocol):
    """Protocol for user profile storage."""

    async def get(self, user_id: UUID) -> UserProfile | None:
        """Retrieve a profile by id, or None."""
        ...

    async def get_by_email(self, email: str) -> UserProfile | None:
        """Retrieve a profile by its (lower-case) e-mail, or None."""
        ...

    async def save(self, profile: UserProfile) -> None:
        """Insert or replace a profile."""
        ...

    async def list(
        self, role: UserRole | None = None, is_active: bool | None = None
    ) -> list[UserProfile]:
        """Every profile matching the filters, ordered by name."""
        ...

    async def list_by_company(self, company_id: str) -> list[UserProfile]:
        """Profiles of clients belonging to a company."""
        ...
