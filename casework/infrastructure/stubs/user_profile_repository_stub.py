"""In-memory user profile repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.user_profile_repository import (
    UserProfileRepositoryProtocol,
)
from casework.domain.models.user_profile import UserProfile, UserRole


class UserProfileRepositoryStub(UserProfileRepositoryProtocol):
    """In-memory UserProfileRepositoryProtocol.

    Attributes:
        _profiles: Dictionary mapping profile id to UserProfile.
    """

    def __init__(self) -> None:
        self._profiles: dict[UUID, UserProfile] = {}

    async def get(self, user_id: UUID) -> UserProfile | None:
        return self._profiles.get(user_id)

    async def get_by_email(self, email: str) -> UserProfile | None:
        return next(
            (p for p in self._profiles.values() if p.email.lower() == email.lower()),
            None,
        )

    async def save(self, profile: UserProfile) -> None:
        self._profiles[profile.id] = profile

    async def list(
        self, role: UserRole | None = None, is_active: bool | None = None
    ) -> list[UserProfile]:
        profiles = [
            p
            for p in self._profiles.values()
            if (role is None or p.role == role)
            and (is_active is None or p.is_active == is_active)
        ]
        profiles.sort(key=lambda p: p.full_name.casefold())
        return profiles

    async def list_by_company(self, company_id: str) -> list[UserProfile]:
        profiles = [p for p in self._profiles.values() if p.company_id == company_id]
        profiles.sort(key=lambda p: p.full_name.casefold())
        return profiles

    def clear(self) -> None:
        """Clear all stored profiles (for testing)."""
        self._profiles.clear()
