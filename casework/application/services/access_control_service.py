"""Access control for Casework operations.

Rules:
- Every operation needs an active user profile.
- Admins can do everything.
- Clients can only read and fill data of processes whose collective
  process belongs to their company.
"""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.collective_process_repository import (
    CollectiveProcessRepositoryProtocol,
)
from casework.application.ports.user_profile_repository import (
    UserProfileRepositoryProtocol,
)
from casework.application.services.base import LoggingMixin
from casework.domain.errors.access import (
    AccessDeniedError,
    AdminRequiredError,
    AuthenticationRequiredError,
)
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.user_profile import UserProfile


class AccessControlService(LoggingMixin):
    """Resolves actors and checks their permissions.

    Attributes:
        _profiles: User profile repository.
        _collectives: Collective process repository (company ownership).
    """

    def __init__(
        self,
        profiles: UserProfileRepositoryProtocol,
        collectives: CollectiveProcessRepositoryProtocol,
    ) -> None:
        self._profiles = profiles
        self._collectives = collectives
        self._init_logger(component="access")

    async def get_actor(self, user_id: UUID | None) -> UserProfile:
        """Resolve the active profile behind a request.

        Raises:
            AuthenticationRequiredError: If user_id is missing, unknown or inactive.
        """
        if user_id is None:
            raise AuthenticationRequiredError()
        profile = await self._profiles.get(user_id)
        if profile is None:
            self._log_operation("get_actor", user_id=str(user_id)).warning(
                "unknown_user_profile"
            )
            raise AuthenticationRequiredError()
        if not profile.is_active:
            raise AuthenticationRequiredError("User profile is not active")
        return profile

    def require_admin(self, actor: UserProfile) -> None:
        """Raise AdminRequiredError unless actor is an admin."""
        if not actor.is_admin:
            self._log_operation("require_admin", user_id=str(actor.id)).warning(
                "admin_required_denied"
            )
            raise AdminRequiredError(user_id=str(actor.id))

    @staticmethod
    def can_access_company(actor: UserProfile, company_id: str | None) -> bool:
        """Admins access every company; clients only their own."""
        if actor.is_admin:
            return True
        return actor.company_id is not None and actor.company_id == company_id

    def require_company_access(self, actor: UserProfile, company_id: str | None) -> None:
        if not self.can_access_company(actor, company_id):
            raise AccessDeniedError(
                "Access denied: You do not have permission to access this company's data",
                user_id=str(actor.id),
            )

    async def require_process_access(
        self, actor: UserProfile, process: IndividualProcess
    ) -> None:
        """Check a client may see an individual process.

        Raises:
            AccessDeniedError: If the client has no company, the process has
                no collective process, or it belongs to another company.
        """
        if actor.is_admin:
            return
        if not actor.company_id:
            raise AccessDeniedError(
                "Client user must have a company assignment", user_id=str(actor.id)
            )
        if process.collective_process_id is None:
            raise AccessDeniedError(
                "Individual process has no main process", user_id=str(actor.id)
            )
        collective = await self._collectives.get(process.collective_process_id)
        if collective is None or collective.company_id != actor.company_id:
            raise AccessDeniedError(
                "Access denied: Process does not belong to your company",
                user_id=str(actor.id),
            )

    async def accessible_collective_ids(self, actor: UserProfile) -> set[UUID] | None:
        """Collective processes a client may see (None means unrestricted)."""
        if actor.is_admin:
            return None
        if not actor.company_id:
            return set()
        return {c.id for c in await self._collectives.list(company_id=actor.company_id)}
