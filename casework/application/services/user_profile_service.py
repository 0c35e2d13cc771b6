"""User profile service.

Admins manage every profile; a client can read the profiles of their
company and change their own name and e-mail. Profiles are deactivated
rather than deleted so that audit entries keep pointing at a real actor.

Role and company go together: a client belongs to exactly one existing
company, an admin to none.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any
from uuid import UUID, uuid4

from casework.application.ports.user_profile_repository import (
    UserProfileRepositoryProtocol,
)
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.reference_data_service import ReferenceDataService
from casework.domain.errors.access import AccessDeniedError
from casework.domain.errors.entity import DuplicateEntityError, EntityNotFoundError
from casework.domain.errors.validation import ValidationError
from casework.domain.models.user_profile import UserProfile, UserRole

ENTITY_TYPE = "user_profile"

ADMIN_FIELDS = frozenset({"email", "full_name", "role", "company_id", "is_active"})
SELF_SERVICE_FIELDS = frozenset({"email", "full_name"})


def _normalize_email(email: str | None) -> str:
    if not email or not email.strip():
        raise ValidationError("Email is required", field="email")
    return email.strip().lower()


def _check_role_company(role: UserRole, company_id: str | None) -> None:
    if role == UserRole.CLIENT and not company_id:
        raise ValidationError("Client users must have a company", field="company_id")
    if role == UserRole.ADMIN and company_id:
        raise ValidationError(
            "Admin users cannot be assigned to a company", field="company_id"
        )


class UserProfileService(LoggingMixin):
    """Creates, updates, deactivates and lists user profiles.

    Attributes:
        _profiles: User profile repository.
        _access: Access control.
        _activity: Activity log.
        _reference: Company lookups.
    """

    def __init__(
        self,
        profiles: UserProfileRepositoryProtocol,
        access: AccessControlService,
        activity: ActivityLogService,
        reference: ReferenceDataService,
    ) -> None:
        self._profiles = profiles
        self._access = access
        self._activity = activity
        self._reference = reference
        self._init_logger(component="users")

    async def _get(self, user_id: UUID) -> UserProfile:
        profile = await self._profiles.get(user_id)
        if profile is None:
            raise EntityNotFoundError("User profile", user_id)
        return profile

    async def _require_unique_email(self, email: str, exclude_id: UUID | None) -> None:
        existing = await self._profiles.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEntityError(
                "User profile", "email", email, message="Email already exists"
            )

    async def get(self, actor: UserProfile, user_id: UUID) -> UserProfile:
        """A profile the actor may see: their own, or one of their company."""
        profile = await self._get(user_id)
        if profile.id != actor.id:
            self._access.require_company_access(actor, profile.company_id)
        return profile

    async def list(
        self,
        actor: UserProfile,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> list[UserProfile]:
        """Profiles visible to the actor; clients see their company's only."""
        if actor.is_admin:
            return await self._profiles.list(role=role, is_active=is_active)
        if actor.company_id is None:
            raise AccessDeniedError("Client user must have a company", user_id=str(actor.id))
        return [
            p
            for p in await self._profiles.list_by_company(actor.company_id)
            if (role is None or p.role == role)
            and (is_active is None or p.is_active == is_active)
        ]

    async def list_admins(self) -> list[UserProfile]:
        """Active admins, e.g. to pick a responsible person."""
        return await self._profiles.list(role=UserRole.ADMIN, is_active=True)

    async def create(
        self,
        actor: UserProfile,
        email: str,
        full_name: str,
        role: UserRole,
        company_id: str | None = None,
    ) -> UserProfile:
        """Create a profile (admin only).

        Raises:
            ValidationError: If email or name is blank, or the role and
                company do not fit together.
            DuplicateEntityError: If the email is taken.
            EntityNotFoundError: If the company does not exist.
        """
        self._access.require_admin(actor)
        email = _normalize_email(email)
        if not full_name or not full_name.strip():
            raise ValidationError("Full name is required", field="full_name")
        _check_role_company(role, company_id)
        await self._reference.require_company(company_id)
        await self._require_unique_email(email, None)

        profile = UserProfile(
            id=uuid4(),
            email=email,
            full_name=full_name.strip(),
            role=role,
            company_id=company_id,
        )
        await self._profiles.save(profile)
        self._log_operation("create", user_id=str(profile.id)).info(
            "user_profile_created", role=role.value
        )
        await self._activity.log_activity(
            actor.id,
            "created",
            ENTITY_TYPE,
            profile.id,
            {"email": email, "fullName": profile.full_name, "role": role.value},
        )
        return profile

    async def update(
        self, actor: UserProfile, user_id: UUID, **changes: Any
    ) -> UserProfile:
        """Change a profile; None values are ignored.

        Admins may change any field of any profile. Anyone else may only
        change the name and e-mail of their own profile. Turning is_active
        off is logged as a deactivation.

        Raises:
            AccessDeniedError: If a client edits another profile or a
                field outside their reach.
            ValidationError: If the resulting role and company do not fit.
            DuplicateEntityError: If the new email is taken.
        """
        target = await self._get(user_id)
        updates = {k: v for k, v in changes.items() if v is not None}
        unknown = sorted(set(updates) - ADMIN_FIELDS)
        if unknown:
            raise ValidationError(
                f"Unknown user profile fields: {', '.join(unknown)}", field=unknown[0]
            )
        if not actor.is_admin:
            if actor.id != target.id:
                raise AccessDeniedError(
                    "Access denied: Can only update own profile", user_id=str(actor.id)
                )
            if set(updates) - SELF_SERVICE_FIELDS:
                raise AccessDeniedError(
                    "Access denied: Cannot change role, company or status",
                    user_id=str(actor.id),
                )
        if "role" in updates:
            updates["role"] = UserRole(updates["role"])
            if updates["role"] == UserRole.ADMIN and "company_id" not in updates:
                updates["company_id"] = None
        if "email" in updates:
            updates["email"] = _normalize_email(updates["email"])
            await self._require_unique_email(updates["email"], target.id)
        if "full_name" in updates:
            if not updates["full_name"].strip():
                raise ValidationError("Full name is required", field="full_name")
            updates["full_name"] = updates["full_name"].strip()
        if updates.get("is_active") is False and target.id == actor.id:
            raise ValidationError("Cannot deactivate your own profile", field="is_active")

        updated = replace(target, **updates)
        _check_role_company(updated.role, updated.company_id)
        if updated.company_id != target.company_id:
            await self._reference.require_company(updated.company_id)
        await self._profiles.save(updated)

        changed = {
            name: {
                "before": getattr(target, name),
                "after": getattr(updated, name),
            }
            for name in sorted(updates)
            if getattr(target, name) != getattr(updated, name)
        }
        deactivated = target.is_active and not updated.is_active
        self._log_operation("update", user_id=str(user_id)).info(
            "user_profile_updated", fields=sorted(changed), deactivated=deactivated
        )
        await self._activity.log_activity(
            actor.id,
            "deactivated" if deactivated else "updated",
            ENTITY_TYPE,
            user_id,
            {"email": target.email, "fullName": target.full_name, "changes": changed},
        )
        return updated

    async def deactivate(self, actor: UserProfile, user_id: UUID) -> UserProfile:
        """Switch a profile off (admin only); it can no longer authenticate.

        Raises:
            ValidationError: If the admin targets their own profile.
        """
        self._access.require_admin(actor)
        return await self.update(actor, user_id, is_active=False)

    async def seed_initial_admin(self, email: str, full_name: str) -> UserProfile:
        """Make sure an admin profile exists for email.

        Runs without an actor, at startup. An existing profile with the
        same e-mail is returned unchanged.
        """
        email = _normalize_email(email)
        log = self._log_operation("seed_initial_admin")
        existing = await self._profiles.get_by_email(email)
        if existing is not None:
            if not existing.is_admin:
                log.warning("initial_admin_email_used_by_client", user_id=str(existing.id))
            else:
                log.debug("initial_admin_exists", user_id=str(existing.id))
            return existing

        profile = UserProfile(
            id=uuid4(),
            email=email,
            full_name=full_name.strip() or email,
            role=UserRole.ADMIN,
        )
        await self._profiles.save(profile)
        log.info("initial_admin_seeded", user_id=str(profile.id))
        await self._activity.log_activity(
            profile.id,
            "seeded",
            ENTITY_TYPE,
            profile.id,
            {"email": email, "fullName": profile.full_name, "role": UserRole.ADMIN.value},
        )
        return profile
