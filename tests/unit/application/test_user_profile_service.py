"""Unit tests for UserProfileService."""

from uuid import uuid4

import pytest

from casework.application.services import UserProfileService
from casework.domain.errors.access import AccessDeniedError, AdminRequiredError
from casework.domain.errors.entity import DuplicateEntityError, EntityNotFoundError
from casework.domain.errors.validation import ValidationError
from casework.domain.models.user_profile import UserProfile, UserRole
from casework.infrastructure.stubs import (
    ActivityLogRepositoryStub,
    UserProfileRepositoryStub,
)

COMPANY_ID = "company-acme"
OTHER_COMPANY_ID = "company-globex"


class TestCreate:
    """Tests for creating profiles."""

    @pytest.mark.asyncio
    async def test_client_created(
        self,
        user_service: UserProfileService,
        profiles: UserProfileRepositoryStub,
        activity_logs: ActivityLogRepositoryStub,
        admin: UserProfile,
    ) -> None:
        """E-mails are lower-cased and the creation is logged."""
        created = await user_service.create(
            admin, " Bia@Acme.TEST ", " Bia Santos ", UserRole.CLIENT, COMPANY_ID
        )

        assert created.email == "bia@acme.test"
        assert created.full_name == "Bia Santos"
        assert await profiles.get(created.id) == created
        entry = activity_logs.entries[-1]
        assert (entry.action, entry.entity_type) == ("created", "user_profile")
        assert entry.details["role"] == "client"

    @pytest.mark.asyncio
    async def test_duplicate_email(
        self, user_service: UserProfileService, admin: UserProfile, client: UserProfile
    ) -> None:
        with pytest.raises(DuplicateEntityError, match="Email already exists"):
            await user_service.create(
                admin, "CLIENT@acme.test", "Someone", UserRole.CLIENT, COMPANY_ID
            )

    @pytest.mark.asyncio
    async def test_client_needs_company(
        self, user_service: UserProfileService, admin: UserProfile
    ) -> None:
        with pytest.raises(ValidationError, match="must have a company"):
            await user_service.create(admin, "x@acme.test", "X", UserRole.CLIENT)

    @pytest.mark.asyncio
    async def test_admin_without_company(
        self, user_service: UserProfileService, admin: UserProfile
    ) -> None:
        with pytest.raises(ValidationError, match="cannot be assigned"):
            await user_service.create(
                admin, "boss@casework.test", "Boss", UserRole.ADMIN, COMPANY_ID
            )

    @pytest.mark.asyncio
    async def test_unknown_company(
        self,
        user_service: UserProfileService,
        profiles: UserProfileRepositoryStub,
        admin: UserProfile,
    ) -> None:
        with pytest.raises(EntityNotFoundError, match="Company"):
            await user_service.create(
                admin, "x@ghost.test", "X", UserRole.CLIENT, "company-ghost"
            )

        assert await profiles.get_by_email("x@ghost.test") is None

    @pytest.mark.asyncio
    async def test_client_cannot_create(
        self, user_service: UserProfileService, client: UserProfile
    ) -> None:
        with pytest.raises(AdminRequiredError):
            await user_service.create(
                client, "friend@acme.test", "Friend", UserRole.CLIENT, COMPANY_ID
            )


class TestUpdate:
    """Tests for updating and deactivating profiles."""

    @pytest.mark.asyncio
    async def test_client_renames_self(
        self, user_service: UserProfileService, client: UserProfile
    ) -> None:
        updated = await user_service.update(client, client.id, full_name="Carlos C.")

        assert updated.full_name == "Carlos C."
        assert updated.role == UserRole.CLIENT

    @pytest.mark.asyncio
    async def test_client_cannot_promote_self(
        self, user_service: UserProfileService, client: UserProfile
    ) -> None:
        with pytest.raises(AccessDeniedError, match="Cannot change role"):
            await user_service.update(client, client.id, role=UserRole.ADMIN)

    @pytest.mark.asyncio
    async def test_client_cannot_edit_colleague(
        self,
        user_service: UserProfileService,
        profiles: UserProfileRepositoryStub,
        client: UserProfile,
    ) -> None:
        colleague = UserProfile(
            id=uuid4(),
            email="dora@acme.test",
            full_name="Dora",
            role=UserRole.CLIENT,
            company_id=COMPANY_ID,
        )
        await profiles.save(colleague)

        with pytest.raises(AccessDeniedError, match="own profile"):
            await user_service.update(client, colleague.id, full_name="D.")

    @pytest.mark.asyncio
    async def test_promotion_clears_company(
        self, user_service: UserProfileService, admin: UserProfile, client: UserProfile
    ) -> None:
        updated = await user_service.update(admin, client.id, role=UserRole.ADMIN)

        assert updated.is_admin
        assert updated.company_id is None

    @pytest.mark.asyncio
    async def test_move_to_unknown_company(
        self, user_service: UserProfileService, admin: UserProfile, client: UserProfile
    ) -> None:
        with pytest.raises(EntityNotFoundError, match="Company"):
            await user_service.update(admin, client.id, company_id="company-ghost")

    @pytest.mark.asyncio
    async def test_deactivate(
        self,
        user_service: UserProfileService,
        activity_logs: ActivityLogRepositoryStub,
        admin: UserProfile,
        client: UserProfile,
    ) -> None:
        deactivated = await user_service.deactivate(admin, client.id)

        assert deactivated.is_active is False
        entry = activity_logs.entries[-1]
        assert entry.action == "deactivated"
        assert entry.details["changes"] == {"is_active": {"before": True, "after": False}}

    @pytest.mark.asyncio
    async def test_cannot_deactivate_self(
        self, user_service: UserProfileService, admin: UserProfile
    ) -> None:
        with pytest.raises(ValidationError, match="own profile"):
            await user_service.deactivate(admin, admin.id)


class TestRead:
    """Tests for reading and listing profiles."""

    @pytest.mark.asyncio
    async def test_client_lists_own_company(
        self,
        user_service: UserProfileService,
        admin: UserProfile,
        client: UserProfile,
        outsider: UserProfile,
    ) -> None:
        listed = await user_service.list(client)

        assert [p.id for p in listed] == [client.id]

    @pytest.mark.asyncio
    async def test_admin_filters_by_role(
        self,
        user_service: UserProfileService,
        admin: UserProfile,
        client: UserProfile,
        outsider: UserProfile,
    ) -> None:
        clients = await user_service.list(admin, role=UserRole.CLIENT)

        assert [p.id for p in clients] == [client.id, outsider.id]
        assert [p.id for p in await user_service.list_admins()] == [admin.id]

    @pytest.mark.asyncio
    async def test_client_cannot_read_other_company(
        self,
        user_service: UserProfileService,
        client: UserProfile,
        outsider: UserProfile,
    ) -> None:
        with pytest.raises(AccessDeniedError):
            await user_service.get(client, outsider.id)


class TestSeedInitialAdmin:
    """Tests for seeding the first admin at startup."""

    @pytest.mark.asyncio
    async def test_seeds_once(
        self,
        user_service: UserProfileService,
        profiles: UserProfileRepositoryStub,
    ) -> None:
        first = await user_service.seed_initial_admin("Root@Casework.test", "Root")
        second = await user_service.seed_initial_admin("root@casework.test", "Other")

        assert first == second
        assert first.is_admin
        assert first.company_id is None
        assert await profiles.list() == [first]

    @pytest.mark.asyncio
    async def test_seeded_admin_can_create_users(
        self, user_service: UserProfileService
    ) -> None:
        root = await user_service.seed_initial_admin("root@casework.test", "Root")

        created = await user_service.create(
            root, "ops@casework.test", "Ops", UserRole.ADMIN
        )

        assert created.is_admin
