"""Unit tests for AccessControlService and ActivityLogService."""

from uuid import uuid4

import pytest

from casework.application.ports.activity_log_repository import ActivityLogFilter
from casework.application.services import AccessControlService, ActivityLogService
from casework.application.services import activity_log_service
from casework.domain.errors.access import (
    AccessDeniedError,
    AdminRequiredError,
    AuthenticationRequiredError,
)
from casework.domain.models.activity_log import ActivityLog
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.user_profile import UserProfile, UserRole
from casework.infrastructure.stubs import UserProfileRepositoryStub


class FailingActivityRepository:
    """Activity repository whose writes always fail."""

    async def save(self, entry: ActivityLog) -> None:
        raise ConnectionError("database unavailable")

    async def query(
        self, filters: ActivityLogFilter, limit: int = 100, offset: int = 0
    ) -> tuple[list[ActivityLog], int]:
        return [], 0


class TestGetActor:
    """Tests for resolving the request actor."""

    @pytest.mark.asyncio
    async def test_known_profile(
        self, access: AccessControlService, client: UserProfile
    ) -> None:
        assert await access.get_actor(client.id) == client

    @pytest.mark.asyncio
    async def test_missing_or_unknown(self, access: AccessControlService) -> None:
        """No header and unknown ids both need authentication."""
        with pytest.raises(AuthenticationRequiredError):
            await access.get_actor(None)
        with pytest.raises(AuthenticationRequiredError):
            await access.get_actor(uuid4())

    @pytest.mark.asyncio
    async def test_inactive_profile(
        self, access: AccessControlService, profiles: UserProfileRepositoryStub
    ) -> None:
        profile = UserProfile(
            id=uuid4(),
            email="gone@acme.test",
            full_name="Former Employee",
            role=UserRole.CLIENT,
            is_active=False,
        )
        await profiles.save(profile)

        with pytest.raises(AuthenticationRequiredError, match="not active"):
            await access.get_actor(profile.id)


class TestPermissions:
    """Tests for admin and company checks."""

    def test_require_admin(
        self, access: AccessControlService, admin: UserProfile, client: UserProfile
    ) -> None:
        access.require_admin(admin)

        with pytest.raises(AdminRequiredError):
            access.require_admin(client)

    def test_can_access_company(
        self, admin: UserProfile, client: UserProfile
    ) -> None:
        """Clients without a company access nothing."""
        orphan = UserProfile(
            id=uuid4(), email="x@y.test", full_name="No Company", role=UserRole.CLIENT
        )

        assert AccessControlService.can_access_company(admin, "anything") is True
        assert AccessControlService.can_access_company(client, client.company_id) is True
        assert AccessControlService.can_access_company(client, "company-globex") is False
        assert AccessControlService.can_access_company(orphan, None) is False

    @pytest.mark.asyncio
    async def test_process_access(
        self,
        access: AccessControlService,
        admin: UserProfile,
        client: UserProfile,
        outsider: UserProfile,
        collective: CollectiveProcess,
    ) -> None:
        """Client access goes through the collective process's company."""
        member = IndividualProcess(
            id=uuid4(), person_id=uuid4(), collective_process_id=collective.id
        )
        standalone = IndividualProcess(id=uuid4(), person_id=uuid4())

        await access.require_process_access(admin, standalone)
        await access.require_process_access(client, member)
        with pytest.raises(AccessDeniedError, match="does not belong to your company"):
            await access.require_process_access(outsider, member)
        with pytest.raises(AccessDeniedError, match="no main process"):
            await access.require_process_access(client, standalone)

    @pytest.mark.asyncio
    async def test_accessible_collective_ids(
        self,
        access: AccessControlService,
        admin: UserProfile,
        client: UserProfile,
        outsider: UserProfile,
        collective: CollectiveProcess,
    ) -> None:
        assert await access.accessible_collective_ids(admin) is None
        assert await access.accessible_collective_ids(client) == {collective.id}
        assert await access.accessible_collective_ids(outsider) == set()


class TestActivityLog:
    """Tests for recording and querying the audit trail."""

    @pytest.mark.asyncio
    async def test_clients_only_see_their_entries(
        self, activity: ActivityLogService, admin: UserProfile, client: UserProfile
    ) -> None:
        """A client's user filter is always replaced by their own id."""
        await activity.log_activity(admin.id, "created", "person", uuid4())
        await activity.log_activity(client.id, "uploaded", "document", uuid4())

        client_entries, client_total = await activity.query(client, user_id=admin.id)
        all_entries, all_total = await activity.query(admin)

        assert client_total == 1
        assert client_entries[0].action == "uploaded"
        assert all_total == 2
        assert len(all_entries) == 2

    @pytest.mark.asyncio
    async def test_filters_and_paging(
        self, activity: ActivityLogService, admin: UserProfile
    ) -> None:
        entity_id = uuid4()
        await activity.log_activity(admin.id, "created", "person", entity_id)
        await activity.log_activity(admin.id, "updated", "person", entity_id)
        await activity.log_activity(admin.id, "updated", "person", uuid4())

        updates, total = await activity.query(admin, action="updated", limit=1)
        history = await activity.entity_history(admin, "person", str(entity_id))

        assert total == 2
        assert len(updates) == 1
        assert {e.action for e in history} == {"created", "updated"}

    @pytest.mark.asyncio
    async def test_entity_history_reads_every_page(
        self,
        activity: ActivityLogService,
        admin: UserProfile,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """History is not cut off at one page of results."""
        monkeypatch.setattr(activity_log_service, "HISTORY_PAGE_SIZE", 2)
        entity_id = uuid4()
        for _ in range(5):
            await activity.log_activity(admin.id, "updated", "person", entity_id)
        await activity.log_activity(admin.id, "updated", "person", uuid4())

        history = await activity.entity_history(admin, "person", str(entity_id))

        assert len(history) == 5
        assert len({e.id for e in history}) == 5

    @pytest.mark.asyncio
    async def test_storage_failure_does_not_raise(self, admin: UserProfile) -> None:
        """Audit writes never fail the operation that caused them."""
        service = ActivityLogService(FailingActivityRepository())

        entry = await service.log_activity(admin.id, "created", "person", uuid4())

        assert entry is None
