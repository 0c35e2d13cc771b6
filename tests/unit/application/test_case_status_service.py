"""Unit tests for CaseStatusService (case status catalogue)."""

from uuid import uuid4

import pytest

from casework.application.services import CaseStatusService
from casework.domain.errors.access import AdminRequiredError
from casework.domain.errors.entity import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from casework.domain.errors.validation import (
    InvalidFillableFieldsError,
    ValidationError,
)
from casework.domain.models.case_status import CaseStatus
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.user_profile import UserProfile
from casework.infrastructure.stubs import (
    ActivityLogRepositoryStub,
    IndividualProcessRepositoryStub,
)


@pytest.fixture
async def in_use(
    processes: IndividualProcessRepositoryStub, submitted_status: CaseStatus
) -> CaseStatus:
    """A status some process currently has."""
    await processes.save(
        IndividualProcess(
            id=uuid4(),
            person_id=uuid4(),
            case_status_id=submitted_status.id,
            status_code=submitted_status.code,
        )
    )
    return submitted_status


class TestCreate:
    """Tests for creating case statuses."""

    @pytest.mark.asyncio
    async def test_create(
        self,
        case_status_service: CaseStatusService,
        activity_logs: ActivityLogRepositoryStub,
        admin: UserProfile,
    ) -> None:
        """New statuses are active and audited."""
        status = await case_status_service.create(
            admin,
            "Deferido",
            "deferido",
            name_en="Approved",
            category="government",
            fillable_fields=["dou_number", "dou_date"],
        )

        assert status.is_active is True
        assert status.fillable_fields == ("dou_number", "dou_date")
        assert await case_status_service.get_by_code("deferido") == status
        assert activity_logs.entries[-1].action == "created"

    @pytest.mark.asyncio
    async def test_duplicate_code(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        submitted_status: CaseStatus,
    ) -> None:
        """Codes are unique."""
        with pytest.raises(DuplicateEntityError) as exc_info:
            await case_status_service.create(admin, "Outro", "protocolado")

        assert str(exc_info.value) == 'Case status with code "protocolado" already exists'

    @pytest.mark.asyncio
    async def test_unknown_fillable_field(
        self, case_status_service: CaseStatusService, admin: UserProfile
    ) -> None:
        """Fillable fields must be process fields."""
        with pytest.raises(InvalidFillableFieldsError):
            await case_status_service.create(
                admin, "Deferido", "deferido", fillable_fields=["salary"]
            )

    @pytest.mark.asyncio
    async def test_admin_only(
        self, case_status_service: CaseStatusService, client: UserProfile
    ) -> None:
        """Clients cannot edit the catalogue."""
        with pytest.raises(AdminRequiredError):
            await case_status_service.create(client, "Deferido", "deferido")


class TestUpdate:
    """Tests for updating case statuses."""

    @pytest.mark.asyncio
    async def test_none_values_ignored(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        submitted_status: CaseStatus,
    ) -> None:
        """Only given values change."""
        updated = await case_status_service.update(
            admin, submitted_status.id, color="#000", name=None
        )

        assert updated.color == "#000"
        assert updated.name == "Protocolado"

    @pytest.mark.asyncio
    async def test_code_of_status_in_use_is_fixed(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        in_use: CaseStatus,
    ) -> None:
        """Processes refer to the code, so it cannot change while in use."""
        with pytest.raises(EntityInUseError, match="Cannot change code"):
            await case_status_service.update(admin, in_use.id, code="filed")

    @pytest.mark.asyncio
    async def test_code_taken(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        submitted_status: CaseStatus,
        preparing_status: CaseStatus,
    ) -> None:
        """A new code must be free."""
        with pytest.raises(DuplicateEntityError):
            await case_status_service.update(
                admin, submitted_status.id, code=preparing_status.code
            )

    @pytest.mark.asyncio
    async def test_unknown_attribute(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        submitted_status: CaseStatus,
    ) -> None:
        """Only catalogue attributes can be changed, reported as a validation error."""
        with pytest.raises(ValidationError, match="is_active"):
            await case_status_service.update(admin, submitted_status.id, is_active=False)


class TestLifecycle:
    """Tests for remove, toggle_active, reorder and listings."""

    @pytest.mark.asyncio
    async def test_remove_is_soft(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        preparing_status: CaseStatus,
    ) -> None:
        """Removed statuses stay in the catalogue as inactive."""
        removed = await case_status_service.remove(admin, preparing_status.id)

        assert removed.is_active is False
        assert await case_status_service.list() == []
        assert await case_status_service.list(include_inactive=True) == [removed]

    @pytest.mark.asyncio
    async def test_remove_in_use(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        in_use: CaseStatus,
    ) -> None:
        """Statuses in use cannot be removed."""
        with pytest.raises(EntityInUseError, match="in use"):
            await case_status_service.remove(admin, in_use.id)

    @pytest.mark.asyncio
    async def test_toggle_active(
        self,
        case_status_service: CaseStatusService,
        activity_logs: ActivityLogRepositoryStub,
        admin: UserProfile,
        preparing_status: CaseStatus,
    ) -> None:
        """Statuses can be switched off and on again."""
        off = await case_status_service.toggle_active(admin, preparing_status.id, False)
        on = await case_status_service.toggle_active(admin, preparing_status.id, True)

        assert off.is_active is False
        assert on.is_active is True
        assert [e.action for e in activity_logs.entries] == ["deactivated", "activated"]

    @pytest.mark.asyncio
    async def test_cannot_deactivate_status_in_use(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        in_use: CaseStatus,
    ) -> None:
        """Deactivation is refused while processes use the status."""
        with pytest.raises(EntityInUseError):
            await case_status_service.toggle_active(admin, in_use.id, False)

    @pytest.mark.asyncio
    async def test_reorder(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        preparing_status: CaseStatus,
        submitted_status: CaseStatus,
    ) -> None:
        """Listings follow the new sort order."""
        count = await case_status_service.reorder(
            admin, [(preparing_status.id, 5), (submitted_status.id, 1)]
        )

        assert count == 2
        assert [s.code for s in await case_status_service.list_active()] == [
            "protocolado",
            "em_preparacao",
        ]

    @pytest.mark.asyncio
    async def test_reorder_checks_every_id_first(
        self,
        case_status_service: CaseStatusService,
        admin: UserProfile,
        preparing_status: CaseStatus,
    ) -> None:
        """Nothing is written when one id is unknown."""
        with pytest.raises(EntityNotFoundError):
            await case_status_service.reorder(
                admin, [(preparing_status.id, 9), (uuid4(), 1)]
            )

        unchanged = await case_status_service.get(preparing_status.id)
        assert unchanged.sort_order == 1

    @pytest.mark.asyncio
    async def test_list_by_category(
        self, case_status_service: CaseStatusService, admin: UserProfile
    ) -> None:
        """Category filtering keeps active statuses of that category."""
        await case_status_service.create(admin, "Deferido", "deferido", category="government")
        await case_status_service.create(admin, "Triagem", "triagem", category="internal")

        government = await case_status_service.list_by_category("government")

        assert [s.code for s in government] == ["deferido"]
