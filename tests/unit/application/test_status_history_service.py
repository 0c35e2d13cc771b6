"""Unit tests for StatusHistoryService.

Tests the single-active-record rule, mirroring of the active case status
onto the process, fillable field handling and access control.
"""

from uuid import uuid4

import pytest

from casework.application.services import StatusHistoryService
from casework.domain.errors.access import AccessDeniedError, AdminRequiredError
from casework.domain.errors.entity import EntityNotFoundError
from casework.domain.errors.validation import (
    InvalidDateFormatError,
    InvalidFillableFieldsError,
)
from casework.domain.models.case_status import CaseStatus
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.person import Person
from casework.domain.models.user_profile import UserProfile
from casework.infrastructure.monitoring.metrics import get_metrics_collector
from casework.infrastructure.stubs import (
    ActivityLogRepositoryStub,
    IndividualProcessRepositoryStub,
    StatusRecordRepositoryStub,
)


@pytest.fixture
async def process(
    processes: IndividualProcessRepositoryStub,
    person: Person,
    collective: CollectiveProcess,
) -> IndividualProcess:
    """An individual process of the client's company, without status."""
    individual = IndividualProcess(
        id=uuid4(), person_id=person.id, collective_process_id=collective.id
    )
    await processes.save(individual)
    return individual


class TestAddStatus:
    """Tests for add_status."""

    @pytest.mark.asyncio
    async def test_first_status_is_mirrored_on_process(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """The active record's case status is copied to the process."""
        record = await status_history.add_status(
            admin, process.id, submitted_status.id, date="2024-03-01", notes="Filed"
        )

        assert record.is_active is True
        assert record.status_name == "Protocolado"
        assert record.status_code == "protocolado"
        assert record.date == "2024-03-01"
        assert record.changed_by == admin.id
        assert record.fillable_fields == ("protocol_number",)

        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.case_status_id == submitted_status.id
        assert stored.status_code == "protocolado"

    @pytest.mark.asyncio
    async def test_new_active_record_deactivates_previous(
        self,
        status_history: StatusHistoryService,
        status_records: StatusRecordRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        preparing_status: CaseStatus,
        submitted_status: CaseStatus,
    ) -> None:
        """Only one record per process is active."""
        first = await status_history.add_status(admin, process.id, preparing_status.id)
        second = await status_history.add_status(admin, process.id, submitted_status.id)

        records = await status_records.list_for_process(process.id)
        active = [r for r in records if r.is_active]

        assert [r.id for r in active] == [second.id]
        previous = await status_records.get(first.id)
        assert previous is not None
        assert previous.is_active is False

    @pytest.mark.asyncio
    async def test_inactive_record_leaves_process_alone(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        preparing_status: CaseStatus,
        submitted_status: CaseStatus,
    ) -> None:
        """A historical (inactive) record does not change the current status."""
        await status_history.add_status(admin, process.id, preparing_status.id)
        await status_history.add_status(
            admin, process.id, submitted_status.id, date="2023-01-01", is_active=False
        )

        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.case_status_id == preparing_status.id

    @pytest.mark.asyncio
    async def test_preparation_status_sets_date_process(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        preparing_status: CaseStatus,
    ) -> None:
        """Recording em_preparacao stamps the status date on the process."""
        await status_history.add_status(
            admin, process.id, preparing_status.id, date="2024-02-10"
        )

        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.date_process == "2024-02-10"

    @pytest.mark.asyncio
    async def test_filled_fields_copied_to_process(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Values for fillable fields land on the process too."""
        record = await status_history.add_status(
            admin,
            process.id,
            submitted_status.id,
            filled_fields_data={"protocol_number": "08000.123"},
        )

        assert record.filled_fields_data == {"protocol_number": "08000.123"}
        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.protocol_number == "08000.123"

    @pytest.mark.asyncio
    async def test_non_fillable_field_rejected(
        self,
        status_history: StatusHistoryService,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Data for fields the status does not ask for is refused."""
        with pytest.raises(InvalidFillableFieldsError) as exc_info:
            await status_history.add_status(
                admin,
                process.id,
                submitted_status.id,
                filled_fields_data={"rnm_number": "X"},
            )

        assert str(exc_info.value) == (
            'Field "rnm_number" is not a fillable field for this status'
        )

    @pytest.mark.asyncio
    async def test_bad_date_rejected(
        self,
        status_history: StatusHistoryService,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Dates must be YYYY-MM-DD."""
        with pytest.raises(InvalidDateFormatError):
            await status_history.add_status(
                admin, process.id, submitted_status.id, date="01/03/2024"
            )

    @pytest.mark.asyncio
    async def test_client_cannot_add_status(
        self,
        status_history: StatusHistoryService,
        client: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Recording statuses is an admin task."""
        with pytest.raises(AdminRequiredError):
            await status_history.add_status(client, process.id, submitted_status.id)

    @pytest.mark.asyncio
    async def test_unknown_case_status(
        self,
        status_history: StatusHistoryService,
        admin: UserProfile,
        process: IndividualProcess,
    ) -> None:
        """A missing case status is reported as not found."""
        with pytest.raises(EntityNotFoundError, match="Case status not found"):
            await status_history.add_status(admin, process.id, uuid4())

    @pytest.mark.asyncio
    async def test_activity_and_metric_recorded(
        self,
        status_history: StatusHistoryService,
        activity_logs: ActivityLogRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Each status write is audited and counted."""
        from prometheus_client import generate_latest

        record = await status_history.add_status(admin, process.id, submitted_status.id)

        entry = activity_logs.entries[-1]
        assert entry.action == "status_added"
        assert entry.entity_id == str(record.id)
        assert entry.details["case_status_name"] == "Protocolado"

        output = generate_latest(get_metrics_collector().get_registry()).decode()
        assert 'casework_status_changes_total{' in output
        assert 'source="add_status"' in output


class TestUpdateAndDeleteStatus:
    """Tests for update_status and delete_status."""

    @pytest.mark.asyncio
    async def test_deactivating_active_record_clears_process_status(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Without an active record the process has no case status."""
        record = await status_history.add_status(admin, process.id, submitted_status.id)

        updated = await status_history.update_status(admin, record.id, is_active=False)

        assert updated.is_active is False
        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.case_status_id is None
        assert stored.status_code is None

    @pytest.mark.asyncio
    async def test_reactivating_record_takes_over(
        self,
        status_history: StatusHistoryService,
        status_records: StatusRecordRepositoryStub,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        preparing_status: CaseStatus,
        submitted_status: CaseStatus,
    ) -> None:
        """Activating an old record deactivates the current one."""
        first = await status_history.add_status(admin, process.id, preparing_status.id)
        second = await status_history.add_status(admin, process.id, submitted_status.id)

        await status_history.update_status(admin, first.id, is_active=True)

        current = await status_records.get(second.id)
        assert current is not None
        assert current.is_active is False
        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.case_status_id == preparing_status.id

    @pytest.mark.asyncio
    async def test_changing_case_status_of_active_record(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        activity_logs: ActivityLogRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        preparing_status: CaseStatus,
        submitted_status: CaseStatus,
    ) -> None:
        """The process follows the record's new case status."""
        record = await status_history.add_status(admin, process.id, preparing_status.id)

        updated = await status_history.update_status(
            admin, record.id, case_status_id=submitted_status.id, notes="fixed"
        )

        assert updated.status_code == "protocolado"
        assert updated.fillable_fields == ("protocol_number",)
        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.status_code == "protocolado"

        entry = activity_logs.entries[-1]
        assert entry.action == "status_updated"
        assert entry.details["old_values"]["case_status_name"] == "Em preparação"
        assert entry.details["new_values"]["notes"] == "fixed"

    @pytest.mark.asyncio
    async def test_date_edit_on_preparation_record_syncs_date_process(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        preparing_status: CaseStatus,
    ) -> None:
        """Moving the preparation date moves date_process."""
        record = await status_history.add_status(
            admin, process.id, preparing_status.id, date="2024-01-01"
        )

        await status_history.update_status(admin, record.id, date="2024-01-15")

        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.date_process == "2024-01-15"

    @pytest.mark.asyncio
    async def test_delete_active_record(
        self,
        status_history: StatusHistoryService,
        status_records: StatusRecordRepositoryStub,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Deleting the active record clears status and its filled fields."""
        record = await status_history.add_status(
            admin,
            process.id,
            submitted_status.id,
            filled_fields_data={"protocol_number": "P-1"},
        )

        await status_history.delete_status(admin, record.id)

        assert await status_records.get(record.id) is None
        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.case_status_id is None
        assert stored.protocol_number is None

    @pytest.mark.asyncio
    async def test_delete_unknown_record(
        self, status_history: StatusHistoryService, admin: UserProfile
    ) -> None:
        """Unknown records are not found."""
        with pytest.raises(EntityNotFoundError, match="Status record not found"):
            await status_history.delete_status(admin, uuid4())


class TestHistoryAndFillableFields:
    """Tests for reading history and managing fillable fields."""

    @pytest.mark.asyncio
    async def test_history_newest_first(
        self,
        status_history: StatusHistoryService,
        admin: UserProfile,
        process: IndividualProcess,
        preparing_status: CaseStatus,
        submitted_status: CaseStatus,
    ) -> None:
        """History is ordered by effective date, newest first."""
        await status_history.add_status(
            admin, process.id, submitted_status.id, date="2024-05-01"
        )
        await status_history.add_status(
            admin, process.id, preparing_status.id, date="2024-01-01", is_active=False
        )

        history = await status_history.get_status_history(admin, process.id)

        assert [r.date for r in history] == ["2024-05-01", "2024-01-01"]

    @pytest.mark.asyncio
    async def test_client_of_same_company_reads_history(
        self,
        status_history: StatusHistoryService,
        admin: UserProfile,
        client: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Clients see processes of their own company."""
        await status_history.add_status(admin, process.id, submitted_status.id)

        active = await status_history.get_active_status(client, process.id)

        assert active is not None
        assert active.case_status_id == submitted_status.id

    @pytest.mark.asyncio
    async def test_outsider_denied(
        self,
        status_history: StatusHistoryService,
        outsider: UserProfile,
        process: IndividualProcess,
    ) -> None:
        """Clients of other companies are refused."""
        with pytest.raises(AccessDeniedError):
            await status_history.get_status_history(outsider, process.id)

    @pytest.mark.asyncio
    async def test_client_saves_filled_fields(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        client: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Clients may fill the fields of their company's processes."""
        record = await status_history.add_status(admin, process.id, submitted_status.id)

        updated = await status_history.save_filled_fields(
            client, record.id, {"protocol_number": "P-77"}
        )

        assert updated.filled_fields_data == {"protocol_number": "P-77"}
        assert updated.changed_by == client.id
        stored = await processes.get(process.id)
        assert stored is not None
        assert stored.protocol_number == "P-77"

    @pytest.mark.asyncio
    async def test_fillable_view_merges_process_values(
        self,
        status_history: StatusHistoryService,
        processes: IndividualProcessRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Current process values fill in what the record has not stored."""
        record = await status_history.add_status(admin, process.id, submitted_status.id)
        await status_history.update_fillable_fields(
            admin, record.id, ["protocol_number", "dou_number"]
        )
        stored = await processes.get(process.id)
        assert stored is not None
        await processes.save(stored.with_changes(dou_number="DOU-5"))

        view = await status_history.get_fillable_fields(admin, record.id)

        assert view.fillable_fields == ("protocol_number", "dou_number")
        assert view.filled_fields_data == {"dou_number": "DOU-5"}

    @pytest.mark.asyncio
    async def test_update_fillable_fields_validates_names(
        self,
        status_history: StatusHistoryService,
        admin: UserProfile,
        process: IndividualProcess,
        submitted_status: CaseStatus,
    ) -> None:
        """Only known process fields can be configured."""
        record = await status_history.add_status(admin, process.id, submitted_status.id)

        with pytest.raises(InvalidFillableFieldsError):
            await status_history.update_fillable_fields(admin, record.id, ["salary"])
