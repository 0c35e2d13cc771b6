"""Shared fixtures for application service tests.

Services are wired against the in-memory stubs the same way
casework.api.dependencies.casework wires them.
"""

from uuid import uuid4

import pytest

from casework.application.services import (
    AccessControlService,
    ActivityLogService,
    BulkOperationService,
    CaseStatusService,
    CollectiveProcessService,
    DocumentCatalogService,
    DocumentChecklistService,
    DocumentService,
    IndividualProcessService,
    NotificationService,
    PersonService,
    ReferenceDataService,
    StatusHistoryService,
    UserProfileService,
)
from casework.domain.models.case_status import CaseStatus
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.person import Person
from casework.domain.models.reference_data import Company, LegalFramework, ProcessType
from casework.domain.models.user_profile import UserProfile, UserRole
from casework.infrastructure.stubs import (
    ActivityLogRepositoryStub,
    CaseStatusRepositoryStub,
    CollectiveProcessRepositoryStub,
    CompanyRepositoryStub,
    DocumentRepositoryStub,
    DocumentTemplateRepositoryStub,
    DocumentTypeRepositoryStub,
    FileStorageStub,
    IndividualProcessRepositoryStub,
    LegalFrameworkRepositoryStub,
    NotificationRepositoryStub,
    PersonRepositoryStub,
    ProcessTypeRepositoryStub,
    StatusRecordRepositoryStub,
    UserProfileRepositoryStub,
)

COMPANY_ID = "company-acme"
OTHER_COMPANY_ID = "company-globex"


# Repositories


@pytest.fixture
def profiles() -> UserProfileRepositoryStub:
    return UserProfileRepositoryStub()


@pytest.fixture
def people() -> PersonRepositoryStub:
    return PersonRepositoryStub()


@pytest.fixture
def case_statuses() -> CaseStatusRepositoryStub:
    return CaseStatusRepositoryStub()


@pytest.fixture
def processes() -> IndividualProcessRepositoryStub:
    return IndividualProcessRepositoryStub()


@pytest.fixture
def status_records() -> StatusRecordRepositoryStub:
    return StatusRecordRepositoryStub()


@pytest.fixture
def collectives() -> CollectiveProcessRepositoryStub:
    return CollectiveProcessRepositoryStub()


@pytest.fixture
def documents() -> DocumentRepositoryStub:
    return DocumentRepositoryStub()


@pytest.fixture
def document_types() -> DocumentTypeRepositoryStub:
    return DocumentTypeRepositoryStub()


@pytest.fixture
def templates() -> DocumentTemplateRepositoryStub:
    return DocumentTemplateRepositoryStub()


@pytest.fixture
def activity_logs() -> ActivityLogRepositoryStub:
    return ActivityLogRepositoryStub()


@pytest.fixture
def notifications() -> NotificationRepositoryStub:
    return NotificationRepositoryStub()


@pytest.fixture
def storage() -> FileStorageStub:
    return FileStorageStub()


@pytest.fixture
async def companies() -> CompanyRepositoryStub:
    """Companies COMPANY_ID and OTHER_COMPANY_ID."""
    repository = CompanyRepositoryStub()
    await repository.save(Company(id=COMPANY_ID, name="Acme", tax_id="12.345.678/0001-90"))
    await repository.save(Company(id=OTHER_COMPANY_ID, name="Globex"))
    return repository


@pytest.fixture
async def process_types() -> ProcessTypeRepositoryStub:
    repository = ProcessTypeRepositoryStub()
    await repository.save(ProcessType(id="work-visa", name="Work visa", sort_order=1))
    await repository.save(ProcessType(id="student-visa", name="Student visa", sort_order=2))
    return repository


@pytest.fixture
async def legal_frameworks() -> LegalFrameworkRepositoryStub:
    repository = LegalFrameworkRepositoryStub()
    await repository.save(
        LegalFramework(id="rn-36", name="RN 36", process_type_id="work-visa")
    )
    return repository


# Actors


@pytest.fixture
async def admin(profiles: UserProfileRepositoryStub) -> UserProfile:
    """A stored admin profile."""
    profile = UserProfile(
        id=uuid4(), email="admin@casework.test", full_name="Ana Admin", role=UserRole.ADMIN
    )
    await profiles.save(profile)
    return profile


@pytest.fixture
async def client(profiles: UserProfileRepositoryStub) -> UserProfile:
    """A stored client profile of COMPANY_ID."""
    profile = UserProfile(
        id=uuid4(),
        email="client@acme.test",
        full_name="Carlos Client",
        role=UserRole.CLIENT,
        company_id=COMPANY_ID,
    )
    await profiles.save(profile)
    return profile


@pytest.fixture
async def outsider(profiles: UserProfileRepositoryStub) -> UserProfile:
    """A stored client profile of another company."""
    profile = UserProfile(
        id=uuid4(),
        email="other@globex.test",
        full_name="Olga Outsider",
        role=UserRole.CLIENT,
        company_id=OTHER_COMPANY_ID,
    )
    await profiles.save(profile)
    return profile


# Seed data


@pytest.fixture
async def preparing_status(case_statuses: CaseStatusRepositoryStub) -> CaseStatus:
    """The preparation status, which stamps date_process."""
    status = CaseStatus(
        id=uuid4(),
        name="Em preparação",
        name_en="In preparation",
        code="em_preparacao",
        color="#f59e0b",
        sort_order=1,
    )
    await case_statuses.save(status)
    return status


@pytest.fixture
async def submitted_status(case_statuses: CaseStatusRepositoryStub) -> CaseStatus:
    """A status asking for the protocol number."""
    status = CaseStatus(
        id=uuid4(),
        name="Protocolado",
        name_en="Submitted",
        code="protocolado",
        color="#3b82f6",
        sort_order=2,
        fillable_fields=("protocol_number",),
    )
    await case_statuses.save(status)
    return status


@pytest.fixture
async def person(people: PersonRepositoryStub) -> Person:
    """A stored applicant."""
    applicant = Person(id=uuid4(), full_name="Maria Silva", email="maria@example.com")
    await people.save(applicant)
    return applicant


@pytest.fixture
async def collective(collectives: CollectiveProcessRepositoryStub) -> CollectiveProcess:
    """A collective process of COMPANY_ID."""
    process = CollectiveProcess(
        id=uuid4(),
        reference_number="MP-2024-001",
        company_id=COMPANY_ID,
        process_type_id="work-visa",
    )
    await collectives.save(process)
    return process


# Services


@pytest.fixture
def access(
    profiles: UserProfileRepositoryStub, collectives: CollectiveProcessRepositoryStub
) -> AccessControlService:
    return AccessControlService(profiles, collectives)


@pytest.fixture
def activity(activity_logs: ActivityLogRepositoryStub) -> ActivityLogService:
    return ActivityLogService(activity_logs)


@pytest.fixture
def notification_service(notifications: NotificationRepositoryStub) -> NotificationService:
    return NotificationService(notifications)


@pytest.fixture
def reference(
    companies: CompanyRepositoryStub,
    process_types: ProcessTypeRepositoryStub,
    legal_frameworks: LegalFrameworkRepositoryStub,
    access: AccessControlService,
    activity: ActivityLogService,
) -> ReferenceDataService:
    return ReferenceDataService(companies, process_types, legal_frameworks, access, activity)


@pytest.fixture
def case_status_service(
    case_statuses: CaseStatusRepositoryStub,
    processes: IndividualProcessRepositoryStub,
    access: AccessControlService,
    activity: ActivityLogService,
) -> CaseStatusService:
    return CaseStatusService(case_statuses, processes, access, activity)


@pytest.fixture
def status_history(
    processes: IndividualProcessRepositoryStub,
    status_records: StatusRecordRepositoryStub,
    case_statuses: CaseStatusRepositoryStub,
    access: AccessControlService,
    activity: ActivityLogService,
) -> StatusHistoryService:
    return StatusHistoryService(processes, status_records, case_statuses, access, activity)


@pytest.fixture
def checklist(
    collectives: CollectiveProcessRepositoryStub,
    templates: DocumentTemplateRepositoryStub,
    documents: DocumentRepositoryStub,
) -> DocumentChecklistService:
    return DocumentChecklistService(collectives, templates, documents)


@pytest.fixture
def catalog(
    document_types: DocumentTypeRepositoryStub,
    templates: DocumentTemplateRepositoryStub,
    documents: DocumentRepositoryStub,
    access: AccessControlService,
    activity: ActivityLogService,
    reference: ReferenceDataService,
) -> DocumentCatalogService:
    return DocumentCatalogService(
        document_types, templates, documents, access, activity, reference
    )


@pytest.fixture
def document_service(
    documents: DocumentRepositoryStub,
    processes: IndividualProcessRepositoryStub,
    document_types: DocumentTypeRepositoryStub,
    templates: DocumentTemplateRepositoryStub,
    storage: FileStorageStub,
    access: AccessControlService,
    activity: ActivityLogService,
    notification_service: NotificationService,
) -> DocumentService:
    return DocumentService(
        documents,
        processes,
        document_types,
        templates,
        storage,
        access,
        activity,
        notification_service,
        max_upload_mb=1,
    )


@pytest.fixture
def individual_service(
    processes: IndividualProcessRepositoryStub,
    people: PersonRepositoryStub,
    collectives: CollectiveProcessRepositoryStub,
    case_statuses: CaseStatusRepositoryStub,
    status_records: StatusRecordRepositoryStub,
    status_history: StatusHistoryService,
    checklist: DocumentChecklistService,
    access: AccessControlService,
    activity: ActivityLogService,
    reference: ReferenceDataService,
) -> IndividualProcessService:
    return IndividualProcessService(
        processes,
        people,
        collectives,
        case_statuses,
        status_records,
        status_history,
        checklist,
        access,
        activity,
        reference,
    )


@pytest.fixture
def collective_service(
    collectives: CollectiveProcessRepositoryStub,
    processes: IndividualProcessRepositoryStub,
    case_statuses: CaseStatusRepositoryStub,
    individual_service: IndividualProcessService,
    status_history: StatusHistoryService,
    access: AccessControlService,
    activity: ActivityLogService,
    reference: ReferenceDataService,
) -> CollectiveProcessService:
    return CollectiveProcessService(
        collectives,
        processes,
        case_statuses,
        individual_service,
        status_history,
        access,
        activity,
        reference,
    )


@pytest.fixture
def person_service(
    people: PersonRepositoryStub,
    access: AccessControlService,
    activity: ActivityLogService,
    reference: ReferenceDataService,
) -> PersonService:
    return PersonService(people, access, activity, reference)


@pytest.fixture
def bulk_service(
    processes: IndividualProcessRepositoryStub,
    individual_service: IndividualProcessService,
    status_history: StatusHistoryService,
    document_service: DocumentService,
    person_service: PersonService,
    access: AccessControlService,
    activity: ActivityLogService,
) -> BulkOperationService:
    return BulkOperationService(
        processes,
        individual_service,
        status_history,
        document_service,
        person_service,
        access,
        activity,
    )


@pytest.fixture
def user_service(
    profiles: UserProfileRepositoryStub,
    access: AccessControlService,
    activity: ActivityLogService,
    reference: ReferenceDataService,
) -> UserProfileService:
    return UserProfileService(profiles, access, activity, reference)
