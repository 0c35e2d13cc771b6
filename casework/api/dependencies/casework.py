"""Casework API dependencies.

Singletons for configuration, repositories and services. Repositories
are in-memory stubs; when DATABASE_URL is configured the activity log
and notifications are stored in PostgreSQL. Uploaded bytes go to the
local filesystem.

Tests replace the config with set_casework_config() and drop every
singleton with reset_casework_dependencies().
"""

from dataclasses import dataclass

from casework.application.ports.activity_log_repository import (
    ActivityLogRepositoryProtocol,
)
from casework.application.ports.file_storage import FileStorageProtocol
from casework.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
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
from casework.bootstrap.database import get_session_factory
from casework.config import CaseworkConfig
from casework.infrastructure.adapters.persistence import (
    PostgresActivityLogRepository,
    PostgresNotificationRepository,
)
from casework.infrastructure.adapters.storage import LocalFileStorage
from casework.infrastructure.stubs import (
    ActivityLogRepositoryStub,
    CaseStatusRepositoryStub,
    CollectiveProcessRepositoryStub,
    CompanyRepositoryStub,
    DocumentRepositoryStub,
    DocumentTemplateRepositoryStub,
    DocumentTypeRepositoryStub,
    IndividualProcessRepositoryStub,
    LegalFrameworkRepositoryStub,
    NotificationRepositoryStub,
    PersonRepositoryStub,
    ProcessTypeRepositoryStub,
    StatusRecordRepositoryStub,
    UserProfileRepositoryStub,
)


@dataclass
class CaseworkRepositories:
    """Every repository adapter of one application instance."""

    profiles: UserProfileRepositoryStub
    people: PersonRepositoryStub
    case_statuses: CaseStatusRepositoryStub
    processes: IndividualProcessRepositoryStub
    status_records: StatusRecordRepositoryStub
    collectives: CollectiveProcessRepositoryStub
    documents: DocumentRepositoryStub
    document_types: DocumentTypeRepositoryStub
    templates: DocumentTemplateRepositoryStub
    companies: CompanyRepositoryStub
    process_types: ProcessTypeRepositoryStub
    legal_frameworks: LegalFrameworkRepositoryStub
    activity_logs: ActivityLogRepositoryProtocol
    notifications: NotificationRepositoryProtocol
    storage: FileStorageProtocol


def build_repositories(config: CaseworkConfig) -> CaseworkRepositories:
    """Create the repository adapters for a configuration."""
    activity_logs: ActivityLogRepositoryProtocol
    notifications: NotificationRepositoryProtocol
    if config.uses_database:
        session_factory = get_session_factory(config.database_url)
        activity_logs = PostgresActivityLogRepository(session_factory)
        notifications = PostgresNotificationRepository(session_factory)
    else:
        activity_logs = ActivityLogRepositoryStub()
        notifications = NotificationRepositoryStub()

    return CaseworkRepositories(
        profiles=UserProfileRepositoryStub(),
        people=PersonRepositoryStub(),
        case_statuses=CaseStatusRepositoryStub(),
        processes=IndividualProcessRepositoryStub(),
        status_records=StatusRecordRepositoryStub(),
        collectives=CollectiveProcessRepositoryStub(),
        documents=DocumentRepositoryStub(),
        document_types=DocumentTypeRepositoryStub(),
        templates=DocumentTemplateRepositoryStub(),
        companies=CompanyRepositoryStub(),
        process_types=ProcessTypeRepositoryStub(),
        legal_frameworks=LegalFrameworkRepositoryStub(),
        activity_logs=activity_logs,
        notifications=notifications,
        storage=LocalFileStorage(
            config.upload_dir,
            base_url=config.upload_base_url,
            ttl_seconds=config.upload_token_ttl_seconds,
        ),
    )


_config: CaseworkConfig | None = None
_repositories: CaseworkRepositories | None = None
_access_control_service: AccessControlService | None = None
_activity_log_service: ActivityLogService | None = None
_notification_service: NotificationService | None = None
_case_status_service: CaseStatusService | None = None
_status_history_service: StatusHistoryService | None = None
_document_checklist_service: DocumentChecklistService | None = None
_document_catalog_service: DocumentCatalogService | None = None
_document_service: DocumentService | None = None
_individual_process_service: IndividualProcessService | None = None
_collective_process_service: CollectiveProcessService | None = None
_person_service: PersonService | None = None
_bulk_operation_service: BulkOperationService | None = None
_reference_data_service: ReferenceDataService | None = None
_user_profile_service: UserProfileService | None = None


def get_casework_config() -> CaseworkConfig:
    """Get the configuration, read from the environment on first use."""
    global _config
    if _config is None:
        _config = CaseworkConfig.from_environment()
    return _config


def set_casework_config(config: CaseworkConfig) -> None:
    """Set a custom configuration (testing/override)."""
    global _config
    _config = config


def get_repositories() -> CaseworkRepositories:
    global _repositories
    if _repositories is None:
        _repositories = build_repositories(get_casework_config())
    return _repositories


def set_repositories(repositories: CaseworkRepositories) -> None:
    """Set custom repositories (testing/override)."""
    global _repositories
    _repositories = repositories


def get_access_control_service() -> AccessControlService:
    global _access_control_service
    if _access_control_service is None:
        repos = get_repositories()
        _access_control_service = AccessControlService(repos.profiles, repos.collectives)
    return _access_control_service


def get_activity_log_service() -> ActivityLogService:
    global _activity_log_service
    if _activity_log_service is None:
        _activity_log_service = ActivityLogService(
            get_repositories().activity_logs,
            default_limit=get_casework_config().activity_log_limit,
        )
    return _activity_log_service


def get_notification_service() -> NotificationService:
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService(get_repositories().notifications)
    return _notification_service


def get_case_status_service() -> CaseStatusService:
    global _case_status_service
    if _case_status_service is None:
        repos = get_repositories()
        _case_status_service = CaseStatusService(
            repos.case_statuses,
            repos.processes,
            get_access_control_service(),
            get_activity_log_service(),
        )
    return _case_status_service


def get_status_history_service() -> StatusHistoryService:
    global _status_history_service
    if _status_history_service is None:
        repos = get_repositories()
        _status_history_service = StatusHistoryService(
            repos.processes,
            repos.status_records,
            repos.case_statuses,
            get_access_control_service(),
            get_activity_log_service(),
        )
    return _status_history_service


def get_document_checklist_service() -> DocumentChecklistService:
    global _document_checklist_service
    if _document_checklist_service is None:
        repos = get_repositories()
        _document_checklist_service = DocumentChecklistService(
            repos.collectives, repos.templates, repos.documents
        )
    return _document_checklist_service


def get_document_catalog_service() -> DocumentCatalogService:
    global _document_catalog_service
    if _document_catalog_service is None:
        repos = get_repositories()
        _document_catalog_service = DocumentCatalogService(
            repos.document_types,
            repos.templates,
            repos.documents,
            get_access_control_service(),
            get_activity_log_service(),
            get_reference_data_service(),
        )
    return _document_catalog_service


def get_document_service() -> DocumentService:
    global _document_service
    if _document_service is None:
        repos = get_repositories()
        config = get_casework_config()
        _document_service = DocumentService(
            repos.documents,
            repos.processes,
            repos.document_types,
            repos.templates,
            repos.storage,
            get_access_control_service(),
            get_activity_log_service(),
            get_notification_service(),
            max_upload_mb=config.max_upload_mb,
            expiring_soon_days=config.expiring_soon_days,
        )
    return _document_service


def get_individual_process_service() -> IndividualProcessService:
    global _individual_process_service
    if _individual_process_service is None:
        repos = get_repositories()
        _individual_process_service = IndividualProcessService(
            repos.processes,
            repos.people,
            repos.collectives,
            repos.case_statuses,
            repos.status_records,
            get_status_history_service(),
            get_document_checklist_service(),
            get_access_control_service(),
            get_activity_log_service(),
            get_reference_data_service(),
        )
    return _individual_process_service


def get_collective_process_service() -> CollectiveProcessService:
    global _collective_process_service
    if _collective_process_service is None:
        repos = get_repositories()
        _collective_process_service = CollectiveProcessService(
            repos.collectives,
            repos.processes,
            repos.case_statuses,
            get_individual_process_service(),
            get_status_history_service(),
            get_access_control_service(),
            get_activity_log_service(),
            get_reference_data_service(),
        )
    return _collective_process_service


def get_person_service() -> PersonService:
    global _person_service
    if _person_service is None:
        _person_service = PersonService(
            get_repositories().people,
            get_access_control_service(),
            get_activity_log_service(),
            get_reference_data_service(),
        )
    return _person_service


def get_reference_data_service() -> ReferenceDataService:
    global _reference_data_service
    if _reference_data_service is None:
        repos = get_repositories()
        _reference_data_service = ReferenceDataService(
            repos.companies,
            repos.process_types,
            repos.legal_frameworks,
            get_access_control_service(),
            get_activity_log_service(),
        )
    return _reference_data_service


def get_user_profile_service() -> UserProfileService:
    global _user_profile_service
    if _user_profile_service is None:
        _user_profile_service = UserProfileService(
            get_repositories().profiles,
            get_access_control_service(),
            get_activity_log_service(),
            get_reference_data_service(),
        )
    return _user_profile_service


def get_bulk_operation_service() -> BulkOperationService:
    global _bulk_operation_service
    if _bulk_operation_service is None:
        _bulk_operation_service = BulkOperationService(
            get_repositories().processes,
            get_individual_process_service(),
            get_status_history_service(),
            get_document_service(),
            get_person_service(),
            get_access_control_service(),
            get_activity_log_service(),
        )
    return _bulk_operation_service


def reset_casework_dependencies() -> None:
    """Reset all singletons (for testing)."""
    global _config, _repositories
    global _access_control_service, _activity_log_service, _notification_service
    global _case_status_service, _status_history_service
    global _document_checklist_service, _document_catalog_service, _document_service
    global _individual_process_service, _collective_process_service
    global _person_service, _bulk_operation_service
    global _reference_data_service, _user_profile_service
    _config = None
    _repositories = None
    _access_control_service = None
    _activity_log_service = None
    _notification_service = None
    _case_status_service = None
    _status_history_service = None
    _document_checklist_service = None
    _document_catalog_service = None
    _document_service = None
    _individual_process_service = None
    _collective_process_service = None
    _person_service = None
    _bulk_operation_service = None
    _reference_data_service = None
    _user_profile_service = None
