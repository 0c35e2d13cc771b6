"""In-memory stub adapters for development and testing.

These implement the application ports with dictionaries and are the
default persistence when no database is configured.
"""

from casework.infrastructure.stubs.activity_log_repository_stub import (
    ActivityLogRepositoryStub,
)
from casework.infrastructure.stubs.case_status_repository_stub import (
    CaseStatusRepositoryStub,
)
from casework.infrastructure.stubs.collective_process_repository_stub import (
    CollectiveProcessRepositoryStub,
)
from casework.infrastructure.stubs.document_catalog_repository_stub import (
    DocumentTemplateRepositoryStub,
    DocumentTypeRepositoryStub,
)
from casework.infrastructure.stubs.document_repository_stub import (
    DocumentRepositoryStub,
)
from casework.infrastructure.stubs.file_storage_stub import FileStorageStub
from casework.infrastructure.stubs.individual_process_repository_stub import (
    IndividualProcessRepositoryStub,
)
from casework.infrastructure.stubs.notification_repository_stub import (
    NotificationRepositoryStub,
)
from casework.infrastructure.stubs.person_repository_stub import PersonRepositoryStub
from casework.infrastructure.stubs.reference_data_repository_stub import (
    CompanyRepositoryStub,
    LegalFrameworkRepositoryStub,
    ProcessTypeRepositoryStub,
)
from casework.infrastructure.stubs.status_record_repository_stub import (
    StatusRecordRepositoryStub,
)
from casework.infrastructure.stubs.user_profile_repository_stub import (
    UserProfileRepositoryStub,
)

__all__: list[str] = [
    "ActivityLogRepositoryStub",
    "CaseStatusRepositoryStub",
    "CollectiveProcessRepositoryStub",
    "CompanyRepositoryStub",
    "DocumentRepositoryStub",
    "FileStorageStub",
    "DocumentTemplateRepositoryStub",
    "DocumentTypeRepositoryStub",
    "IndividualProcessRepositoryStub",
    "LegalFrameworkRepositoryStub",
    "NotificationRepositoryStub",
    "PersonRepositoryStub",
    "ProcessTypeRepositoryStub",
    "StatusRecordRepositoryStub",
    "UserProfileRepositoryStub",
]
