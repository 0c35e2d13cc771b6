"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.
"""

from casework.application.ports.activity_log_repository import (
    ActivityLogFilter,
    ActivityLogRepositoryProtocol,
)
from casework.application.ports.case_status_repository import (
    CaseStatusRepositoryProtocol,
)
from casework.application.ports.collective_process_repository import (
    CollectiveProcessRepositoryProtocol,
)
from casework.application.ports.document_catalog_repository import (
    DocumentTemplateRepositoryProtocol,
    DocumentTypeRepositoryProtocol,
)
from casework.application.ports.document_repository import (
    DocumentRepositoryProtocol,
)
from casework.application.ports.file_storage import (
    FileStorageProtocol,
    StoredFile,
    UploadTarget,
)
from casework.application.ports.individual_process_repository import (
    IndividualProcessRepositoryProtocol,
)
from casework.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from casework.application.ports.person_repository import PersonRepositoryProtocol
from casework.application.ports.status_record_repository import (
    StatusRecordRepositoryProtocol,
)
from casework.application.ports.user_profile_repository import (
    UserProfileRepositoryProtocol,
)

__all__: list[str] = [
    "ActivityLogFilter",
    "ActivityLogRepositoryProtocol",
    "CaseStatusRepositoryProtocol",
    "CollectiveProcessRepositoryProtocol",
    "DocumentRepositoryProtocol",
    "DocumentTemplateRepositoryProtocol",
    "DocumentTypeRepositoryProtocol",
    "FileStorageProtocol",
    "IndividualProcessRepositoryProtocol",
    "NotificationRepositoryProtocol",
    "PersonRepositoryProtocol",
    "StatusRecordRepositoryProtocol",
    "StoredFile",
    "UploadTarget",
    "UserProfileRepositoryProtocol",
]
