"""Domain models for Casework."""

from casework.domain.models.activity_log import ActivityLog
from casework.domain.models.bulk_result import BulkFailure, BulkOperationResult
from casework.domain.models.case_status import PREPARATION_STATUS_CODE, CaseStatus
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.document import DocumentDelivered, DocumentStatus
from casework.domain.models.document_catalog import (
    DocumentRequirement,
    DocumentTemplate,
    DocumentType,
    ValidityType,
)
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.notification import Notification, NotificationType
from casework.domain.models.person import Person
from casework.domain.models.status_record import StatusRecord
from casework.domain.models.user_profile import UserProfile, UserRole

__all__: list[str] = [
    "PREPARATION_STATUS_CODE",
    "ActivityLog",
    "BulkFailure",
    "BulkOperationResult",
    "CaseStatus",
    "CollectiveProcess",
    "DocumentDelivered",
    "DocumentRequirement",
    "DocumentStatus",
    "DocumentTemplate",
    "DocumentType",
    "IndividualProcess",
    "Notification",
    "NotificationType",
    "Person",
    "StatusRecord",
    "UserProfile",
    "UserRole",
    "ValidityType",
]
