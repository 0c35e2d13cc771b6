"""Application services - Use case orchestration.

Services resolve authorization through AccessControlService, write
through repository ports, and record an activity log entry for every
successful write.

Available services:
- AccessControlService: Actor resolution and company scoping
- ActivityLogService: Audit trail
- NotificationService: In-app notifications
- CaseStatusService: Case status catalogue
- StatusHistoryService: Status records of individual processes
- IndividualProcessService: Individual processes
- CollectiveProcessService: Collective processes and derived status
- DocumentCatalogService: Document types, templates and requirements
- DocumentChecklistService: Checklist generation
- DocumentService: Uploads, review and listing of delivered documents
- BulkOperationService: Admin bulk operations
- PersonService: Applicants
- ReferenceDataService: Companies, process types and legal frameworks
- UserProfileService: User profiles and the initial admin
"""

from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.bulk_operation_service import BulkOperationService
from casework.application.services.case_status_service import CaseStatusService
from casework.application.services.collective_process_service import (
    CollectiveProcessService,
)
from casework.application.services.document_catalog_service import (
    DocumentCatalogService,
)
from casework.application.services.document_checklist_service import (
    DocumentChecklistService,
)
from casework.application.services.document_service import (
    DocumentGroups,
    DocumentService,
    check_file_constraints,
)
from casework.application.services.individual_process_service import (
    IndividualProcessService,
)
from casework.application.services.notification_service import NotificationService
from casework.application.services.person_service import PersonService
from casework.application.services.reference_data_service import ReferenceDataService
from casework.application.services.status_history_service import (
    FillableFieldsView,
    StatusHistoryService,
)
from casework.application.services.user_profile_service import UserProfileService

__all__ = [
    "AccessControlService",
    "ActivityLogService",
    "BulkOperationService",
    "CaseStatusService",
    "CollectiveProcessService",
    "DocumentCatalogService",
    "DocumentChecklistService",
    "DocumentGroups",
    "DocumentService",
    "FillableFieldsView",
    "IndividualProcessService",
    "LoggingMixin",
    "NotificationService",
    "PersonService",
    "ReferenceDataService",
    "StatusHistoryService",
    "UserProfileService",
    "check_file_constraints",
]
