"""Domain errors for Casework.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from CaseworkError.
"""

from casework.domain.errors.access import (
    AccessDeniedError,
    AdminRequiredError,
    AuthenticationRequiredError,
)
from casework.domain.errors.document import (
    ApprovedDocumentDeletionError,
    DocumentAlreadyApprovedError,
    DocumentAlreadyTypedError,
    DocumentError,
    FileTooLargeError,
    InvalidUploadTokenError,
    RejectionReasonRequiredError,
    UnsupportedFileFormatError,
)
from casework.domain.errors.entity import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from casework.domain.errors.status import (
    InvalidStatusTransitionError,
    NoIndividualProcessesError,
)
from casework.domain.errors.validation import (
    InvalidDateFormatError,
    InvalidFillableFieldsError,
    ValidationError,
)

__all__: list[str] = [
    "AccessDeniedError",
    "AdminRequiredError",
    "ApprovedDocumentDeletionError",
    "AuthenticationRequiredError",
    "DocumentAlreadyApprovedError",
    "DocumentAlreadyTypedError",
    "DocumentError",
    "DuplicateEntityError",
    "EntityInUseError",
    "EntityNotFoundError",
    "FileTooLargeError",
    "InvalidDateFormatError",
    "InvalidFillableFieldsError",
    "InvalidStatusTransitionError",
    "InvalidUploadTokenError",
    "NoIndividualProcessesError",
    "RejectionReasonRequiredError",
    "UnsupportedFileFormatError",
    "ValidationError",
]
