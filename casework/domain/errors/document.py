"""Document review and upload errors."""

from __future__ import annotations

from casework.domain.exceptions import CaseworkError


class DocumentError(CaseworkError):
    """Base error for delivered-document operations."""


class DocumentAlreadyApprovedError(DocumentError):
    """Raised when approving a document that is already approved."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__("Document is already approved")


class RejectionReasonRequiredError(DocumentError):
    """Raised when a rejection carries no reason."""

    def __init__(self) -> None:
        super().__init__("Rejection reason is required")


class ApprovedDocumentDeletionError(DocumentError):
    """Raised when deleting an approved document."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(
            "Cannot delete approved documents. Please reject first if needed."
        )


class DocumentAlreadyTypedError(DocumentError):
    """Raised when assigning a type to a document that already has one."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__("Document already has a type assigned")


class FileTooLargeError(DocumentError):
    """Raised when an upload exceeds the allowed size.

    Attributes:
        file_size: Size of the rejected file in bytes.
        max_size_mb: The limit that applied.
    """

    def __init__(self, file_size: int, max_size_mb: int) -> None:
        self.file_size = file_size
        self.max_size_mb = max_size_mb
        super().__init__(f"File size exceeds the maximum of {max_size_mb} MB")


class UnsupportedFileFormatError(DocumentError):
    """Raised when an upload's extension is not in the allowed formats."""

    def __init__(self, file_name: str, allowed_formats: list[str]) -> None:
        self.file_name = file_name
        self.allowed_formats = allowed_formats
        super().__init__(
            f"File format not allowed. Allowed formats: {', '.join(allowed_formats)}"
        )


class InvalidUploadTokenError(DocumentError):
    """Raised when an upload token is unknown, expired, or has no stored bytes."""

    def __init__(self, token: str, reason: str = "Upload token is invalid or expired") -> None:
        self.token = token
        super().__init__(reason)
