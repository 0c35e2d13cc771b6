"""Delivered document service: uploads, review and listing.

Uploads use the two-step flow of FileStorageProtocol: the client obtains
an upload target, transfers the bytes, then registers the document with
the token. Registering a file over an existing document creates a new
version; exactly one version per (process, type, requirement) is latest.

Reviews notify the uploader. Notifications and activity entries are
written after the document and never fail the operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from casework.application.ports.document_catalog_repository import (
    DocumentTemplateRepositoryProtocol,
    DocumentTypeRepositoryProtocol,
)
from casework.application.ports.document_repository import DocumentRepositoryProtocol
from casework.application.ports.file_storage import (
    FileStorageProtocol,
    StoredFile,
    UploadTarget,
)
from casework.application.ports.individual_process_repository import (
    IndividualProcessRepositoryProtocol,
)
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.notification_service import NotificationService
from casework.domain.errors.access import AccessDeniedError
from casework.domain.errors.document import (
    ApprovedDocumentDeletionError,
    DocumentAlreadyApprovedError,
    DocumentAlreadyTypedError,
    FileTooLargeError,
    RejectionReasonRequiredError,
    UnsupportedFileFormatError,
)
from casework.domain.errors.entity import EntityNotFoundError
from casework.domain.errors.validation import ValidationError
from casework.domain.models.document import DocumentDelivered, DocumentStatus
from casework.domain.models.document_catalog import DocumentRequirement, DocumentType
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.notification import NotificationType
from casework.domain.models.user_profile import UserProfile
from casework.domain.services.dates import validate_iso_date
from casework.domain.services.document_validity import (
    EXPIRING_SOON_THRESHOLD,
    ValidityCheckResult,
    check_document_validity,
)
from casework.infrastructure.monitoring.metrics import get_metrics_collector

ENTITY_TYPE = "document"

UPLOAD_DENIED = "Access denied: You do not have permission to upload documents for this process"
MODIFY_DENIED = "Access denied: You do not have permission to modify this document"
VIEW_DENIED = "Access denied: You do not have permission to view these documents"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _extension(file_name: str) -> str:
    if "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[-1].lower()


def check_file_constraints(
    file_name: str,
    file_size: int,
    allowed_formats: tuple[str, ...] | list[str] = (),
    max_size_mb: int | None = None,
) -> None:
    """Enforce allowed extensions and size limit of an upload.

    Raises:
        UnsupportedFileFormatError: If the extension is not allowed.
        FileTooLargeError: If the file exceeds max_size_mb.
    """
    if allowed_formats and _extension(file_name) not in allowed_formats:
        raise UnsupportedFileFormatError(file_name, list(allowed_formats))
    if max_size_mb and file_size > max_size_mb * 1024 * 1024:
        raise FileTooLargeError(file_size, max_size_mb)


@dataclass(frozen=True)
class DocumentGroups:
    """Latest documents of a process split by checklist role.

    Attributes:
        required: Typed documents the checklist requires.
        optional: Typed documents that are not required.
        loose: Documents uploaded without a type.
        summary: Upload and approval counts per group.
    """

    required: list[DocumentDelivered] = field(default_factory=list)
    optional: list[DocumentDelivered] = field(default_factory=list)
    loose: list[DocumentDelivered] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)


class DocumentService(LoggingMixin):
    """Uploads, reviews and lists delivered documents.

    Attributes:
        _documents: Delivered document repository.
        _processes: Individual process repository.
        _types: Document type repository.
        _templates: Template repository (requirements).
        _storage: File storage for the two-step upload.
        _access: Access control.
        _activity: Activity log.
        _notifications: Notification service.
        _max_upload_mb: Global upload size limit.
        _expiring_soon_days: Warning window for validity checks.
    """

    def __init__(
        self,
        documents: DocumentRepositoryProtocol,
        processes: IndividualProcessRepositoryProtocol,
        types: DocumentTypeRepositoryProtocol,
        templates: DocumentTemplateRepositoryProtocol,
        storage: FileStorageProtocol,
        access: AccessControlService,
        activity: ActivityLogService,
        notifications: NotificationService,
        max_upload_mb: int = 25,
        expiring_soon_days: int = EXPIRING_SOON_THRESHOLD,
    ) -> None:
        self._documents = documents
        self._processes = processes
        self._types = types
        self._templates = templates
        self._storage = storage
        self._access = access
        self._activity = activity
        self._notifications = notifications
        self._max_upload_mb = max_upload_mb
        self._expiring_soon_days = expiring_soon_days
        self._init_logger(component="documents")

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_mb * 1024 * 1024

    def check_upload_size(self, size: int) -> None:
        """Reject a transfer of size bytes before it is stored.

        Raises:
            FileTooLargeError: If size exceeds the global upload limit.
        """
        if size > self.max_upload_bytes:
            raise FileTooLargeError(size, self._max_upload_mb)

    # Lookups

    async def _get_process(self, process_id: UUID) -> IndividualProcess:
        process = await self._processes.get(process_id)
        if process is None:
            raise EntityNotFoundError("Individual process", process_id)
        return process

    async def _get_document(self, document_id: UUID) -> DocumentDelivered:
        document = await self._documents.get(document_id)
        if document is None:
            raise EntityNotFoundError("Document", document_id)
        return document

    async def _get_active_type(self, type_id: UUID) -> DocumentType:
        document_type = await self._types.get(type_id)
        if document_type is None:
            raise EntityNotFoundError("Document type", type_id)
        if not document_type.is_active:
            raise ValidationError("Document type is not active", field="document_type_id")
        return document_type

    async def _get_requirement(
        self, requirement_id: UUID | None, document_type_id: UUID | None
    ) -> DocumentRequirement | None:
        if requirement_id is None:
            return None
        requirement = await self._templates.get_requirement(requirement_id)
        if requirement is None:
            raise EntityNotFoundError("Document requirement", requirement_id)
        if document_type_id is not None and requirement.document_type_id != document_type_id:
            raise ValidationError(
                "Requirement does not match the document type",
                field="document_requirement_id",
            )
        return requirement

    async def _type_name(self, document: DocumentDelivered) -> str:
        if document.document_type_id is None:
            return "Document"
        document_type = await self._types.get(document.document_type_id)
        return document_type.name if document_type else "Document"

    async def _require_access(
        self, actor: UserProfile, process: IndividualProcess, denial: str
    ) -> None:
        try:
            await self._access.require_process_access(actor, process)
        except AccessDeniedError:
            raise AccessDeniedError(denial, user_id=str(actor.id)) from None

    def _check_constraints(
        self,
        stored: StoredFile,
        file_name: str,
        document_type: DocumentType | None,
        requirement: DocumentRequirement | None,
    ) -> None:
        check_file_constraints(file_name, stored.size, max_size_mb=self._max_upload_mb)
        if document_type is not None:
            check_file_constraints(
                file_name,
                stored.size,
                document_type.allowed_file_types,
                document_type.max_file_size_mb,
            )
        if requirement is not None:
            check_file_constraints(
                file_name,
                stored.size,
                requirement.allowed_formats,
                requirement.max_size_mb,
            )

    # Two-step upload

    async def create_upload_target(self, actor: UserProfile) -> UploadTarget:
        """Step one: hand out an upload token and URL."""
        target = await self._storage.create_upload_target()
        self._log_operation("create_upload_target", user_id=str(actor.id)).debug(
            "upload_target_created", expires_at=target.expires_at.isoformat()
        )
        return target

    async def store_file(
        self, actor: UserProfile, token: str, data: bytes, content_type: str
    ) -> StoredFile:
        """Step two: transfer the bytes for a token."""
        stored = await self._storage.store(
            token, data, content_type, max_size_mb=self._max_upload_mb
        )
        self._log_operation("store_file", user_id=str(actor.id)).debug(
            "upload_bytes_stored", size=stored.size
        )
        return stored

    async def upload(
        self,
        actor: UserProfile,
        process_id: UUID,
        document_type_id: UUID,
        token: str,
        file_name: str,
        document_requirement_id: UUID | None = None,
        mime_type: str | None = None,
        issue_date: str | None = None,
        expiry_date: str | None = None,
    ) -> DocumentDelivered:
        """Register a stored file as the latest version of a document.

        An empty checklist slot for the same type and requirement is filled
        in place; otherwise the current latest version is demoted and the
        new record gets the next version number.

        Raises:
            EntityNotFoundError: If the process, type or requirement is unknown.
            AccessDeniedError: If the actor may not upload for the process.
            InvalidUploadTokenError: If nothing was stored for the token.
            UnsupportedFileFormatError: If the extension is not allowed.
            FileTooLargeError: If the file exceeds a size limit.
        """
        log = self._log_operation(
            "upload", process_id=str(process_id), document_type_id=str(document_type_id)
        )
        process = await self._get_process(process_id)
        await self._require_access(actor, process, UPLOAD_DENIED)
        document_type = await self._get_active_type(document_type_id)
        requirement = await self._get_requirement(document_requirement_id, document_type_id)
        if issue_date:
            validate_iso_date(issue_date, field="issue_date")
        if expiry_date:
            validate_iso_date(expiry_date, field="expiry_date")

        stored = await self._storage.resolve(token)
        self._check_constraints(stored, file_name, document_type, requirement)
        stored = await self._storage.claim(token)

        history = await self._documents.list_history(
            process.id, document_type_id, document_requirement_id
        )
        latest = next((d for d in history if d.is_latest), None)
        if latest is not None and latest.is_empty_slot:
            return await self._fill_slot(
                actor, latest, stored, file_name, mime_type, issue_date, expiry_date
            )

        document = await self._documents.save_version(
            DocumentDelivered(
                id=uuid4(),
                individual_process_id=process.id,
                document_type_id=document_type_id,
                document_requirement_id=document_requirement_id,
                person_id=process.person_id,
                company_id=latest.company_id if latest else None,
                file_name=file_name,
                file_url=stored.file_url,
                file_size=stored.size,
                mime_type=mime_type or stored.content_type,
                status=DocumentStatus.UPLOADED,
                uploaded_by=actor.id,
                uploaded_at=_utc_now(),
                issue_date=issue_date,
                expiry_date=expiry_date,
                is_required=(
                    requirement.is_required
                    if requirement
                    else (latest.is_required if latest else False)
                ),
            )
        )
        get_metrics_collector().increment_document_uploads()
        log.info("document_uploaded", document_id=str(document.id), version=document.version)

        await self._activity.log_activity(
            actor.id,
            "uploaded",
            ENTITY_TYPE,
            document.id,
            {
                "fileName": file_name,
                "fileSize": stored.size,
                "version": document.version,
                "isReplacement": latest is not None,
            },
        )
        return document

    async def _fill_slot(
        self,
        actor: UserProfile,
        slot: DocumentDelivered,
        stored: StoredFile,
        file_name: str,
        mime_type: str | None,
        issue_date: str | None,
        expiry_date: str | None,
    ) -> DocumentDelivered:
        document = slot.with_changes(
            file_name=file_name,
            file_url=stored.file_url,
            file_size=stored.size,
            mime_type=mime_type or stored.content_type,
            status=DocumentStatus.UPLOADED,
            uploaded_by=actor.id,
            uploaded_at=_utc_now(),
            issue_date=issue_date or slot.issue_date,
            expiry_date=expiry_date or slot.expiry_date,
        )
        await self._documents.save(document)
        get_metrics_collector().increment_document_uploads()
        self._log_operation("fill_slot", document_id=str(slot.id)).info(
            "pending_document_uploaded"
        )
        await self._activity.log_activity(
            actor.id,
            "uploaded_pending",
            ENTITY_TYPE,
            document.id,
            {"fileName": file_name, "fileSize": stored.size},
        )
        return document

    async def upload_for_pending(
        self,
        actor: UserProfile,
        document_id: UUID,
        token: str,
        file_name: str,
        mime_type: str | None = None,
        issue_date: str | None = None,
        expiry_date: str | None = None,
    ) -> DocumentDelivered:
        """Fill an empty checklist slot with a stored file.

        Raises:
            ValidationError: If the slot already holds a file.
        """
        slot = await self._get_document(document_id)
        process = await self._get_process(slot.individual_process_id)
        await self._require_access(actor, process, UPLOAD_DENIED)
        if not slot.is_empty_slot:
            raise ValidationError("Document already has a file uploaded", field="document_id")
        if issue_date:
            validate_iso_date(issue_date, field="issue_date")
        if expiry_date:
            validate_iso_date(expiry_date, field="expiry_date")

        document_type = (
            await self._types.get(slot.document_type_id) if slot.document_type_id else None
        )
        requirement = (
            await self._templates.get_requirement(slot.document_requirement_id)
            if slot.document_requirement_id
            else None
        )
        stored = await self._storage.resolve(token)
        self._check_constraints(stored, file_name, document_type, requirement)
        stored = await self._storage.claim(token)
        return await self._fill_slot(
            actor, slot, stored, file_name, mime_type, issue_date, expiry_date
        )

    async def upload_loose(
        self,
        actor: UserProfile,
        process_id: UUID,
        token: str,
        file_name: str,
        mime_type: str | None = None,
    ) -> DocumentDelivered:
        """Register a stored file without a document type."""
        process = await self._get_process(process_id)
        await self._require_access(actor, process, UPLOAD_DENIED)
        stored = await self._storage.resolve(token)
        self._check_constraints(stored, file_name, None, None)
        stored = await self._storage.claim(token)

        document = DocumentDelivered(
            id=uuid4(),
            individual_process_id=process.id,
            person_id=process.person_id,
            file_name=file_name,
            file_url=stored.file_url,
            file_size=stored.size,
            mime_type=mime_type or stored.content_type,
            status=DocumentStatus.UPLOADED,
            uploaded_by=actor.id,
            uploaded_at=_utc_now(),
        )
        await self._documents.save(document)
        get_metrics_collector().increment_document_uploads()
        self._log_operation("upload_loose", process_id=str(process_id)).info(
            "loose_document_uploaded", document_id=str(document.id)
        )
        await self._activity.log_activity(
            actor.id,
            "uploaded_loose",
            ENTITY_TYPE,
            document.id,
            {"fileName": file_name, "fileSize": stored.size},
        )
        return document

    async def assign_type(
        self, actor: UserProfile, document_id: UUID, document_type_id: UUID
    ) -> DocumentDelivered:
        """Give a loose document its type.

        The document joins the type's version history and becomes its
        latest version.

        Raises:
            DocumentAlreadyTypedError: If the document already has a type.
            ValidationError: If the type is inactive.
        """
        document = await self._get_document(document_id)
        process = await self._get_process(document.individual_process_id)
        await self._require_access(actor, process, MODIFY_DENIED)
        if document.document_type_id is not None:
            raise DocumentAlreadyTypedError(str(document_id))
        document_type = await self._get_active_type(document_type_id)
        check_file_constraints(
            document.file_name,
            document.file_size,
            document_type.allowed_file_types,
            document_type.max_file_size_mb,
        )

        typed = await self._documents.save_version(
            document.with_changes(document_type_id=document_type_id, is_required=False)
        )
        self._log_operation("assign_type", document_id=str(document_id)).info(
            "document_type_assigned", document_type_id=str(document_type_id)
        )
        await self._activity.log_activity(
            actor.id,
            "assigned_type",
            ENTITY_TYPE,
            typed.id,
            {"fileName": typed.file_name, "documentType": document_type.name},
        )
        return typed

    # Review

    async def _notify_uploader(
        self,
        document: DocumentDelivered,
        notification_type: NotificationType,
        title: str,
        message: str,
    ) -> None:
        if document.uploaded_by is None:
            return
        try:
            await self._notifications.create(
                document.uploaded_by,
                notification_type,
                title,
                message,
                entity_type=ENTITY_TYPE,
                entity_id=document.id,
            )
        except Exception as e:
            self._log_operation("notify_uploader", document_id=str(document.id)).warning(
                "notification_failed", error=str(e)
            )

    async def approve(
        self,
        actor: UserProfile,
        document_id: UUID,
        notes: str | None = None,
        action: str = "approved",
    ) -> DocumentDelivered:
        """Approve a document and notify its uploader.

        Raises:
            AdminRequiredError: If the actor is not an admin.
            DocumentAlreadyApprovedError: If it is approved already.
        """
        self._access.require_admin(actor)
        document = await self._get_document(document_id)
        if document.status == DocumentStatus.APPROVED:
            raise DocumentAlreadyApprovedError(str(document_id))

        approved = document.approved(actor.id)
        await self._documents.save(approved)
        get_metrics_collector().increment_document_reviews("approved")
        self._log_operation("approve", document_id=str(document_id)).info("document_approved")

        type_name = await self._type_name(document)
        await self._notify_uploader(
            approved,
            NotificationType.DOCUMENT_APPROVED,
            "Document Approved",
            f'Your document "{type_name}" has been approved',
        )
        details: dict[str, Any] = {
            "fileName": document.file_name,
            "documentType": type_name,
            "previousStatus": document.status.value,
        }
        if notes:
            details["notes"] = notes
        await self._activity.log_activity(actor.id, action, ENTITY_TYPE, document_id, details)
        return approved

    async def reject(
        self,
        actor: UserProfile,
        document_id: UUID,
        reason: str,
        action: str = "rejected",
    ) -> DocumentDelivered:
        """Reject a document with a reason and notify its uploader.

        Raises:
            AdminRequiredError: If the actor is not an admin.
            RejectionReasonRequiredError: If the reason is blank.
        """
        self._access.require_admin(actor)
        if not reason or not reason.strip():
            raise RejectionReasonRequiredError()
        document = await self._get_document(document_id)

        rejected = document.rejected(actor.id, reason.strip())
        await self._documents.save(rejected)
        get_metrics_collector().increment_document_reviews("rejected")
        self._log_operation("reject", document_id=str(document_id)).info("document_rejected")

        type_name = await self._type_name(document)
        await self._notify_uploader(
            rejected,
            NotificationType.DOCUMENT_REJECTED,
            "Document Rejected",
            f'Your document "{type_name}" was rejected: {rejected.rejection_reason}',
        )
        await self._activity.log_activity(
            actor.id,
            action,
            ENTITY_TYPE,
            document_id,
            {
                "fileName": document.file_name,
                "documentType": type_name,
                "previousStatus": document.status.value,
                "rejectionReason": rejected.rejection_reason,
            },
        )
        return rejected

    async def remove(
        self, actor: UserProfile, document_id: UUID, action: str = "removed"
    ) -> DocumentDelivered:
        """Soft delete: the document stops being the latest version.

        Raises:
            ApprovedDocumentDeletionError: If the document is approved.
        """
        self._access.require_admin(actor)
        document = await self._get_document(document_id)
        if document.status == DocumentStatus.APPROVED:
            raise ApprovedDocumentDeletionError(str(document_id))

        removed = document.superseded()
        await self._documents.save(removed)
        self._log_operation("remove", document_id=str(document_id)).info("document_removed")
        await self._activity.log_activity(
            actor.id,
            action,
            ENTITY_TYPE,
            document_id,
            {
                "fileName": document.file_name,
                "documentType": await self._type_name(document),
                "status": document.status.value,
                "version": document.version,
            },
        )
        return removed

    # Queries

    async def get(self, actor: UserProfile, document_id: UUID) -> DocumentDelivered:
        document = await self._get_document(document_id)
        process = await self._get_process(document.individual_process_id)
        await self._require_access(actor, process, VIEW_DENIED)
        return document

    async def list(
        self,
        actor: UserProfile,
        process_id: UUID,
        status: DocumentStatus | None = None,
    ) -> list[DocumentDelivered]:
        """Latest versions of a process's documents."""
        process = await self._get_process(process_id)
        await self._require_access(actor, process, VIEW_DENIED)
        return await self._documents.list_for_process(process.id, status=status)

    async def list_grouped_by_category(
        self, actor: UserProfile, process_id: UUID
    ) -> DocumentGroups:
        """Latest documents split into required, optional and loose."""
        groups = DocumentGroups()
        for document in await self.list(actor, process_id):
            if document.document_type_id is None:
                groups.loose.append(document)
            elif document.is_required:
                groups.required.append(document)
            else:
                groups.optional.append(document)

        def uploaded(docs: list[DocumentDelivered]) -> int:
            return sum(1 for d in docs if d.status != DocumentStatus.NOT_STARTED)

        def approved(docs: list[DocumentDelivered]) -> int:
            return sum(1 for d in docs if d.status == DocumentStatus.APPROVED)

        groups.summary.update(
            totalRequired=len(groups.required),
            totalOptional=len(groups.optional),
            totalLoose=len(groups.loose),
            requiredUploaded=uploaded(groups.required),
            requiredApproved=approved(groups.required),
            optionalUploaded=uploaded(groups.optional),
            optionalApproved=approved(groups.optional),
        )
        return groups

    async def get_version_history(
        self, actor: UserProfile, document_id: UUID
    ) -> list[DocumentDelivered]:
        """Every version of the document, highest version first.

        Loose documents have no shared history and return only themselves.
        """
        document = await self.get(actor, document_id)
        if document.document_type_id is None:
            return [document]
        return await self._documents.list_history(*document.history_key())

    async def check_validity(
        self, actor: UserProfile, document_id: UUID, today: date | None = None
    ) -> ValidityCheckResult:
        """Check a document against its type's validity rule.

        A requirement's validity_days overrides the type's.
        """
        document = await self.get(actor, document_id)
        document_type = (
            await self._types.get(document.document_type_id)
            if document.document_type_id
            else None
        )
        requirement = (
            await self._templates.get_requirement(document.document_requirement_id)
            if document.document_requirement_id
            else None
        )
        validity_days = (
            requirement.validity_days
            if requirement and requirement.validity_days
            else (document_type.validity_days if document_type else None)
        )
        return check_document_validity(
            document_type.validity_type if document_type else None,
            validity_days,
            document.issue_date,
            document.expiry_date,
            today=today,
            expiring_soon_threshold=self._expiring_soon_days,
        )

    async def read_file(
        self, actor: UserProfile, document_id: UUID
    ) -> tuple[DocumentDelivered, bytes]:
        """Bytes of a document's file.

        Raises:
            EntityNotFoundError: If the document has no file.
        """
        document = await self.get(actor, document_id)
        if not document.file_url:
            raise EntityNotFoundError("Document file", document_id)
        token = document.file_url.rstrip("/").rsplit("/", 1)[-1]
        _, data = await self._storage.read(token)
        return document, data
