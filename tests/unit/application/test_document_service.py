"""Unit tests for DocumentService.

Covers the two-step upload, version history (exactly one latest version
per process/type/requirement), checklist slot filling, review with
notifications, and validity checks.
"""

from datetime import date
from uuid import uuid4

import pytest

from casework.application.services import DocumentService, check_file_constraints
from casework.domain.errors.access import AccessDeniedError, AdminRequiredError
from casework.domain.errors.document import (
    ApprovedDocumentDeletionError,
    DocumentAlreadyApprovedError,
    DocumentAlreadyTypedError,
    FileTooLargeError,
    InvalidUploadTokenError,
    RejectionReasonRequiredError,
    UnsupportedFileFormatError,
)
from casework.domain.errors.entity import EntityNotFoundError
from casework.domain.errors.validation import ValidationError
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.document import DocumentDelivered, DocumentStatus
from casework.domain.models.document_catalog import (
    DocumentRequirement,
    DocumentTemplate,
    DocumentType,
    ValidityType,
)
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.notification import NotificationType
from casework.domain.models.person import Person
from casework.domain.models.user_profile import UserProfile
from casework.domain.services.document_validity import ValidityStatus
from casework.infrastructure.stubs import (
    ActivityLogRepositoryStub,
    DocumentRepositoryStub,
    DocumentTemplateRepositoryStub,
    DocumentTypeRepositoryStub,
    FileStorageStub,
    IndividualProcessRepositoryStub,
    NotificationRepositoryStub,
)

PDF_BYTES = b"%PDF-1.7 test document"


@pytest.fixture
async def process(
    processes: IndividualProcessRepositoryStub,
    person: Person,
    collective: CollectiveProcess,
) -> IndividualProcess:
    """An individual process of the client's company."""
    individual = IndividualProcess(
        id=uuid4(), person_id=person.id, collective_process_id=collective.id
    )
    await processes.save(individual)
    return individual


@pytest.fixture
async def passport(document_types: DocumentTypeRepositoryStub) -> DocumentType:
    """Passport type: PDF/JPG only, must stay valid for 180 days."""
    document_type = DocumentType(
        id=uuid4(),
        name="Passaporte",
        code="passport",
        validity_type=ValidityType.MIN_REMAINING,
        validity_days=180,
        allowed_file_types=("pdf", "jpg"),
    )
    await document_types.save(document_type)
    return document_type


@pytest.fixture
async def requirement(
    templates: DocumentTemplateRepositoryStub, admin: UserProfile, passport: DocumentType
) -> DocumentRequirement:
    """A template requirement for the passport."""
    template = DocumentTemplate(
        id=uuid4(), name="Work visa", process_type_id="work-visa", created_by=admin.id
    )
    await templates.save(template)
    required = DocumentRequirement(
        id=uuid4(), template_id=template.id, document_type_id=passport.id, max_size_mb=2
    )
    await templates.save_requirement(required)
    return required


@pytest.fixture
async def slot(
    documents: DocumentRepositoryStub,
    process: IndividualProcess,
    passport: DocumentType,
    requirement: DocumentRequirement,
    collective: CollectiveProcess,
) -> DocumentDelivered:
    """An empty checklist slot for the passport requirement."""
    empty = DocumentDelivered(
        id=uuid4(),
        individual_process_id=process.id,
        document_type_id=passport.id,
        document_requirement_id=requirement.id,
        person_id=process.person_id,
        company_id=collective.company_id,
        is_required=True,
    )
    await documents.save(empty)
    return empty


async def _upload(
    service: DocumentService,
    storage: FileStorageStub,
    actor: UserProfile,
    process: IndividualProcess,
    document_type: DocumentType,
    file_name: str = "passport.pdf",
    data: bytes = PDF_BYTES,
    **kwargs: object,
) -> DocumentDelivered:
    stored = await storage.put(data)
    return await service.upload(
        actor, process.id, document_type.id, stored.token, file_name, **kwargs
    )


class TestTwoStepUpload:
    """Tests for the upload target and byte transfer."""

    @pytest.mark.asyncio
    async def test_token_then_bytes(
        self, document_service: DocumentService, client: UserProfile
    ) -> None:
        """Bytes are accepted once per token."""
        target = await document_service.create_upload_target(client)

        stored = await document_service.store_file(
            client, target.token, PDF_BYTES, "application/pdf"
        )

        assert stored.size == len(PDF_BYTES)
        assert target.upload_url.endswith(target.token)
        with pytest.raises(InvalidUploadTokenError):
            await document_service.store_file(client, target.token, b"again", "text/plain")

    @pytest.mark.asyncio
    async def test_unknown_token_on_register(
        self,
        document_service: DocumentService,
        admin: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """Registering needs stored bytes."""
        with pytest.raises(InvalidUploadTokenError):
            await document_service.upload(
                admin, process.id, passport.id, "no-such-token", "passport.pdf"
            )

    @pytest.mark.asyncio
    async def test_transfer_over_limit_rejected(
        self, document_service: DocumentService, client: UserProfile
    ) -> None:
        """The global limit applies while bytes are transferred."""
        target = await document_service.create_upload_target(client)

        with pytest.raises(FileTooLargeError):
            await document_service.store_file(
                client, target.token, b"x" * (1024 * 1024 + 1), "application/pdf"
            )
        with pytest.raises(FileTooLargeError):
            document_service.check_upload_size(document_service.max_upload_bytes + 1)
        document_service.check_upload_size(document_service.max_upload_bytes)

    @pytest.mark.asyncio
    async def test_token_registers_one_document(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        admin: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """Once registered, the same stored file cannot back another document."""
        stored = await storage.put(PDF_BYTES)
        await document_service.upload(
            admin, process.id, passport.id, stored.token, "passport.pdf"
        )

        with pytest.raises(InvalidUploadTokenError, match="already been used"):
            await document_service.upload(
                admin, process.id, passport.id, stored.token, "passport.pdf"
            )
        with pytest.raises(InvalidUploadTokenError, match="already been used"):
            await document_service.upload_loose(admin, process.id, stored.token, "copy.pdf")


class TestUploadVersions:
    """Tests for versioned uploads."""

    @pytest.mark.asyncio
    async def test_first_upload(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        activity_logs: ActivityLogRepositoryStub,
        client: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """A first upload is version 1 and latest."""
        document = await _upload(
            document_service, storage, client, process, passport, expiry_date="2030-01-01"
        )

        assert document.version == 1
        assert document.is_latest is True
        assert document.status == DocumentStatus.UPLOADED
        assert document.file_size == len(PDF_BYTES)
        assert document.mime_type == "application/pdf"
        assert document.uploaded_by == client.id
        assert document.person_id == process.person_id
        assert activity_logs.entries[-1].action == "uploaded"
        assert activity_logs.entries[-1].details["isReplacement"] is False

    @pytest.mark.asyncio
    async def test_reupload_creates_next_version(
        self,
        document_service: DocumentService,
        documents: DocumentRepositoryStub,
        storage: FileStorageStub,
        admin: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """The previous version stops being latest."""
        first = await _upload(document_service, storage, admin, process, passport)
        second = await _upload(
            document_service, storage, admin, process, passport, file_name="new.pdf"
        )

        assert second.version == 2
        previous = await documents.get(first.id)
        assert previous is not None
        assert previous.is_latest is False

        latest = await document_service.list(admin, process.id)
        assert [d.id for d in latest] == [second.id]
        history = await document_service.get_version_history(admin, first.id)
        assert [d.version for d in history] == [2, 1]

    @pytest.mark.asyncio
    async def test_upload_fills_empty_slot(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        client: UserProfile,
        passport: DocumentType,
        requirement: DocumentRequirement,
        slot: DocumentDelivered,
        process: IndividualProcess,
    ) -> None:
        """An empty slot of the same type and requirement is filled in place."""
        document = await _upload(
            document_service,
            storage,
            client,
            process,
            passport,
            document_requirement_id=requirement.id,
        )

        assert document.id == slot.id
        assert document.version == 1
        assert document.status == DocumentStatus.UPLOADED
        assert document.company_id == slot.company_id

    @pytest.mark.asyncio
    async def test_upload_for_pending(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        activity_logs: ActivityLogRepositoryStub,
        client: UserProfile,
        slot: DocumentDelivered,
    ) -> None:
        """A slot can be addressed directly; a filled one refuses more files."""
        stored = await storage.put(PDF_BYTES)

        filled = await document_service.upload_for_pending(
            client, slot.id, stored.token, "passport.pdf", issue_date="2020-01-01"
        )

        assert filled.status == DocumentStatus.UPLOADED
        assert filled.issue_date == "2020-01-01"
        assert activity_logs.entries[-1].action == "uploaded_pending"

        again = await storage.put(PDF_BYTES)
        with pytest.raises(ValidationError, match="already has a file"):
            await document_service.upload_for_pending(
                client, slot.id, again.token, "passport.pdf"
            )

    @pytest.mark.asyncio
    async def test_outsider_cannot_upload(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        outsider: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """Clients only upload for their company's processes."""
        with pytest.raises(AccessDeniedError, match="upload documents"):
            await _upload(document_service, storage, outsider, process, passport)

    @pytest.mark.asyncio
    async def test_requirement_must_match_type(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        document_types: DocumentTypeRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        requirement: DocumentRequirement,
    ) -> None:
        """A requirement for another type is refused."""
        diploma = DocumentType(id=uuid4(), name="Diploma")
        await document_types.save(diploma)

        with pytest.raises(ValidationError, match="does not match"):
            await _upload(
                document_service,
                storage,
                admin,
                process,
                diploma,
                document_requirement_id=requirement.id,
            )

    @pytest.mark.asyncio
    async def test_inactive_type_refused(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        document_types: DocumentTypeRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """Inactive types take no new uploads."""
        await document_types.save(passport.with_changes(is_active=False))

        with pytest.raises(ValidationError, match="not active"):
            await _upload(document_service, storage, admin, process, passport)


class TestConstraints:
    """Tests for format and size limits."""

    @pytest.mark.asyncio
    async def test_type_formats_enforced(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        admin: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """Extensions outside the type's list are refused."""
        with pytest.raises(UnsupportedFileFormatError) as exc_info:
            await _upload(
                document_service, storage, admin, process, passport, file_name="scan.docx"
            )

        assert str(exc_info.value) == "File format not allowed. Allowed formats: pdf, jpg"

    @pytest.mark.asyncio
    async def test_global_limit_enforced(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        admin: UserProfile,
        process: IndividualProcess,
    ) -> None:
        """The configured global limit (1 MB here) applies to loose uploads."""
        stored = await storage.put(b"x" * (1024 * 1024 + 1))

        with pytest.raises(FileTooLargeError, match="maximum of 1 MB"):
            await document_service.upload_loose(admin, process.id, stored.token, "big.pdf")

    def test_check_file_constraints(self) -> None:
        """Extensions compare case-insensitively; no limits means anything goes."""
        check_file_constraints("SCAN.PDF", 10, ("pdf",), 1)
        check_file_constraints("no-extension", 10**9)

        with pytest.raises(UnsupportedFileFormatError):
            check_file_constraints("no-extension", 10, ("pdf",))
        with pytest.raises(FileTooLargeError):
            check_file_constraints("a.pdf", 2 * 1024 * 1024 + 1, ("pdf",), 2)


class TestLooseDocuments:
    """Tests for untyped uploads and type assignment."""

    @pytest.mark.asyncio
    async def test_assign_type_joins_history(
        self,
        document_service: DocumentService,
        documents: DocumentRepositoryStub,
        storage: FileStorageStub,
        admin: UserProfile,
        client: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """A typed loose document becomes the latest version of its type."""
        existing = await _upload(document_service, storage, admin, process, passport)
        stored = await storage.put(PDF_BYTES)
        loose = await document_service.upload_loose(
            client, process.id, stored.token, "scan.pdf"
        )

        assert loose.document_type_id is None
        groups = await document_service.list_grouped_by_category(client, process.id)
        assert [d.id for d in groups.loose] == [loose.id]

        typed = await document_service.assign_type(client, loose.id, passport.id)

        assert typed.document_type_id == passport.id
        assert typed.version == 2
        assert typed.is_required is False
        previous = await documents.get(existing.id)
        assert previous is not None
        assert previous.is_latest is False

        with pytest.raises(DocumentAlreadyTypedError):
            await document_service.assign_type(client, loose.id, passport.id)

    @pytest.mark.asyncio
    async def test_loose_history_is_itself(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        admin: UserProfile,
        process: IndividualProcess,
    ) -> None:
        """Untyped documents have no shared history."""
        stored = await storage.put(PDF_BYTES)
        loose = await document_service.upload_loose(admin, process.id, stored.token, "a.pdf")

        assert await document_service.get_version_history(admin, loose.id) == [loose]


class TestReview:
    """Tests for approval, rejection and removal."""

    @pytest.mark.asyncio
    async def test_approve_notifies_uploader(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        notifications: NotificationRepositoryStub,
        admin: UserProfile,
        client: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """The uploader hears about the approval."""
        document = await _upload(document_service, storage, client, process, passport)

        approved = await document_service.approve(admin, document.id, notes="ok")

        assert approved.status == DocumentStatus.APPROVED
        assert approved.reviewed_by == admin.id
        inbox = await notifications.list_for_user(client.id)
        assert len(inbox) == 1
        assert inbox[0].type == NotificationType.DOCUMENT_APPROVED
        assert inbox[0].message == 'Your document "Passaporte" has been approved'

        with pytest.raises(DocumentAlreadyApprovedError):
            await document_service.approve(admin, document.id)

    @pytest.mark.asyncio
    async def test_reject_requires_reason(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        notifications: NotificationRepositoryStub,
        admin: UserProfile,
        client: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """A blank reason is refused; a real one reaches the uploader."""
        document = await _upload(document_service, storage, client, process, passport)

        with pytest.raises(RejectionReasonRequiredError):
            await document_service.reject(admin, document.id, "   ")

        rejected = await document_service.reject(admin, document.id, " Blurry scan ")

        assert rejected.rejection_reason == "Blurry scan"
        inbox = await notifications.list_for_user(client.id)
        assert inbox[0].message == 'Your document "Passaporte" was rejected: Blurry scan'

    @pytest.mark.asyncio
    async def test_client_cannot_review(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        client: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """Reviews are admin-only."""
        document = await _upload(document_service, storage, client, process, passport)

        with pytest.raises(AdminRequiredError):
            await document_service.approve(client, document.id)

    @pytest.mark.asyncio
    async def test_remove(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        admin: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
    ) -> None:
        """Removal hides the document; approved documents are kept."""
        document = await _upload(document_service, storage, admin, process, passport)
        kept = await _upload(
            document_service, storage, admin, process, passport, file_name="b.pdf"
        )
        await document_service.approve(admin, kept.id)

        removed = await document_service.remove(admin, document.id)

        assert removed.is_latest is False
        with pytest.raises(ApprovedDocumentDeletionError):
            await document_service.remove(admin, kept.id)


class TestQueries:
    """Tests for grouping, validity and file reads."""

    @pytest.mark.asyncio
    async def test_grouped_summary(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        admin: UserProfile,
        client: UserProfile,
        passport: DocumentType,
        requirement: DocumentRequirement,
        slot: DocumentDelivered,
        process: IndividualProcess,
    ) -> None:
        """Counts cover uploads and approvals per group."""
        before = await document_service.list_grouped_by_category(client, process.id)
        assert before.summary["totalRequired"] == 1
        assert before.summary["requiredUploaded"] == 0

        document = await _upload(
            document_service,
            storage,
            client,
            process,
            passport,
            document_requirement_id=requirement.id,
        )
        await document_service.approve(admin, document.id)

        after = await document_service.list_grouped_by_category(client, process.id)
        assert after.summary == {
            "totalRequired": 1,
            "totalOptional": 0,
            "totalLoose": 0,
            "requiredUploaded": 1,
            "requiredApproved": 1,
            "optionalUploaded": 0,
            "optionalApproved": 0,
        }

    @pytest.mark.asyncio
    async def test_list_filters_by_status(
        self,
        document_service: DocumentService,
        admin: UserProfile,
        slot: DocumentDelivered,
        process: IndividualProcess,
    ) -> None:
        """Status filters apply to latest versions."""
        pending = await document_service.list(
            admin, process.id, status=DocumentStatus.NOT_STARTED
        )
        approved = await document_service.list(
            admin, process.id, status=DocumentStatus.APPROVED
        )

        assert [d.id for d in pending] == [slot.id]
        assert approved == []

    @pytest.mark.asyncio
    async def test_validity_uses_requirement_override(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        templates: DocumentTemplateRepositoryStub,
        admin: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
        requirement: DocumentRequirement,
    ) -> None:
        """A requirement's validity_days replaces the type's."""
        await templates.save_requirement(
            DocumentRequirement(
                id=requirement.id,
                template_id=requirement.template_id,
                document_type_id=passport.id,
                validity_days=30,
            )
        )
        document = await _upload(
            document_service,
            storage,
            admin,
            process,
            passport,
            document_requirement_id=requirement.id,
            expiry_date="2024-09-01",
        )

        result = await document_service.check_validity(
            admin, document.id, today=date(2024, 6, 1)
        )

        assert result.status == ValidityStatus.VALID
        assert result.days_value == 92

    @pytest.mark.asyncio
    async def test_validity_without_rule(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        admin: UserProfile,
        process: IndividualProcess,
    ) -> None:
        """Loose documents have no rule."""
        stored = await storage.put(PDF_BYTES)
        loose = await document_service.upload_loose(admin, process.id, stored.token, "a.pdf")

        result = await document_service.check_validity(admin, loose.id)

        assert result.status == ValidityStatus.NO_RULE

    @pytest.mark.asyncio
    async def test_read_file(
        self,
        document_service: DocumentService,
        storage: FileStorageStub,
        client: UserProfile,
        process: IndividualProcess,
        passport: DocumentType,
        slot: DocumentDelivered,
    ) -> None:
        """Stored bytes come back; empty slots have no file."""
        document = await _upload(document_service, storage, client, process, passport)

        _, data = await document_service.read_file(client, document.id)

        assert data == PDF_BYTES
        with pytest.raises(EntityNotFoundError, match="Document file not found"):
            await document_service.read_file(client, slot.id)
