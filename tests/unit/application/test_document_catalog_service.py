"""Unit tests for DocumentCatalogService and DocumentChecklistService."""

from uuid import uuid4

import pytest

from casework.application.services import (
    DocumentCatalogService,
    DocumentChecklistService,
)
from casework.domain.errors.access import AdminRequiredError
from casework.domain.errors.entity import (
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
)
from casework.domain.models.collective_process import CollectiveProcess
from casework.domain.models.document import DocumentDelivered
from casework.domain.models.document_catalog import DocumentType, ValidityType
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.user_profile import UserProfile
from casework.infrastructure.stubs import DocumentRepositoryStub


@pytest.fixture
async def passport(catalog: DocumentCatalogService, admin: UserProfile) -> DocumentType:
    """A document type with a validity rule."""
    return await catalog.create_type(
        admin,
        "Passaporte",
        code="passport",
        validity_type=ValidityType.MIN_REMAINING,
        validity_days=180,
        allowed_file_types=[".PDF", "jpg"],
    )


class TestDocumentTypes:
    """Tests for document type maintenance."""

    @pytest.mark.asyncio
    async def test_formats_normalized(self, passport: DocumentType) -> None:
        """Formats are stored lower-case without dots."""
        assert passport.allowed_file_types == ("pdf", "jpg")
        assert passport.validity_type == ValidityType.MIN_REMAINING

    @pytest.mark.asyncio
    async def test_duplicate_code(
        self, catalog: DocumentCatalogService, admin: UserProfile, passport: DocumentType
    ) -> None:
        """Codes are unique."""
        with pytest.raises(DuplicateEntityError, match="already exists"):
            await catalog.create_type(admin, "Passport copy", code="passport")

    @pytest.mark.asyncio
    async def test_update_and_soft_remove(
        self, catalog: DocumentCatalogService, admin: UserProfile, passport: DocumentType
    ) -> None:
        """Updates apply; removal only deactivates."""
        updated = await catalog.update_type(admin, passport.id, max_file_size_mb=5)
        removed = await catalog.remove_type(admin, passport.id)

        assert updated.max_file_size_mb == 5
        assert removed.is_active is False
        assert await catalog.list_active_types() == []
        assert await catalog.list_types(include_inactive=True) == [removed]

    @pytest.mark.asyncio
    async def test_admin_only(
        self, catalog: DocumentCatalogService, client: UserProfile
    ) -> None:
        """Clients cannot edit the catalogue."""
        with pytest.raises(AdminRequiredError):
            await catalog.create_type(client, "Passaporte")


class TestTemplates:
    """Tests for versioned templates and their requirements."""

    @pytest.mark.asyncio
    async def test_versions_increase_per_process_type(
        self, catalog: DocumentCatalogService, admin: UserProfile
    ) -> None:
        """Each template of a type/framework pair is the next version."""
        first = await catalog.create_template(admin, "Work visa", "work-visa")
        second = await catalog.create_template(admin, "Work visa v2", "work-visa")
        other = await catalog.create_template(
            admin, "Work visa RN", "work-visa", legal_framework_id="rn-36"
        )

        assert (first.version, second.version, other.version) == (1, 2, 1)

    @pytest.mark.asyncio
    async def test_requirements_appended_in_order(
        self, catalog: DocumentCatalogService, admin: UserProfile, passport: DocumentType
    ) -> None:
        """Requirements without sort order go last."""
        template = await catalog.create_template(admin, "Work visa", "work-visa")
        first = await catalog.add_requirement(admin, template.id, passport.id)
        second = await catalog.add_requirement(
            admin, template.id, passport.id, allowed_formats=["PDF"]
        )

        assert (first.sort_order, second.sort_order) == (0, 1)
        assert second.allowed_formats == ("pdf",)
        assert await catalog.list_requirements(template.id) == [first, second]

    @pytest.mark.asyncio
    async def test_requirement_needs_known_type(
        self, catalog: DocumentCatalogService, admin: UserProfile
    ) -> None:
        """The required document type must exist."""
        template = await catalog.create_template(admin, "Work visa", "work-visa")

        with pytest.raises(EntityNotFoundError, match="Document type not found"):
            await catalog.add_requirement(admin, template.id, uuid4())

    @pytest.mark.asyncio
    async def test_clone_copies_requirements(
        self, catalog: DocumentCatalogService, admin: UserProfile, passport: DocumentType
    ) -> None:
        """A clone is the next version with the same requirements."""
        template = await catalog.create_template(admin, "Work visa", "work-visa")
        await catalog.add_requirement(admin, template.id, passport.id, max_size_mb=3)

        clone = await catalog.clone_template(admin, template.id, name="Work visa 2025")

        assert clone.version == 2
        assert clone.name == "Work visa 2025"
        copied = await catalog.list_requirements(clone.id)
        assert len(copied) == 1
        assert copied[0].document_type_id == passport.id
        assert copied[0].max_size_mb == 3
        assert copied[0].template_id == clone.id

    @pytest.mark.asyncio
    async def test_requirement_with_documents_cannot_be_removed(
        self,
        catalog: DocumentCatalogService,
        documents: DocumentRepositoryStub,
        admin: UserProfile,
        passport: DocumentType,
    ) -> None:
        """Delivered documents pin their requirement."""
        template = await catalog.create_template(admin, "Work visa", "work-visa")
        requirement = await catalog.add_requirement(admin, template.id, passport.id)
        await documents.save(
            DocumentDelivered(
                id=uuid4(),
                individual_process_id=uuid4(),
                document_type_id=passport.id,
                document_requirement_id=requirement.id,
            )
        )

        with pytest.raises(EntityInUseError, match="documents delivered"):
            await catalog.remove_requirement(admin, requirement.id)

    @pytest.mark.asyncio
    async def test_remove_requirement(
        self, catalog: DocumentCatalogService, admin: UserProfile, passport: DocumentType
    ) -> None:
        """Unused requirements are deleted."""
        template = await catalog.create_template(admin, "Work visa", "work-visa")
        requirement = await catalog.add_requirement(admin, template.id, passport.id)

        await catalog.remove_requirement(admin, requirement.id)

        assert await catalog.list_requirements(template.id) == []
        with pytest.raises(EntityNotFoundError):
            await catalog.remove_requirement(admin, requirement.id)


class TestChecklist:
    """Tests for DocumentChecklistService template selection."""

    @pytest.mark.asyncio
    async def test_highest_active_version_wins(
        self,
        catalog: DocumentCatalogService,
        checklist: DocumentChecklistService,
        admin: UserProfile,
    ) -> None:
        """Inactive versions are skipped."""
        v1 = await catalog.create_template(admin, "Work visa", "work-visa")
        v2 = await catalog.create_template(admin, "Work visa", "work-visa")
        await catalog.create_template(admin, "Work visa", "work-visa", is_active=False)

        found = await checklist.find_template("work-visa", None)

        assert found is not None
        assert found.id == v2.id
        assert found.id != v1.id

    @pytest.mark.asyncio
    async def test_framework_must_match(
        self,
        catalog: DocumentCatalogService,
        checklist: DocumentChecklistService,
        admin: UserProfile,
    ) -> None:
        """Templates for another legal framework do not apply."""
        await catalog.create_template(
            admin, "Work visa", "work-visa", legal_framework_id="rn-36"
        )

        assert await checklist.find_template("work-visa", None) is None
        assert await checklist.find_template(None, "rn-36") is None

    @pytest.mark.asyncio
    async def test_process_type_falls_back_to_process(
        self,
        catalog: DocumentCatalogService,
        checklist: DocumentChecklistService,
        admin: UserProfile,
        passport: DocumentType,
    ) -> None:
        """Without a collective the process's own type selects the template."""
        template = await catalog.create_template(admin, "Student", "student-visa")
        await catalog.add_requirement(admin, template.id, passport.id)
        process = IndividualProcess(
            id=uuid4(), person_id=uuid4(), process_type_id="student-visa"
        )

        slots = await checklist.generate(admin, process)

        assert len(slots) == 1
        assert slots[0].company_id is None
        assert slots[0].uploaded_by == admin.id

    @pytest.mark.asyncio
    async def test_collective_type_takes_precedence(
        self,
        catalog: DocumentCatalogService,
        checklist: DocumentChecklistService,
        admin: UserProfile,
        passport: DocumentType,
        collective: CollectiveProcess,
    ) -> None:
        """The collective's process type is preferred over the process's."""
        template = await catalog.create_template(admin, "Work visa", "work-visa")
        await catalog.add_requirement(admin, template.id, passport.id)
        process = IndividualProcess(
            id=uuid4(),
            person_id=uuid4(),
            collective_process_id=collective.id,
            process_type_id="student-visa",
        )

        slots = await checklist.generate(admin, process)

        assert len(slots) == 1
        assert slots[0].company_id == collective.company_id
