"""Document checklist generation for individual processes.

The checklist comes from the highest active template version matching
the process type (of the collective process, else of the individual
process) and the individual process's legal framework. One empty
not_started document slot is created per template requirement.
"""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from casework.application.ports.collective_process_repository import (
    CollectiveProcessRepositoryProtocol,
)
from casework.application.ports.document_catalog_repository import (
    DocumentTemplateRepositoryProtocol,
)
from casework.application.ports.document_repository import DocumentRepositoryProtocol
from casework.application.services.base import LoggingMixin
from casework.domain.models.document import DocumentDelivered, DocumentStatus
from casework.domain.models.document_catalog import DocumentTemplate
from casework.domain.models.individual_process import IndividualProcess
from casework.domain.models.user_profile import UserProfile


class DocumentChecklistService(LoggingMixin):
    """Creates the initial document slots of an individual process."""

    def __init__(
        self,
        collectives: CollectiveProcessRepositoryProtocol,
        templates: DocumentTemplateRepositoryProtocol,
        documents: DocumentRepositoryProtocol,
    ) -> None:
        self._collectives = collectives
        self._templates = templates
        self._documents = documents
        self._init_logger(component="documents")

    async def find_template(
        self, process_type_id: str | None, legal_framework_id: str | None
    ) -> DocumentTemplate | None:
        """Highest active version for a process type and legal framework."""
        if not process_type_id:
            return None
        candidates = [
            t
            for t in await self._templates.list(process_type_id=process_type_id)
            if t.matches(process_type_id, legal_framework_id)
        ]
        return max(candidates, key=lambda t: t.version, default=None)

    async def generate(
        self, actor: UserProfile, process: IndividualProcess
    ) -> list[DocumentDelivered]:
        """Create not_started slots for every requirement of the matching template.

        Returns:
            The created slots (empty when no process type or no template).
        """
        log = self._log_operation("generate_checklist", process_id=str(process.id))
        collective = (
            await self._collectives.get(process.collective_process_id)
            if process.collective_process_id
            else None
        )
        process_type_id = (
            collective.process_type_id if collective else None
        ) or process.process_type_id

        template = await self.find_template(process_type_id, process.legal_framework_id)
        if template is None:
            log.info(
                "no_matching_template",
                process_type_id=process_type_id,
                legal_framework_id=process.legal_framework_id,
            )
            return []

        created = []
        now = datetime.now(timezone.utc)
        for requirement in await self._templates.list_requirements(template.id):
            slot = DocumentDelivered(
                id=uuid4(),
                individual_process_id=process.id,
                document_type_id=requirement.document_type_id,
                document_requirement_id=requirement.id,
                person_id=process.person_id,
                company_id=collective.company_id if collective else None,
                status=DocumentStatus.NOT_STARTED,
                uploaded_by=actor.id,
                uploaded_at=now,
                is_required=requirement.is_required,
                version=1,
                is_latest=True,
            )
            await self._documents.save(slot)
            created.append(slot)

        log.info(
            "checklist_generated",
            template_id=str(template.id),
            template_version=template.version,
            slots=len(created),
        )
        return created
