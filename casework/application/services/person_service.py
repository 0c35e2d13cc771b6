"""Person service (applicants)."""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from casework.application.ports.person_repository import PersonRepositoryProtocol
from casework.application.services.access_control_service import AccessControlService
from casework.application.services.activity_log_service import ActivityLogService
from casework.application.services.base import LoggingMixin
from casework.application.services.reference_data_service import ReferenceDataService
from casework.domain.errors.entity import DuplicateEntityError, EntityNotFoundError
from casework.domain.errors.validation import ValidationError
from casework.domain.models.person import Person
from casework.domain.models.user_profile import UserProfile
from casework.domain.services.dates import validate_iso_date

ENTITY_TYPE = "person"


class PersonService(LoggingMixin):
    """Creates and looks up people. Email and CPF are unique."""

    def __init__(
        self,
        people: PersonRepositoryProtocol,
        access: AccessControlService,
        activity: ActivityLogService,
        reference: ReferenceDataService,
    ) -> None:
        self._people = people
        self._access = access
        self._activity = activity
        self._reference = reference
        self._init_logger(component="people")

    async def validate_new(self, full_name: str, email: str | None, cpf: str | None) -> None:
        """Check a new person's required name and unique email/CPF.

        Raises:
            ValidationError: If full_name is blank.
            DuplicateEntityError: If the email or CPF is taken.
        """
        if not full_name or not full_name.strip():
            raise ValidationError("Full name is required", field="full_name")
        if email and await self._people.get_by_email(email.strip().lower()):
            raise DuplicateEntityError(
                "Person", "email", email, message=f"Email {email} already exists"
            )
        if cpf and await self._people.get_by_cpf(cpf.strip()):
            raise DuplicateEntityError(
                "Person", "cpf", cpf, message=f"CPF {cpf} already exists"
            )

    async def create(
        self,
        actor: UserProfile,
        full_name: str,
        email: str | None = None,
        cpf: str | None = None,
        birth_date: str | None = None,
        **fields: Any,
    ) -> Person:
        """Create a person (admin only)."""
        self._access.require_admin(actor)
        return await self.register(actor, full_name, email, cpf, birth_date, **fields)

    async def register(
        self,
        actor: UserProfile,
        full_name: str,
        email: str | None = None,
        cpf: str | None = None,
        birth_date: str | None = None,
        action: str = "created",
        **fields: Any,
    ) -> Person:
        """Validate and store a person; the caller authorizes."""
        await self.validate_new(full_name, email, cpf)
        await self._reference.require_company(fields.get("company_id"))
        if birth_date:
            validate_iso_date(birth_date, field="birth_date")

        person = Person(
            id=uuid4(),
            full_name=full_name.strip(),
            email=email.strip().lower() if email else None,
            cpf=cpf.strip() if cpf else None,
            birth_date=birth_date,
            **fields,
        )
        await self._people.save(person)
        self._log_operation("register", person_id=str(person.id)).info("person_created")
        await self._activity.log_activity(
            actor.id,
            action,
            ENTITY_TYPE,
            person.id,
            {"fullName": person.full_name, "email": person.email},
        )
        return person

    async def get(self, actor: UserProfile, person_id: UUID) -> Person:
        person = await self._people.get(person_id)
        if person is None:
            raise EntityNotFoundError("Person", person_id)
        if not actor.is_admin and person.company_id != actor.company_id:
            self._access.require_company_access(actor, person.company_id)
        return person

    async def list(self, actor: UserProfile, search: str | None = None) -> list[Person]:
        """People matching search; clients only see their company's."""
        people = await self._people.list(search=search)
        if actor.is_admin:
            return people
        return [p for p in people if p.company_id and p.company_id == actor.company_id]
