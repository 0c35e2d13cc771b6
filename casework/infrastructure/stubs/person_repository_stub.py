"""In-memory person repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from casework.application.ports.person_repository import PersonRepositoryProtocol
from casework.domain.models.person import Person


class PersonRepositoryStub(PersonRepositoryProtocol):
    """In-memory PersonRepositoryProtocol."""

    def __init__(self) -> None:
        self._people: dict[UUID, Person] = {}

    async def save(self, person: Person) -> None:
        self._people[person.id] = person

    async def get(self, person_id: UUID) -> Person | None:
        return self._people.get(person_id)

    async def get_by_email(self, email: str) -> Person | None:
        email = email.lower()
        return next(
            (p for p in self._people.values() if p.email and p.email.lower() == email),
            None,
        )

    async def get_by_cpf(self, cpf: str) -> Person | None:
        return next((p for p in self._people.values() if p.cpf == cpf), None)

    async def list(self, search: str | None = None) -> list[Person]:
        people = list(self._people.values())
        if search:
            needle = search.casefold()
            people = [
                p
                for p in people
                if needle in p.full_name.casefold()
                or (p.email is not None and needle in p.email.casefold())
            ]
        people.sort(key=lambda p: p.full_name.casefold())
        return people

    def clear(self) -> None:
        self._people.clear()
