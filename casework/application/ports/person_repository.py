"""Person repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from casework.domain.models.person import Person


class PersonRepositoryProtocol(Protocol):
    """Protocol for person storage.

    Methods:
        save: Insert or replace a person
        get: Retrieve by id
        get_by_email: Retrieve by (lower-cased) e-mail
        get_by_cpf: Retrieve by CPF
        list: List people, optionally filtered by a name/e-mail search
    """

    async def save(self, person: Person) -> None:
        ...

    async def get(self, person_id: UUID) -> Person | None:
        ...

    async def get_by_email(self, email: str) -> Person | None:
        ...

    async def get_by_cpf(self, cpf: str) -> Person | None:
        ...

    async def list(self, search: str | None = None) -> list[Person]:
        """List people ordered by name.

        Args:
            search: Case-insensitive substring matched against name and e-mail.
        """
        ...
