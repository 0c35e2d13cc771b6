"""Reference data repository ports (companies, process types, legal frameworks)."""

from __future__ import annotations

from typing import Protocol

from casework.domain.models.reference_data import Company, LegalFramework, ProcessType


class CompanyRepositoryProtocol(Protocol):
    """Protocol for company storage."""

    async def save(self, company: Company) -> None:
        ...

    async def get(self, company_id: str) -> Company | None:
        ...

    async def get_by_tax_id(self, tax_id: str) -> Company | None:
        ...

    async def list(self, include_inactive: bool = False) -> list[Company]:
        """List companies ordered by name."""
        ...


class ProcessTypeRepositoryProtocol(Protocol):
    """Protocol for process type storage."""

    async def save(self, process_type: ProcessType) -> None:
        ...

    async def get(self, process_type_id: str) -> ProcessType | None:
        ...

    async def list(self, include_inactive: bool = False) -> list[ProcessType]:
        """List process types ordered by sort_order, then name."""
        ...


class LegalFrameworkRepositoryProtocol(Protocol):
    """Protocol for legal framework storage."""

    async def save(self, framework: LegalFramework) -> None:
        ...

    async def get(self, framework_id: str) -> LegalFramework | None:
        ...

    async def list(
        self, process_type_id: str | None = None, include_inactive: bool = False
    ) -> list[LegalFramework]:
        """List legal frameworks ordered by name."""
        ...
