"""In-memory reference data repositories for development and testing."""

from __future__ import annotations

from casework.application.ports.reference_data_repository import (
    CompanyRepositoryProtocol,
    LegalFrameworkRepositoryProtocol,
    ProcessTypeRepositoryProtocol,
)
from casework.domain.models.reference_data import Company, LegalFramework, ProcessType


class CompanyRepositoryStub(CompanyRepositoryProtocol):
    """In-memory CompanyRepositoryProtocol."""

    def __init__(self) -> None:
        self._companies: dict[str, Company] = {}

    async def save(self, company: Company) -> None:
        self._companies[company.id] = company

    async def get(self, company_id: str) -> Company | None:
        return self._companies.get(company_id)

    async def get_by_tax_id(self, tax_id: str) -> Company | None:
        return next((c for c in self._companies.values() if c.tax_id == tax_id), None)

    async def list(self, include_inactive: bool = False) -> list[Company]:
        companies = [c for c in self._companies.values() if include_inactive or c.is_active]
        companies.sort(key=lambda c: c.name.casefold())
        return companies

    def clear(self) -> None:
        self._companies.clear()


class ProcessTypeRepositoryStub(ProcessTypeRepositoryProtocol):
    """In-memory ProcessTypeRepositoryProtocol."""

    def __init__(self) -> None:
        self._types: dict[str, ProcessType] = {}

    async def save(self, process_type: ProcessType) -> None:
        self._types[process_type.id] = process_type

    async def get(self, process_type_id: str) -> ProcessType | None:
        return self._types.get(process_type_id)

    async def list(self, include_inactive: bool = False) -> list[ProcessType]:
        types = [t for t in self._types.values() if include_inactive or t.is_active]
        types.sort(key=lambda t: (t.sort_order, t.name.casefold()))
        return types

    def clear(self) -> None:
        self._types.clear()


class LegalFrameworkRepositoryStub(LegalFrameworkRepositoryProtocol):
    """In-memory LegalFrameworkRepositoryProtocol."""

    def __init__(self) -> None:
        self._frameworks: dict[str, LegalFramework] = {}

    async def save(self, framework: LegalFramework) -> None:
        self._frameworks[framework.id] = framework

    async def get(self, framework_id: str) -> LegalFramework | None:
        return self._frameworks.get(framework_id)

    async def list(
        self, process_type_id: str | None = None, include_inactive: bool = False
    ) -> list[LegalFramework]:
        frameworks = [
            f
            for f in self._frameworks.values()
            if (include_inactive or f.is_active)
            and (process_type_id is None or f.process_type_id == process_type_id)
        ]
        frameworks.sort(key=lambda f: f.name.casefold())
        return frameworks

    def clear(self) -> None:
        self._frameworks.clear()
