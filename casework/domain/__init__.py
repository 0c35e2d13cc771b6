"""
Domain layer - Pure business logic for Casework.

This layer contains:
- Domain entities (processes, statuses, documents, etc.)
- Pure rules (status transitions, status calculation, document validity)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
Only stdlib and typing imports are allowed.
"""

from casework.domain.exceptions import CaseworkError

__all__: list[str] = ["CaseworkError"]
