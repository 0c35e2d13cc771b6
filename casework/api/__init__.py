"""
API layer - FastAPI routes and HTTP concerns for Casework.

This layer contains:
- FastAPI route definitions
- Request/Response DTOs
- HTTP middleware
- Dependency wiring

IMPORT RULES:
- CAN import from: application, domain
- Uses dependency injection for infrastructure adapters
"""

__all__: list[str] = []
