"""
Application layer - Use cases and orchestration for Casework.

This layer contains:
- Ports (Protocol interfaces implemented by infrastructure)
- Application services coordinating domain rules and repositories

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, api
"""

__all__: list[str] = []
