"""Access control errors.

Raised when a request has no resolvable actor or when the actor's role
or company does not allow the operation.
"""

from __future__ import annotations

from casework.domain.exceptions import CaseworkError


class AuthenticationRequiredError(CaseworkError):
    """Raised when no active user profile backs the request."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AccessDeniedError(CaseworkError):
    """Raised when the actor may not perform an operation.

    Attributes:
        user_id: The actor that was denied (if known).
    """

    def __init__(
        self,
        message: str = "Access denied",
        user_id: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable reason for the denial.
            user_id: The actor that was denied (if known).
        """
        self.user_id = user_id
        super().__init__(message)


class AdminRequiredError(AccessDeniedError):
    """Raised when an operation requires the admin role."""

    def __init__(self, user_id: str | None = None) -> None:
        super().__init__(
            "Access denied: This operation requires administrator privileges",
            user_id=user_id,
        )
