"""Base exception classes for the Casework domain layer."""


class CaseworkError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    The API layer maps subclasses onto RFC 7807 problem responses.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message
