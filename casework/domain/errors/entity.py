"""Generic entity errors: not found, duplicate, still referenced."""

from __future__ import annotations

from casework.domain.exceptions import CaseworkError


class EntityNotFoundError(CaseworkError):
    """Raised when a referenced entity does not exist.

    Attributes:
        entity_type: Human-readable entity name (e.g. "Case status").
        entity_id: The identifier that was looked up.
    """

    def __init__(self, entity_type: str, entity_id: object) -> None:
        """Initialize the error.

        Args:
            entity_type: Human-readable entity name (e.g. "Case status").
            entity_id: The identifier that was looked up.
        """
        self.entity_type = entity_type
        self.entity_id = str(entity_id)
        super().__init__(f"{entity_type} not found")


class DuplicateEntityError(CaseworkError):
    """Raised when a unique attribute is already taken.

    Attributes:
        entity_type: Human-readable entity name.
        field: The attribute that must be unique.
        value: The conflicting value.
    """

    def __init__(
        self,
        entity_type: str,
        field: str,
        value: object,
        message: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            entity_type: Human-readable entity name.
            field: The attribute that must be unique.
            value: The conflicting value.
            message: Overrides the default message.
        """
        self.entity_type = entity_type
        self.field = field
        self.value = str(value)
        super().__init__(
            message or f"{entity_type} with {field} '{value}' already exists"
        )


class EntityInUseError(CaseworkError):
    """Raised when a change is refused because other records reference the entity.

    Attributes:
        entity_type: Human-readable entity name.
        entity_id: The referenced entity.
    """

    def __init__(self, entity_type: str, entity_id: object, message: str) -> None:
        self.entity_type = entity_type
        self.entity_id = str(entity_id)
        super().__init__(message)
