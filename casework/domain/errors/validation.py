"""Input validation errors raised by domain rules and services."""

from __future__ import annotations

from collections.abc import Iterable

from casework.domain.exceptions import CaseworkError


class ValidationError(CaseworkError):
    """Raised when input data violates a business rule.

    Attributes:
        field: The offending field (if a single field is at fault).
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidDateFormatError(ValidationError):
    """Raised when a calendar date is not in YYYY-MM-DD form."""

    def __init__(self, value: str, field: str = "date") -> None:
        self.value = value
        super().__init__("Invalid date format. Expected YYYY-MM-DD", field=field)


class InvalidFillableFieldsError(ValidationError):
    """Raised when data targets fields not configured as fillable.

    Attributes:
        invalid_fields: Names that were rejected, in input order.
    """

    def __init__(self, invalid_fields: Iterable[str], message: str | None = None) -> None:
        self.invalid_fields = list(invalid_fields)
        super().__init__(
            message
            or "Cannot fill fields that are not configured as fillable: "
            + ", ".join(self.invalid_fields)
        )
