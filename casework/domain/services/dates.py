"""Calendar date helpers (YYYY-MM-DD strings)."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

from casework.domain.errors.validation import InvalidDateFormatError

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today_iso() -> str:
    """Today's date in UTC as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def validate_iso_date(value: str, field: str = "date") -> str:
    """Validate a YYYY-MM-DD date string.

    Args:
        value: The date string.
        field: Field name reported on failure.

    Returns:
        The value unchanged.

    Raises:
        InvalidDateFormatError: If the value is not a real YYYY-MM-DD date.
    """
    if not ISO_DATE_PATTERN.match(value):
        raise InvalidDateFormatError(value, field=field)
    try:
        date.fromisoformat(value)
    except ValueError:
        raise InvalidDateFormatError(value, field=field) from None
    return value
