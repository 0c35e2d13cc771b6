"""Document validity rules.

A document type may carry a validity rule:

- min_remaining: the document must still be valid for at least N days
  (checked against its expiry date).
- max_age: the document must have been issued within the last N days
  (checked against its issue date).

A document within EXPIRING_SOON_THRESHOLD days of failing its rule is
reported as expiring soon.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from casework.domain.models.document_catalog import ValidityType

EXPIRING_SOON_THRESHOLD: int = 30


class ValidityStatus(str, Enum):
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    MISSING_DATE = "missing_date"
    NO_RULE = "no_rule"


@dataclass(frozen=True)
class ValidityCheckResult:
    """Outcome of a validity check.

    Attributes:
        status: The validity status.
        message_key: Translation key for the UI message.
        days_value: Days remaining, or days overdue for expired documents.
    """

    status: ValidityStatus
    message_key: str
    days_value: int | None = None


def _parse(value: str) -> date:
    return date.fromisoformat(value[:10])


def check_document_validity(
    validity_type: ValidityType | str | None,
    validity_days: int | None,
    issue_date: str | None,
    expiry_date: str | None,
    today: date | None = None,
    expiring_soon_threshold: int = EXPIRING_SOON_THRESHOLD,
) -> ValidityCheckResult:
    """Check a document against its type's validity rule.

    Args:
        validity_type: Rule kind, or None when the type has no rule.
        validity_days: Days used by the rule (0/None means no rule).
        issue_date: ISO issue date of the document.
        expiry_date: ISO expiry date of the document.
        today: Reference date (defaults to today).
        expiring_soon_threshold: Warning window in days.

    Returns:
        The validity result.

    Raises:
        ValueError: If a date is not ISO formatted.
    """
    if not validity_type or not validity_days:
        return ValidityCheckResult(ValidityStatus.NO_RULE, "validity.noRule")

    today = today or date.today()
    kind = ValidityType(validity_type)

    if kind == ValidityType.MIN_REMAINING:
        if not expiry_date:
            return ValidityCheckResult(
                ValidityStatus.MISSING_DATE, "validity.missingExpiryDate"
            )
        days_remaining = (_parse(expiry_date) - today).days
        if days_remaining < 0:
            return ValidityCheckResult(
                ValidityStatus.EXPIRED, "validity.expired", abs(days_remaining)
            )
        if days_remaining < validity_days:
            return ValidityCheckResult(
                ValidityStatus.EXPIRED, "validity.insufficientRemaining", days_remaining
            )
        if days_remaining < validity_days + expiring_soon_threshold:
            return ValidityCheckResult(
                ValidityStatus.EXPIRING_SOON, "validity.expiringSoon", days_remaining
            )
        return ValidityCheckResult(ValidityStatus.VALID, "validity.valid", days_remaining)

    if not issue_date:
        return ValidityCheckResult(ValidityStatus.MISSING_DATE, "validity.missingIssueDate")
    days_since_issue = (today - _parse(issue_date)).days
    days_left = validity_days - days_since_issue
    if days_left < 0:
        return ValidityCheckResult(
            ValidityStatus.EXPIRED, "validity.maxAgeExceeded", abs(days_left)
        )
    if days_left < expiring_soon_threshold:
        return ValidityCheckResult(
            ValidityStatus.EXPIRING_SOON, "validity.expiringSoon", days_left
        )
    return ValidityCheckResult(ValidityStatus.VALID, "validity.valid", days_left)
