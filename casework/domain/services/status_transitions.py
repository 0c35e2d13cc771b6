"""Legacy workflow transition rules.

Before case statuses became a configurable catalogue, individual and
collective processes moved through fixed workflows. Codes from those
workflows are still validated against these matrices.

Rules:
- Staying in the same status is always valid.
- An unknown current status allows no transition.
"""

from __future__ import annotations

from enum import Enum


class IndividualWorkflowStatus(str, Enum):
    """Fixed workflow statuses of an individual process."""

    PENDING_DOCUMENTS = "pending_documents"
    DOCUMENTS_SUBMITTED = "documents_submitted"
    DOCUMENTS_APPROVED = "documents_approved"
    PREPARING_SUBMISSION = "preparing_submission"
    SUBMITTED_TO_GOVERNMENT = "submitted_to_government"
    UNDER_GOVERNMENT_REVIEW = "under_government_review"
    GOVERNMENT_APPROVED = "government_approved"
    GOVERNMENT_REJECTED = "government_rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CollectiveWorkflowStatus(str, Enum):
    """Fixed workflow statuses of a collective process."""

    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_I = IndividualWorkflowStatus
_C = CollectiveWorkflowStatus

INDIVIDUAL_TRANSITION_MATRIX: dict[str, frozenset[str]] = {
    _I.PENDING_DOCUMENTS.value: frozenset(
        {_I.DOCUMENTS_SUBMITTED.value, _I.CANCELLED.value}
    ),
    _I.DOCUMENTS_SUBMITTED.value: frozenset(
        {_I.DOCUMENTS_APPROVED.value, _I.PENDING_DOCUMENTS.value, _I.CANCELLED.value}
    ),
    _I.DOCUMENTS_APPROVED.value: frozenset(
        {_I.PREPARING_SUBMISSION.value, _I.CANCELLED.value}
    ),
    _I.PREPARING_SUBMISSION.value: frozenset(
        {_I.SUBMITTED_TO_GOVERNMENT.value, _I.CANCELLED.value}
    ),
    _I.SUBMITTED_TO_GOVERNMENT.value: frozenset(
        {_I.UNDER_GOVERNMENT_REVIEW.value, _I.CANCELLED.value}
    ),
    _I.UNDER_GOVERNMENT_REVIEW.value: frozenset(
        {
            _I.GOVERNMENT_APPROVED.value,
            _I.GOVERNMENT_REJECTED.value,
            _I.CANCELLED.value,
        }
    ),
    _I.GOVERNMENT_APPROVED.value: frozenset({_I.COMPLETED.value, _I.CANCELLED.value}),
    _I.GOVERNMENT_REJECTED.value: frozenset(
        {_I.PENDING_DOCUMENTS.value, _I.CANCELLED.value}
    ),
    # Reopen for appeal
    _I.COMPLETED.value: frozenset({_I.UNDER_GOVERNMENT_REVIEW.value}),
    # Reactivation
    _I.CANCELLED.value: frozenset({_I.PENDING_DOCUMENTS.value}),
}

COLLECTIVE_TRANSITION_MATRIX: dict[str, frozenset[str]] = {
    _C.DRAFT.value: frozenset({_C.IN_PROGRESS.value, _C.CANCELLED.value}),
    _C.IN_PROGRESS.value: frozenset({_C.COMPLETED.value, _C.CANCELLED.value}),
    _C.COMPLETED.value: frozenset({_C.IN_PROGRESS.value}),
    _C.CANCELLED.value: frozenset({_C.IN_PROGRESS.value}),
}


def _is_valid(matrix: dict[str, frozenset[str]], current: str, new: str) -> bool:
    if current == new:
        return True
    allowed = matrix.get(current)
    if allowed is None:
        return False
    return new in allowed


def is_valid_individual_transition(current_status: str, new_status: str) -> bool:
    """Check an individual process workflow transition.

    Args:
        current_status: Current workflow code.
        new_status: Requested workflow code.

    Returns:
        True if the transition is allowed.
    """
    return _is_valid(INDIVIDUAL_TRANSITION_MATRIX, current_status, new_status)


def is_valid_collective_transition(current_status: str, new_status: str) -> bool:
    """Check a collective process workflow transition."""
    return _is_valid(COLLECTIVE_TRANSITION_MATRIX, current_status, new_status)


def next_allowed_individual_statuses(current_status: str) -> list[str]:
    """Statuses reachable from current_status, sorted (empty when unknown)."""
    return sorted(INDIVIDUAL_TRANSITION_MATRIX.get(current_status, frozenset()))


def next_allowed_collective_statuses(current_status: str) -> list[str]:
    return sorted(COLLECTIVE_TRANSITION_MATRIX.get(current_status, frozenset()))


def is_legacy_individual_status(code: str | None) -> bool:
    """True when code belongs to the fixed individual workflow."""
    return code is not None and code in INDIVIDUAL_TRANSITION_MATRIX
