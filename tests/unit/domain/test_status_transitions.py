"""Unit tests for the legacy workflow transition matrices."""

import pytest

from casework.domain.services.status_transitions import (
    COLLECTIVE_TRANSITION_MATRIX,
    INDIVIDUAL_TRANSITION_MATRIX,
    CollectiveWorkflowStatus,
    IndividualWorkflowStatus,
    is_legacy_individual_status,
    is_valid_collective_transition,
    is_valid_individual_transition,
    next_allowed_collective_statuses,
    next_allowed_individual_statuses,
)


class TestIndividualTransitions:
    """Tests for the individual process workflow."""

    def test_every_status_has_a_row(self) -> None:
        """Every workflow status appears in the matrix."""
        assert set(INDIVIDUAL_TRANSITION_MATRIX) == {
            s.value for s in IndividualWorkflowStatus
        }

    @pytest.mark.parametrize(
        ("current", "new"),
        [
            ("pending_documents", "documents_submitted"),
            ("documents_submitted", "pending_documents"),
            ("under_government_review", "government_rejected"),
            ("government_rejected", "pending_documents"),
            ("completed", "under_government_review"),
            ("cancelled", "pending_documents"),
        ],
    )
    def test_allowed_transitions(self, current: str, new: str) -> None:
        """Listed transitions are valid."""
        assert is_valid_individual_transition(current, new) is True

    @pytest.mark.parametrize(
        ("current", "new"),
        [
            ("pending_documents", "completed"),
            ("documents_approved", "government_approved"),
            ("completed", "cancelled"),
            ("cancelled", "completed"),
        ],
    )
    def test_forbidden_transitions(self, current: str, new: str) -> None:
        """Transitions missing from the matrix are invalid."""
        assert is_valid_individual_transition(current, new) is False

    def test_same_status_is_always_valid(self) -> None:
        """Staying in place is valid, even for unknown codes."""
        assert is_valid_individual_transition("completed", "completed") is True
        assert is_valid_individual_transition("custom", "custom") is True

    def test_unknown_current_status_allows_nothing(self) -> None:
        """An unknown current code has no outgoing transitions."""
        assert is_valid_individual_transition("custom", "pending_documents") is False
        assert next_allowed_individual_statuses("custom") == []

    def test_next_allowed_is_sorted(self) -> None:
        """Reachable statuses are returned sorted."""
        assert next_allowed_individual_statuses("under_government_review") == [
            "cancelled",
            "government_approved",
            "government_rejected",
        ]

    def test_is_legacy_individual_status(self) -> None:
        """Only codes of the fixed workflow are legacy."""
        assert is_legacy_individual_status("documents_submitted") is True
        assert is_legacy_individual_status("em_preparacao") is False
        assert is_legacy_individual_status(None) is False


class TestCollectiveTransitions:
    """Tests for the collective process workflow."""

    def test_every_status_has_a_row(self) -> None:
        """Every collective workflow status appears in the matrix."""
        assert set(COLLECTIVE_TRANSITION_MATRIX) == {
            s.value for s in CollectiveWorkflowStatus
        }

    def test_draft_moves_forward_or_cancels(self) -> None:
        """A draft can start or be cancelled but not complete."""
        assert is_valid_collective_transition("draft", "in_progress") is True
        assert is_valid_collective_transition("draft", "cancelled") is True
        assert is_valid_collective_transition("draft", "completed") is False

    def test_completed_and_cancelled_can_reopen(self) -> None:
        """Finished collective processes reopen to in_progress."""
        assert next_allowed_collective_statuses("completed") == ["in_progress"]
        assert next_allowed_collective_statuses("cancelled") == ["in_progress"]
