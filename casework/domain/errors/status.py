"""Status workflow errors."""

from __future__ import annotations

from casework.domain.exceptions import CaseworkError


class InvalidStatusTransitionError(CaseworkError):
    """Raised when a legacy workflow status change is not allowed.

    Attributes:
        current_status: The status the record is in.
        target_status: The status that was requested.
        allowed: Statuses reachable from current_status.
    """

    def __init__(
        self,
        current_status: str,
        target_status: str,
        allowed: list[str] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            current_status: The status the record is in.
            target_status: The status that was requested.
            allowed: Statuses reachable from current_status.
        """
        self.current_status = current_status
        self.target_status = target_status
        self.allowed = allowed or []
        super().__init__(
            f"Invalid status transition from {current_status} to {target_status}"
        )


class NoIndividualProcessesError(CaseworkError):
    """Raised when a collective-wide status update finds no member processes."""

    def __init__(self, collective_process_id: str) -> None:
        self.collective_process_id = collective_process_id
        super().__init__("No individual processes found in this collective process")
