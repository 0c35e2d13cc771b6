"""Result of a bulk operation.

Bulk operations process every item independently. Failures are collected
with a reason and never abort the batch, so
len(successful) + len(failed) == total_processed always holds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BulkFailure:
    """One failed item of a bulk operation.

    Attributes:
        item: Identifier of the item (id, person id, or 1-based row index).
        reason: Human-readable failure reason.
    """

    item: str
    reason: str


@dataclass
class BulkOperationResult:
    """Accumulates per-item outcomes of a bulk operation.

    Attributes:
        successful: Identifiers of items that succeeded (or of the records
            they created).
        failed: Items that failed, with reasons.
    """

    successful: list[str] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)

    def record_success(self, item: object) -> None:
        self.successful.append(str(item))

    def record_failure(self, item: object, reason: str) -> None:
        self.failed.append(BulkFailure(item=str(item), reason=reason))

    @property
    def total_processed(self) -> int:
        return len(self.successful) + len(self.failed)

    def summary(self) -> dict[str, Any]:
        """Counts for activity logs and metrics."""
        return {
            "total_processed": self.total_processed,
            "successful": len(self.successful),
            "failed": len(self.failed),
        }
