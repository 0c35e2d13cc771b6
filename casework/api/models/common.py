"""Shared API models: problem details, bulk results, timestamps."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

from casework.domain.models.bulk_result import BulkOperationResult

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class ErrorResponse(BaseModel):
    """RFC 7807 problem document."""

    type: str = Field(..., description="URN identifying the error type")
    title: str
    status: int
    detail: str
    instance: str


class BulkFailureResponse(BaseModel):
    item: str = Field(..., description="Item id, person id, or 1-based row index")
    reason: str


class BulkOperationResponse(BaseModel):
    """Per-item outcome of a bulk operation."""

    successful: list[str]
    failed: list[BulkFailureResponse]
    total_processed: int

    @classmethod
    def from_result(cls, result: BulkOperationResult) -> "BulkOperationResponse":
        return cls(
            successful=result.successful,
            failed=[
                BulkFailureResponse(item=f.item, reason=f.reason) for f in result.failed
            ],
            total_processed=result.total_processed,
        )


class CountResponse(BaseModel):
    count: int
