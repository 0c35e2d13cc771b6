"""Fillable process fields.

A case status may ask the operator to fill some individual-process fields
(protocol number, DOU publication, ...) when it is recorded. Filled
values are stored on the status record and copied onto the process.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from casework.domain.errors.validation import InvalidFillableFieldsError
from casework.domain.models.individual_process import IndividualProcess

FILLABLE_PROCESS_FIELDS: frozenset[str] = frozenset(
    {
        "passport_id",
        "applicant_id",
        "process_type_id",
        "legal_framework_id",
        "cbo_id",
        "mre_office_number",
        "dou_number",
        "dou_section",
        "dou_page",
        "dou_date",
        "protocol_number",
        "rnm_number",
        "rnm_deadline",
        "appointment_date_time",
        "deadline_date",
    }
)


def validate_fillable_field_names(names: Iterable[str]) -> list[str]:
    """Check that every name is a known fillable process field.

    Returns:
        The names as a list, in input order.

    Raises:
        InvalidFillableFieldsError: If any name is unknown.
    """
    names = list(names)
    invalid = [n for n in names if n not in FILLABLE_PROCESS_FIELDS]
    if invalid:
        raise InvalidFillableFieldsError(
            invalid, message=f"Invalid field names: {', '.join(invalid)}"
        )
    return names


def validate_filled_data(data: Mapping[str, Any], fillable: Iterable[str]) -> None:
    """Check that data only targets configured fillable fields.

    Raises:
        InvalidFillableFieldsError: If any key is not in fillable.
    """
    allowed = set(fillable)
    invalid = [key for key in data if key not in allowed]
    if invalid:
        raise InvalidFillableFieldsError(invalid)


def normalize_field_value(value: Any) -> str | None:
    """Process fields are stored as text; empty values clear the field."""
    if value is None or value == "":
        return None
    return str(value)


def apply_filled_fields(
    process: IndividualProcess, data: Mapping[str, Any]
) -> IndividualProcess:
    """Return the process with the filled values copied onto it."""
    changes = {
        key: normalize_field_value(value)
        for key, value in data.items()
        if key in FILLABLE_PROCESS_FIELDS
    }
    if not changes:
        return process
    return process.with_changes(**changes)


def clear_filled_fields(
    process: IndividualProcess, names: Iterable[str]
) -> IndividualProcess:
    """Return the process with the named fillable fields cleared."""
    changes = {name: None for name in names if name in FILLABLE_PROCESS_FIELDS}
    if not changes:
        return process
    return process.with_changes(**changes)


def merge_fillable_data(
    process: IndividualProcess,
    fillable: Iterable[str],
    record_data: Mapping[str, Any],
) -> dict[str, Any]:
    """Current process values overlaid with the record's own filled data.

    Empty process values are omitted; the record's data wins on conflict.
    """
    merged: dict[str, Any] = {}
    for name in fillable:
        if name not in FILLABLE_PROCESS_FIELDS:
            continue
        value = process.field_value(name)
        if value not in (None, ""):
            merged[name] = value
    merged.update(record_data)
    return merged
