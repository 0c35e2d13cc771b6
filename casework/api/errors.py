"""RFC 7807 problem details for domain errors.

Routes catch CaseworkError and re-raise the HTTPException built here:

    try:
        ...
    except CaseworkError as e:
        raise problem_from_error(e, request) from None
"""

from typing import Any

from fastapi import HTTPException, Request

from casework.domain.errors import (
    AccessDeniedError,
    ApprovedDocumentDeletionError,
    AuthenticationRequiredError,
    DocumentAlreadyApprovedError,
    DocumentAlreadyTypedError,
    DuplicateEntityError,
    EntityInUseError,
    EntityNotFoundError,
    FileTooLargeError,
    InvalidFillableFieldsError,
    InvalidStatusTransitionError,
    ValidationError,
)
from casework.domain.exceptions import CaseworkError

ERROR_TYPE_PREFIX = "urn:casework:"

# First match wins; order subclasses before their bases.
_ERROR_MAP: tuple[tuple[type[CaseworkError], int, str, str], ...] = (
    (AuthenticationRequiredError, 401, "auth:required", "Authentication Required"),
    (AccessDeniedError, 403, "auth:forbidden", "Access Denied"),
    (EntityNotFoundError, 404, "entity:not-found", "Not Found"),
    (DuplicateEntityError, 409, "entity:duplicate", "Duplicate Entity"),
    (EntityInUseError, 409, "entity:in-use", "Entity In Use"),
    (DocumentAlreadyApprovedError, 409, "document:already-approved", "Already Approved"),
    (DocumentAlreadyTypedError, 409, "document:already-typed", "Already Typed"),
    (
        ApprovedDocumentDeletionError,
        409,
        "document:approved-deletion",
        "Approved Document",
    ),
    (
        InvalidStatusTransitionError,
        409,
        "status:invalid-transition",
        "Invalid Status Transition",
    ),
    (FileTooLargeError, 413, "document:file-too-large", "File Too Large"),
    (InvalidFillableFieldsError, 400, "validation:fillable-fields", "Invalid Fields"),
    (ValidationError, 400, "validation:invalid", "Validation Error"),
)


def problem_detail(
    status: int,
    type_suffix: str,
    title: str,
    detail: str,
    request: Request,
    **extensions: Any,
) -> dict[str, Any]:
    return {
        "type": f"{ERROR_TYPE_PREFIX}{type_suffix}",
        "title": title,
        "status": status,
        "detail": detail,
        "instance": str(request.url),
        **extensions,
    }


def problem_from_error(error: CaseworkError, request: Request) -> HTTPException:
    """Build the HTTPException for a domain error.

    Errors without a specific mapping are reported as 400 bad requests.
    """
    status, type_suffix, title = 400, "request:invalid", "Bad Request"
    for error_class, mapped_status, mapped_type, mapped_title in _ERROR_MAP:
        if isinstance(error, error_class):
            status, type_suffix, title = mapped_status, mapped_type, mapped_title
            break

    extensions: dict[str, Any] = {}
    if isinstance(error, ValidationError) and error.field:
        extensions["field"] = error.field
    if isinstance(error, InvalidFillableFieldsError):
        extensions["invalid_fields"] = list(error.invalid_fields)
    if isinstance(error, InvalidStatusTransitionError):
        extensions["allowed"] = list(error.allowed)

    return HTTPException(
        status_code=status,
        detail=problem_detail(status, type_suffix, title, str(error), request, **extensions),
    )
