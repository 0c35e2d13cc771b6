"""Actor and locale resolution for Casework requests.

The caller identifies itself with the X-User-Id header (the id of its
user profile). The profile must exist and be active.
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends, Header, HTTPException, Request, status

from casework.api.dependencies.casework import (
    get_access_control_service,
    get_casework_config,
)
from casework.api.errors import problem_detail, problem_from_error
from casework.application.services.access_control_service import AccessControlService
from casework.config import SUPPORTED_LOCALES
from casework.domain.errors.access import AuthenticationRequiredError
from casework.domain.models.user_profile import UserProfile

logger = structlog.get_logger(__name__)


async def get_current_actor(
    request: Request,
    x_user_id: Annotated[
        str | None,
        Header(description="User profile id of the caller."),
    ] = None,
    access: AccessControlService = Depends(get_access_control_service),
) -> UserProfile:
    """Resolve the active user profile behind the request.

    Raises:
        HTTPException 400: If X-User-Id is not a UUID.
        HTTPException 401: If it is missing, unknown or inactive.
    """
    log = logger.bind(component="actor_auth")
    user_id: UUID | None = None
    if x_user_id:
        try:
            user_id = UUID(x_user_id)
        except ValueError:
            log.warning("auth_failed", reason="invalid_user_id", user_id=x_user_id)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=problem_detail(
                    400,
                    "auth:invalid-user-id",
                    "Invalid User Id",
                    "Invalid user id format (must be UUID)",
                    request,
                ),
            ) from None

    try:
        return await access.get_actor(user_id)
    except AuthenticationRequiredError as e:
        log.warning("auth_failed", reason=str(e), user_id=x_user_id)
        raise problem_from_error(e, request) from None


def get_locale(
    accept_language: Annotated[str | None, Header()] = None,
) -> str:
    """First supported language of Accept-Language, else the default locale."""
    if accept_language:
        for part in accept_language.split(","):
            language = part.split(";")[0].strip().lower()[:2]
            if language in SUPPORTED_LOCALES:
                return language
    return get_casework_config().default_locale


CurrentActor = Annotated[UserProfile, Depends(get_current_actor)]
Locale = Annotated[str, Depends(get_locale)]
