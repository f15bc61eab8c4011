"""User profile endpoints."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.auth import require_user_id
from calorie_tracker.api.errors import bad_request, not_found
from calorie_tracker.api.models import (
    CreateProfileRequest,
    ProfileResponse,
    UpdateProfileRequest,
)
from calorie_tracker.services.profiles import ProfileExistsError

if TYPE_CHECKING:
    from pydantic import BaseModel

    from calorie_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])

_PROFILE_NOT_FOUND = "Profile not found"


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=ProfileResponse
)
async def create_profile(
    body: CreateProfileRequest,
    request: Request,
    response: Response,
    user_id: UUID = Depends(require_user_id),
) -> ProfileResponse | JSONResponse:
    """Onboard the authenticated user."""
    container: AppContainer = request.app.state.container
    try:
        profile = container.profile_service.create_profile(
            user_id, _payload(body, exclude_unset=False)
        )
    except ProfileExistsError as exc:
        return bad_request(container, exc, str(exc))
    except Exception as exc:
        _logger.exception("Failed to create profile", extra={"user_id": str(user_id)})
        return bad_request(container, exc, "Failed to create profile")
    response.headers["Location"] = "/api/profile"
    return ProfileResponse.model_validate(profile)


@router.get("", response_model=ProfileResponse)
async def get_profile(
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> ProfileResponse | JSONResponse:
    """Return the authenticated user's profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    if profile is None:
        return not_found(_PROFILE_NOT_FOUND)
    return ProfileResponse.model_validate(profile)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    body: UpdateProfileRequest,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> ProfileResponse | JSONResponse:
    """Apply a partial update to the authenticated user's profile."""
    container: AppContainer = request.app.state.container
    try:
        profile = container.profile_service.update_profile(
            user_id, _payload(body, exclude_unset=True)
        )
    except Exception as exc:
        _logger.exception("Failed to update profile", extra={"user_id": str(user_id)})
        return bad_request(container, exc, "Failed to update profile")
    if profile is None:
        return not_found(_PROFILE_NOT_FOUND)
    return ProfileResponse.model_validate(profile)


def _payload(body: BaseModel, exclude_unset: bool) -> dict[str, object]:
    """Dump a request body to snake_case columns with enum values unwrapped."""
    payload: dict[str, object] = {}
    for key, value in body.model_dump(exclude_unset=exclude_unset).items():
        payload[key] = value.value if isinstance(value, Enum) else value
    return payload
