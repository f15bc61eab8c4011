"""Meal logging endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.auth import require_user_id
from calorie_tracker.api.errors import bad_request, not_found
from calorie_tracker.api.models import (
    DailyOverviewResponse,
    LogMealRequest,
    MealAnalysisResponse,
)
from calorie_tracker.domain.meals import LogMealCommand

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MealAnalysisResponse,
)
async def log_meal(
    body: LogMealRequest,
    request: Request,
    response: Response,
    user_id: UUID = Depends(require_user_id),
) -> MealAnalysisResponse | JSONResponse:
    """Analyse and store a meal for the authenticated user."""
    container: AppContainer = request.app.state.container
    command = LogMealCommand(
        description=body.description,
        meal_name=body.meal_name,
        meal_time=_as_utc(body.meal_time),
        image_base64=body.image_base64,
    )
    try:
        result = await container.workflow_service.log_meal(user_id, command)
    except Exception as exc:
        _logger.exception("Failed to log meal", extra={"user_id": str(user_id)})
        return bad_request(container, exc, "Failed to log meal")
    response.headers["Location"] = f"/api/meals/{result.meal_id}"
    return MealAnalysisResponse.model_validate(result)


@router.delete(
    "/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_meal(
    meal_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user_id),
) -> Response:
    """Delete one of the user's meals."""
    container: AppContainer = request.app.state.container
    try:
        deleted = container.workflow_service.delete_meal(user_id, meal_id)
    except Exception as exc:
        _logger.exception("Failed to delete meal", extra={"meal_id": str(meal_id)})
        return bad_request(container, exc, "Failed to delete meal")
    if not deleted:
        return not_found("Meal not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/daily-summary", response_model=DailyOverviewResponse)
async def daily_summary(
    request: Request,
    day: date | None = Query(default=None, alias="date"),
    user_id: UUID = Depends(require_user_id),
) -> DailyOverviewResponse | JSONResponse:
    """Return the summary, latest recommendation and meals for a day."""
    container: AppContainer = request.app.state.container
    summary_service = container.summary_service
    try:
        overview = summary_service.get_daily_overview(
            user_id, day or summary_service.today()
        )
    except Exception as exc:
        _logger.exception(
            "Failed to load daily summary", extra={"user_id": str(user_id)}
        )
        return bad_request(container, exc, "Failed to load daily summary")
    return DailyOverviewResponse.model_validate(overview)


def _as_utc(moment: datetime | None) -> datetime | None:
    if moment is None or moment.tzinfo is not None:
        return moment
    return moment.replace(tzinfo=UTC)
