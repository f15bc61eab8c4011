"""Daily summary aggregation over logged meals."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from calorie_tracker.domain.meals import Meal
from calorie_tracker.domain.summaries import (
    DailyOverview,
    DailySummary,
    DailyTotals,
    Recommendation,
)
from calorie_tracker.services.goals import (
    DEFAULT_CALORIE_GOAL,
    calculate_calorie_goal,
)
from calorie_tracker.services.meals import MealRepository, sum_meals
from calorie_tracker.services.profiles import ProfileRepository

_logger = logging.getLogger(__name__)


class SummaryRepository(Protocol):
    """Persistence interface for daily summaries."""

    def get_summary(self, user_id: UUID, day: date) -> DailySummary | None:
        """Return the summary row for a user-day, if present."""

    def create_summary(
        self, user_id: UUID, day: date, totals: DailyTotals, calorie_goal: float
    ) -> DailySummary:
        """Insert the summary row for a user-day."""

    def update_summary(
        self, user_id: UUID, day: date, totals: DailyTotals
    ) -> DailySummary | None:
        """Overwrite totals and meal count of an existing row."""


class RecommendationRepository(Protocol):
    """Persistence interface for recommendations."""

    def create_recommendation(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        text: str,
        reason: str,
        priority: int,
    ) -> Recommendation:
        """Persist a recommendation."""

    def get_latest_recommendation(
        self, user_id: UUID, day: date
    ) -> Recommendation | None:
        """Return the most recent recommendation for a user-day."""


@dataclass
class DailySummaryService:
    """Recomputes and reads per-day macro totals in a reference timezone."""

    meal_repository: MealRepository
    summary_repository: SummaryRepository
    recommendation_repository: RecommendationRepository
    profile_repository: ProfileRepository
    timezone_name: str = "UTC"

    def today(self) -> date:
        """Return the current date in the reference timezone."""
        return datetime.now(tz=self._tz).date()

    def local_date(self, moment: datetime) -> date:
        """Return the reference-timezone date of an instant."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        return moment.astimezone(self._tz).date()

    def list_meals(
        self, user_id: UUID, day: date, newest_first: bool = False
    ) -> list[Meal]:
        """Return the user's meals logged on a calendar day."""
        start, end = self.day_bounds(day)
        return self.meal_repository.list_meals(
            user_id, start, end, newest_first=newest_first
        )

    def recompute_daily_summary(self, user_id: UUID, day: date) -> DailySummary:
        """Recompute the full totals for a user-day and store them.

        An existing row keeps its calorie goal; a new row gets the goal derived
        from the current profile.
        """
        totals = sum_meals(self.list_meals(user_id, day))
        existing = self.summary_repository.get_summary(user_id, day)
        if existing is not None:
            updated = self.summary_repository.update_summary(user_id, day, totals)
            if updated is None:
                raise RuntimeError("Failed to update daily summary")
            summary = updated
        else:
            profile = self.profile_repository.get_profile(user_id)
            goal = calculate_calorie_goal(profile, today=self.today())
            summary = self.summary_repository.create_summary(user_id, day, totals, goal)
        _logger.info(
            "Daily summary recomputed: %.0f / %.0f kcal",
            summary.total_calories,
            summary.calorie_goal,
            extra={"user_id": str(user_id), "day": day.isoformat()},
        )
        return summary

    def get_daily_overview(self, user_id: UUID, day: date) -> DailyOverview:
        """Return the summary, latest recommendation and meals for a day."""
        summary = self.summary_repository.get_summary(user_id, day)
        if summary is None:
            summary = _empty_summary(user_id, day, DEFAULT_CALORIE_GOAL)
        recommendation = self.recommendation_repository.get_latest_recommendation(
            user_id, day
        )
        meals = self.list_meals(user_id, day, newest_first=True)
        return DailyOverview(
            summary=summary, recommendation=recommendation, meals=meals
        )

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        """Return the UTC instants bounding a reference-timezone day."""
        start = datetime.combine(day, time.min, tzinfo=self._tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self._tz)
        return start.astimezone(UTC), end.astimezone(UTC)

    @property
    def _tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone_name)


def _empty_summary(user_id: UUID, day: date, calorie_goal: float) -> DailySummary:
    return DailySummary(
        id=None,
        user_id=user_id,
        date=day,
        total_calories=0.0,
        total_protein=0.0,
        total_carbs=0.0,
        total_fats=0.0,
        calorie_goal=calorie_goal,
        meals_count=0,
        updated_at=None,
    )
