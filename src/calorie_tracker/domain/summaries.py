"""Domain models for daily summaries, recommendations and chat history."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from calorie_tracker.domain.meals import Meal


@dataclass(frozen=True)
class DailyTotals:
    """Macro sums over a set of meals."""

    calories: float
    protein: float
    carbs: float
    fats: float
    meals_count: int


@dataclass(frozen=True)
class DailySummary:
    """Materialized per-user, per-day macro totals."""

    id: UUID | None
    user_id: UUID
    date: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fats: float
    calorie_goal: float
    meals_count: int
    updated_at: datetime | None


@dataclass(frozen=True)
class Recommendation:
    """Advisory text generated from a summary and profile snapshot."""

    id: UUID
    user_id: UUID
    date: date
    recommendation_text: str
    reason: str
    priority: int
    created_at: datetime | None


@dataclass(frozen=True)
class ChatEntry:
    """Append-only chat history line."""

    user_id: UUID
    message: str
    role: str
    meal_id: UUID | None = None


@dataclass(frozen=True)
class DailyOverview:
    """Summary, latest recommendation and meals for one day."""

    summary: DailySummary
    recommendation: Recommendation | None
    meals: list[Meal]
