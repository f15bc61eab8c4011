"""Pydantic models for the HTTP API (camelCase on the wire)."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from calorie_tracker.domain.profiles import ActivityLevel


class ApiModel(BaseModel):
    """Base model accepting either camelCase or snake_case field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class LogMealRequest(ApiModel):
    """Body of POST /api/meals."""

    meal_name: str | None = Field(default=None, max_length=200)
    meal_time: datetime | None = None
    description: str = Field(min_length=1, max_length=1000)
    image_base64: str | None = None


class IngredientModel(ApiModel):
    """Ingredient with macros."""

    name: str
    calories: float
    protein: float
    carbs: float
    fats: float


class AiAnalysisModel(ApiModel):
    """Vision provenance of a meal."""

    vision_output: str | None
    confidence: float | None
    identified_items: list[str]


class MealAnalysisResponse(ApiModel):
    """Result of logging a meal."""

    meal_id: UUID
    meal_name: str
    total_calories: float
    protein: float
    carbs: float
    fats: float
    ingredients: list[IngredientModel]
    vision_analysis: str | None
    timestamp: datetime


class MealModel(ApiModel):
    """Stored meal."""

    id: UUID
    user_id: UUID
    meal_name: str
    meal_time: datetime
    photo_url: str | None
    total_calories: float
    protein: float
    carbs: float
    fats: float
    ingredients: list[IngredientModel]
    ai_analysis: AiAnalysisModel | None
    created_at: datetime | None


class DailySummaryModel(ApiModel):
    """Per-day totals."""

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


class RecommendationModel(ApiModel):
    """Latest coaching advice."""

    id: UUID
    user_id: UUID
    date: date
    recommendation_text: str
    reason: str
    priority: int
    created_at: datetime | None


class DailyOverviewResponse(ApiModel):
    """Body of GET /api/meals/daily-summary."""

    summary: DailySummaryModel
    recommendation: RecommendationModel | None
    meals: list[MealModel]


class CreateProfileRequest(ApiModel):
    """Body of POST /api/profile."""

    full_name: str = Field(min_length=1, max_length=100)
    birthdate: date
    gender: str = Field(min_length=1, max_length=50)
    current_weight: float = Field(gt=0, le=500)
    height: float = Field(gt=0, le=300)
    goal_weight: float | None = Field(default=None, gt=0, le=500)
    activity_level: ActivityLevel
    dietary_preferences: list[str] | None = None


class UpdateProfileRequest(ApiModel):
    """Body of PUT /api/profile; omitted fields are left unchanged."""

    full_name: str | None = Field(default=None, min_length=1, max_length=100)
    birthdate: date | None = None
    gender: str | None = Field(default=None, min_length=1, max_length=50)
    current_weight: float | None = Field(default=None, gt=0, le=500)
    height: float | None = Field(default=None, gt=0, le=300)
    goal_weight: float | None = Field(default=None, gt=0, le=500)
    activity_level: ActivityLevel | None = None
    dietary_preferences: list[str] | None = None


class ProfileResponse(ApiModel):
    """Stored profile."""

    id: UUID
    user_id: UUID
    full_name: str
    birthdate: date
    gender: str
    current_weight: float
    height: float
    goal_weight: float | None
    activity_level: str
    dietary_preferences: list[str] | None
    created_at: datetime | None
    updated_at: datetime | None
