"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Ingredient:
    """Single ingredient with its macros."""

    name: str
    calories: float
    protein: float
    carbs: float
    fats: float


@dataclass(frozen=True)
class AiAnalysis:
    """Provenance of a meal analysed from a photo."""

    vision_output: str | None
    confidence: float | None
    identified_items: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NewMeal:
    """Meal built by the workflow before it is persisted."""

    user_id: UUID
    meal_name: str
    meal_time: datetime
    total_calories: float
    protein: float
    carbs: float
    fats: float
    ingredients: list[Ingredient]
    ai_analysis: AiAnalysis | None = None
    photo_url: str | None = None


@dataclass(frozen=True)
class Meal:
    """Persisted meal row."""

    id: UUID
    user_id: UUID
    meal_name: str
    meal_time: datetime
    total_calories: float
    protein: float
    carbs: float
    fats: float
    ingredients: list[Ingredient]
    ai_analysis: AiAnalysis | None
    photo_url: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class LogMealCommand:
    """Input for the meal logging workflow."""

    description: str
    meal_name: str | None = None
    meal_time: datetime | None = None
    image_base64: str | None = None


@dataclass(frozen=True)
class MealAnalysisResult:
    """Outcome of a logged meal returned to the caller."""

    meal_id: UUID
    meal_name: str
    total_calories: float
    protein: float
    carbs: float
    fats: float
    ingredients: list[Ingredient]
    vision_analysis: str | None
    timestamp: datetime
