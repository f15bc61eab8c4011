"""Structured outputs returned by the analysis LLM."""

from pydantic import BaseModel, Field


class MealInputResult(BaseModel):
    """Meal information extracted from free text."""

    meal_name: str
    meal_time: str
    description: str
    has_image: bool


class VisionMealResult(BaseModel):
    """What the vision model saw in a meal photo."""

    meal_name: str
    identified_items: list[str]
    estimated_portions: str
    confidence: float = Field(ge=0.0, le=1.0)
    description: str


class IngredientDetail(BaseModel):
    """Per-ingredient nutrition."""

    name: str
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)


class NutrientBreakdown(BaseModel):
    """Nutrition totals for a meal with its ingredients."""

    meal_name: str
    total_calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)
    ingredients: list[IngredientDetail]


class RecommendationResult(BaseModel):
    """Coaching advice for the rest of the day."""

    recommendation: str
    reason: str
    priority: int = Field(ge=1, le=5)
    suggested_foods: list[str] = Field(default_factory=list)
