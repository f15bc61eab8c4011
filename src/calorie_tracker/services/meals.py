"""Meal persistence interface and meal-building helpers."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.analysis import NutrientBreakdown, VisionMealResult
from calorie_tracker.domain.meals import AiAnalysis, Ingredient, Meal, NewMeal
from calorie_tracker.domain.summaries import DailyTotals


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(self, meal: NewMeal) -> Meal:
        """Persist a meal and return the stored row."""

    def get_meal(self, user_id: UUID, meal_id: UUID) -> Meal | None:
        """Return a meal owned by the user, if present."""

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete a meal owned by the user; return False when nothing matched."""

    def list_meals(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime,
        newest_first: bool = False,
    ) -> list[Meal]:
        """Return the user's meals with start <= meal_time < end."""


def build_meal(  # noqa: PLR0913
    user_id: UUID,
    nutrition: NutrientBreakdown,
    vision: VisionMealResult | None,
    meal_name: str | None,
    meal_time: datetime | None,
    now: datetime,
) -> NewMeal:
    """Assemble a meal from the analysis results and caller overrides."""
    ingredients = [
        Ingredient(
            name=item.name,
            calories=item.calories,
            protein=item.protein,
            carbs=item.carbs,
            fats=item.fats,
        )
        for item in nutrition.ingredients
    ]
    ai_analysis = None
    if vision is not None:
        ai_analysis = AiAnalysis(
            vision_output=vision.description,
            confidence=vision.confidence,
            identified_items=list(vision.identified_items),
        )
    return NewMeal(
        user_id=user_id,
        meal_name=meal_name or nutrition.meal_name,
        meal_time=meal_time or now,
        total_calories=nutrition.total_calories,
        protein=nutrition.protein,
        carbs=nutrition.carbs,
        fats=nutrition.fats,
        ingredients=ingredients,
        ai_analysis=ai_analysis,
    )


def sum_meals(meals: list[Meal]) -> DailyTotals:
    """Sum macros over meals."""
    total = DailyTotals(calories=0.0, protein=0.0, carbs=0.0, fats=0.0, meals_count=0)
    for meal in meals:
        total = DailyTotals(
            calories=total.calories + meal.total_calories,
            protein=total.protein + meal.protein,
            carbs=total.carbs + meal.carbs,
            fats=total.fats + meal.fats,
            meals_count=total.meals_count + 1,
        )
    return total
