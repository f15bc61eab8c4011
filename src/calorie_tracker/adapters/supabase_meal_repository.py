"""Supabase repository for meals."""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    decode_json_field,
    parse_datetime,
    to_float,
)
from calorie_tracker.domain.meals import AiAnalysis, Ingredient, Meal, NewMeal
from calorie_tracker.services.meals import MealRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(self, meal: NewMeal) -> Meal:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(meal.user_id),
                    "meal_name": meal.meal_name,
                    "meal_time": meal.meal_time.isoformat(),
                    "photo_url": meal.photo_url,
                    "total_calories": meal.total_calories,
                    "protein": meal.protein,
                    "carbs": meal.carbs,
                    "fats": meal.fats,
                    "ingredients": [asdict(item) for item in meal.ingredients],
                    "ai_analysis": (
                        asdict(meal.ai_analysis) if meal.ai_analysis else None
                    ),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return parse_meal(response.data[0])

    def get_meal(self, user_id: UUID, meal_id: UUID) -> Meal | None:
        """Return a meal owned by the user."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_meal(response.data[0])

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete a meal owned by the user."""
        response = (
            self.client.table("meals")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def list_meals(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime,
        newest_first: bool = False,
    ) -> list[Meal]:
        """Return the user's meals in [start, end)."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("meal_time", start.isoformat())
            .lt("meal_time", end.isoformat())
            .order("meal_time", desc=newest_first)
            .execute()
        )
        return [parse_meal(row) for row in response.data or []]


def parse_meal(row: dict[str, object]) -> Meal:
    """Build a Meal from a row."""
    meal_time = parse_datetime(row.get("meal_time"))
    if meal_time is None:
        raise ValueError("Meal row is missing meal_time")
    return Meal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_name=str(row.get("meal_name") or ""),
        meal_time=meal_time,
        total_calories=to_float(row.get("total_calories")),
        protein=to_float(row.get("protein")),
        carbs=to_float(row.get("carbs")),
        fats=to_float(row.get("fats")),
        ingredients=_parse_ingredients(row.get("ingredients")),
        ai_analysis=_parse_ai_analysis(row.get("ai_analysis")),
        photo_url=row.get("photo_url") or None,
        created_at=parse_datetime(row.get("created_at")),
    )


def _parse_ingredients(raw: object) -> list[Ingredient]:
    decoded = decode_json_field(raw, "ingredients")
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        _logger.warning("Ignoring non-list ingredients column")
        return []
    ingredients = []
    for item in decoded:
        if not isinstance(item, dict):
            continue
        ingredients.append(
            Ingredient(
                name=str(item.get("name") or ""),
                calories=to_float(item.get("calories")),
                protein=to_float(item.get("protein")),
                carbs=to_float(item.get("carbs")),
                fats=to_float(item.get("fats")),
            )
        )
    return ingredients


def _parse_ai_analysis(raw: object) -> AiAnalysis | None:
    decoded = decode_json_field(raw, "ai_analysis")
    if not isinstance(decoded, dict):
        return None
    confidence = decoded.get("confidence")
    items = decoded.get("identified_items")
    return AiAnalysis(
        vision_output=decoded.get("vision_output"),
        confidence=to_float(confidence) if confidence is not None else None,
        identified_items=(
            [str(item) for item in items] if isinstance(items, list) else []
        ),
    )
