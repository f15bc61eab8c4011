"""Meal analysis service backed by a structured-output LLM."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.analysis import (
    MealInputResult,
    NutrientBreakdown,
    RecommendationResult,
    VisionMealResult,
)
from calorie_tracker.domain.profiles import UserProfile
from calorie_tracker.domain.summaries import DailySummary

_logger = logging.getLogger(__name__)

MEAL_INPUT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "meal_name": {"type": "string"},
        "meal_time": {"type": "string"},
        "description": {"type": "string"},
        "has_image": {"type": "boolean"},
    },
    "required": ["meal_name", "meal_time", "description", "has_image"],
    "additionalProperties": False,
}

VISION_MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "meal_name": {"type": "string"},
        "identified_items": {"type": "array", "items": {"type": "string"}},
        "estimated_portions": {"type": "string"},
        "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
        "description": {"type": "string"},
    },
    "required": [
        "meal_name",
        "identified_items",
        "estimated_portions",
        "confidence",
        "description",
    ],
    "additionalProperties": False,
}

NUTRIENT_BREAKDOWN_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "meal_name": {"type": "string"},
        "total_calories": {"type": "number", "minimum": 0.0},
        "protein": {"type": "number", "minimum": 0.0},
        "carbs": {"type": "number", "minimum": 0.0},
        "fats": {"type": "number", "minimum": 0.0},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "calories": {"type": "number", "minimum": 0.0},
                    "protein": {"type": "number", "minimum": 0.0},
                    "carbs": {"type": "number", "minimum": 0.0},
                    "fats": {"type": "number", "minimum": 0.0},
                },
                "required": ["name", "calories", "protein", "carbs", "fats"],
                "additionalProperties": False,
            },
        },
    },
    "required": [
        "meal_name",
        "total_calories",
        "protein",
        "carbs",
        "fats",
        "ingredients",
    ],
    "additionalProperties": False,
}

RECOMMENDATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "recommendation": {"type": "string"},
        "reason": {"type": "string"},
        "priority": {"type": "integer", "minimum": 1, "maximum": 5},
        "suggested_foods": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["recommendation", "reason", "priority", "suggested_foods"],
    "additionalProperties": False,
}

_PARSE_INSTRUCTIONS = (
    "You are a meal parsing assistant. Extract meal information from user input. "
    "Return meal_name (the name of the meal), meal_time (ISO 8601 datetime, use "
    "the current time if not specified), description (a detailed description of "
    "what the user ate) and has_image (always false)."
)

_VISION_INSTRUCTIONS = (
    "You are a food vision analysis expert. Analyze the food image and return "
    "meal_name (the main meal), identified_items (each food you can see), "
    "estimated_portions (portion sizes), confidence (0-1) and description "
    "(a detailed description of the meal)."
)

_NUTRITION_INSTRUCTIONS = (
    "You are a nutrition expert. Analyze the meal and provide a detailed "
    "nutritional breakdown: meal_name, total_calories, protein, carbs and fats "
    "in grams, and ingredients with individual nutrition (name, calories, "
    "protein, carbs, fats). Be as accurate as possible based on standard "
    "serving sizes."
)

_RECOMMENDATION_INSTRUCTIONS = (
    "You are a nutrition coach providing personalized recommendations. Return "
    "recommendation (a friendly, actionable suggestion in 1-2 sentences), reason "
    "(one sentence), priority (1=low to 5=critical) and suggested_foods (2-3 "
    "specific foods). Be encouraging and specific."
)


class AnalysisClient(Protocol):
    """Interface for structured LLM completions."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        content: list[dict[str, str]],
        schema_name: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return the decoded JSON object produced for the schema."""


@dataclass
class AnalysisService:
    """Service that builds analysis prompts and validates the results."""

    client: AnalysisClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def parse_input(self, text: str) -> MealInputResult:
        """Extract a meal name, time and description from free text."""
        raw = await self._complete(
            instructions=_PARSE_INSTRUCTIONS,
            content=[{"type": "input_text", "text": text}],
            schema_name="meal_input",
            schema=MEAL_INPUT_SCHEMA,
        )
        return MealInputResult.model_validate(raw)

    async def analyze_image(self, image_bytes: bytes) -> VisionMealResult:
        """Describe the meal visible in a photo."""
        raw = await self._complete(
            instructions=_VISION_INSTRUCTIONS,
            content=[
                {
                    "type": "input_text",
                    "text": "Analyze this food image and tell me what meal this is",
                },
                {"type": "input_image", "image_url": _to_data_url(image_bytes)},
            ],
            schema_name="vision_meal",
            schema=VISION_MEAL_SCHEMA,
        )
        return VisionMealResult.model_validate(raw)

    async def analyze_nutrition(
        self, description: str, vision: VisionMealResult | None = None
    ) -> NutrientBreakdown:
        """Estimate macros for a described meal."""
        raw = await self._complete(
            instructions=_NUTRITION_INSTRUCTIONS,
            content=[
                {
                    "type": "input_text",
                    "text": description + _vision_context(vision),
                }
            ],
            schema_name="nutrient_breakdown",
            schema=NUTRIENT_BREAKDOWN_SCHEMA,
        )
        return NutrientBreakdown.model_validate(raw)

    async def generate_recommendation(
        self, summary: DailySummary, profile: UserProfile
    ) -> RecommendationResult:
        """Suggest what to eat next given today's intake and the profile."""
        raw = await self._complete(
            instructions=_RECOMMENDATION_INSTRUCTIONS,
            content=[
                {
                    "type": "input_text",
                    "text": build_recommendation_context(summary, profile),
                }
            ],
            schema_name="recommendation",
            schema=RECOMMENDATION_SCHEMA,
        )
        return RecommendationResult.model_validate(raw)

    async def _complete(
        self,
        *,
        instructions: str,
        content: list[dict[str, str]],
        schema_name: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        _logger.info("Requesting %s analysis", schema_name, extra={"model": self.model})
        return await self.client.complete(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            instructions=instructions,
            content=content,
            schema_name=schema_name,
            schema=schema,
        )


def build_recommendation_context(summary: DailySummary, profile: UserProfile) -> str:
    """Render the profile and today's intake for the recommendation prompt."""
    goal = summary.calorie_goal
    remaining = goal - summary.total_calories
    protein_pct = _percent_of_goal(summary.total_protein * 4, goal)
    carbs_pct = _percent_of_goal(summary.total_carbs * 4, goal)
    fats_pct = _percent_of_goal(summary.total_fats * 9, goal)
    goal_weight = (
        profile.goal_weight
        if profile.goal_weight is not None
        else profile.current_weight
    )
    preferences = ", ".join(profile.dietary_preferences or [])
    lines = [
        "User Profile:",
        f"- Activity Level: {profile.activity_level}",
        f"- Current Weight: {profile.current_weight:g} kg",
        f"- Goal Weight: {goal_weight:g} kg",
        f"- Dietary Preferences: {preferences}",
        "",
        "Today's Intake:",
        f"- Calories: {summary.total_calories:.0f} / {goal:.0f} "
        f"(Remaining: {remaining:.0f})",
        f"- Protein: {summary.total_protein:.1f}g ({protein_pct:.1f}% of calories)",
        f"- Carbs: {summary.total_carbs:.1f}g ({carbs_pct:.1f}% of calories)",
        f"- Fats: {summary.total_fats:.1f}g ({fats_pct:.1f}% of calories)",
        f"- Meals eaten: {summary.meals_count}",
        "",
        "Generate a smart, actionable recommendation for what the user should eat "
        "next or how to adjust their intake.",
    ]
    return "\n".join(lines)


def _percent_of_goal(calories: float, goal: float) -> float:
    if goal <= 0:
        return 0.0
    return calories / goal * 100


def _vision_context(vision: VisionMealResult | None) -> str:
    if vision is None:
        return ""
    return (
        "\n\nAdditional context from image analysis:"
        f"\nMeal: {vision.meal_name}"
        f"\nItems identified: {', '.join(vision.identified_items)}"
        f"\nPortions: {vision.estimated_portions}"
    )


def decode_image(image_base64: str) -> bytes:
    """Decode a base64 image, accepting an optional data URL prefix."""
    payload = image_base64.strip()
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", maxsplit=1)[1]
    return base64.b64decode(payload, validate=True)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
