"""Meal logging workflow.

Sequence for a logged meal:

1. parse the free-text description,
2. run vision analysis when a photo was supplied,
3. estimate nutrition from the description plus any vision output,
4. persist the meal,
5. recompute the daily summary for the meal's day,
6. spawn a detached recommendation task,
7. record the exchange in chat history (best effort),
8. return the analysis result.

Steps 1-5 are fatal on failure. Steps 6 and 7 never fail the request.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from calorie_tracker.domain.analysis import VisionMealResult
from calorie_tracker.domain.meals import LogMealCommand, MealAnalysisResult
from calorie_tracker.domain.summaries import ChatEntry, DailySummary
from calorie_tracker.services.analysis import AnalysisService, decode_image
from calorie_tracker.services.background import BackgroundTaskRunner
from calorie_tracker.services.chat import ChatHistoryService
from calorie_tracker.services.meals import MealRepository, build_meal
from calorie_tracker.services.profiles import ProfileRepository
from calorie_tracker.services.summaries import (
    DailySummaryService,
    RecommendationRepository,
)

_logger = logging.getLogger(__name__)


@dataclass
class MealWorkflowService:
    """Orchestrates analysis, persistence and follow-ups for logged meals."""

    analysis_service: AnalysisService
    meal_repository: MealRepository
    summary_service: DailySummaryService
    profile_repository: ProfileRepository
    recommendation_repository: RecommendationRepository
    chat_service: ChatHistoryService
    task_runner: BackgroundTaskRunner

    async def log_meal(
        self, user_id: UUID, command: LogMealCommand
    ) -> MealAnalysisResult:
        """Analyse, store and summarise a meal for the user."""
        _logger.info("Starting meal logging workflow", extra={"user_id": str(user_id)})
        try:
            parsed = await self.analysis_service.parse_input(command.description)
            _logger.info("Parsed meal input: %s", parsed.meal_name)

            vision: VisionMealResult | None = None
            if command.image_base64:
                _logger.info("Image provided, running vision analysis")
                vision = await self.analysis_service.analyze_image(
                    decode_image(command.image_base64)
                )
                _logger.info(
                    "Vision analysis complete: %s (confidence %.2f)",
                    vision.meal_name,
                    vision.confidence,
                )

            description = compose_description(parsed.description, vision)
            nutrition = await self.analysis_service.analyze_nutrition(
                description, vision
            )
            _logger.info(
                "Nutrition analysis complete: %s kcal",
                format_amount(nutrition.total_calories),
            )

            meal = self.meal_repository.create_meal(
                build_meal(
                    user_id=user_id,
                    nutrition=nutrition,
                    vision=vision,
                    meal_name=command.meal_name,
                    meal_time=command.meal_time,
                    now=datetime.now(tz=UTC),
                )
            )
            _logger.info("Meal saved", extra={"meal_id": str(meal.id)})

            day = self.summary_service.local_date(meal.meal_time)
            summary = self.summary_service.recompute_daily_summary(user_id, day)
        except Exception:
            _logger.exception(
                "Error in meal logging workflow", extra={"user_id": str(user_id)}
            )
            raise

        self.task_runner.spawn(
            self._create_recommendation(user_id, day, summary),
            name=f"recommendation:{user_id}",
        )

        self.chat_service.record(
            ChatEntry(
                user_id=user_id,
                message=command.description,
                role="user",
                meal_id=meal.id,
            )
        )
        self.chat_service.record(
            ChatEntry(
                user_id=user_id,
                message=(
                    f"Logged {nutrition.meal_name}: "
                    f"{format_amount(nutrition.total_calories)} calories"
                ),
                role="assistant",
                meal_id=meal.id,
            )
        )

        return MealAnalysisResult(
            meal_id=meal.id,
            meal_name=nutrition.meal_name,
            total_calories=nutrition.total_calories,
            protein=nutrition.protein,
            carbs=nutrition.carbs,
            fats=nutrition.fats,
            ingredients=meal.ingredients,
            vision_analysis=vision.description if vision else None,
            timestamp=meal.meal_time,
        )

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> bool:
        """Delete the user's meal and refresh that day's summary.

        Returns False when the meal does not exist or belongs to someone else.
        """
        meal = self.meal_repository.get_meal(user_id, meal_id)
        if meal is None:
            _logger.warning(
                "Meal not found for deletion",
                extra={"user_id": str(user_id), "meal_id": str(meal_id)},
            )
            return False
        if not self.meal_repository.delete_meal(user_id, meal_id):
            return False
        self.summary_service.recompute_daily_summary(
            user_id, self.summary_service.local_date(meal.meal_time)
        )
        _logger.info("Meal deleted", extra={"meal_id": str(meal_id)})
        return True

    async def _create_recommendation(
        self, user_id: UUID, day: date, summary: DailySummary
    ) -> None:
        profile = self.profile_repository.get_profile(user_id)
        if profile is None:
            _logger.info(
                "No profile, skipping recommendation", extra={"user_id": str(user_id)}
            )
            return
        result = await self.analysis_service.generate_recommendation(summary, profile)
        self.recommendation_repository.create_recommendation(
            user_id=user_id,
            day=day,
            text=result.recommendation,
            reason=result.reason,
            priority=result.priority,
        )
        _logger.info("Recommendation generated", extra={"user_id": str(user_id)})


def compose_description(description: str, vision: VisionMealResult | None) -> str:
    """Combine the parsed description with the vision description, if any."""
    if vision is None:
        return description
    return f"{description}\n\nIdentified from image: {vision.description}"


def format_amount(value: float) -> str:
    """Render a number at full precision without a trailing .0 for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
