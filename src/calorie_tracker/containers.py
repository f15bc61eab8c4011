"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.openai_analysis_client import OpenAIAnalysisClient
from calorie_tracker.adapters.supabase_chat_repository import SupabaseChatRepository
from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from calorie_tracker.adapters.supabase_recommendation_repository import (
    SupabaseRecommendationRepository,
)
from calorie_tracker.adapters.supabase_summary_repository import (
    SupabaseSummaryRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.analysis import AnalysisService
from calorie_tracker.services.background import BackgroundTaskRunner
from calorie_tracker.services.chat import ChatHistoryService
from calorie_tracker.services.profiles import ProfileService
from calorie_tracker.services.summaries import DailySummaryService
from calorie_tracker.services.workflow import MealWorkflowService

_SHUTDOWN_DRAIN_SECONDS = 10.0


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    summary_service: DailySummaryService
    profile_service: ProfileService
    workflow_service: MealWorkflowService
    task_runner: BackgroundTaskRunner
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    meal_repository = SupabaseMealRepository(supabase_client)
    summary_repository = SupabaseSummaryRepository(supabase_client)
    recommendation_repository = SupabaseRecommendationRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    chat_repository = SupabaseChatRepository(supabase_client)

    openai_client = OpenAIAnalysisClient.create(
        api_key=resolved_settings.openai_api_key,
        base_url=resolved_settings.openai_base_url,
    )
    analysis_service = AnalysisService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    summary_service = DailySummaryService(
        meal_repository=meal_repository,
        summary_repository=summary_repository,
        recommendation_repository=recommendation_repository,
        profile_repository=profile_repository,
        timezone_name=resolved_settings.reference_timezone,
    )
    task_runner = BackgroundTaskRunner()
    workflow_service = MealWorkflowService(
        analysis_service=analysis_service,
        meal_repository=meal_repository,
        summary_service=summary_service,
        profile_repository=profile_repository,
        recommendation_repository=recommendation_repository,
        chat_service=ChatHistoryService(chat_repository),
        task_runner=task_runner,
    )

    async def close_resources() -> None:
        await task_runner.drain(timeout=_SHUTDOWN_DRAIN_SECONDS)
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        summary_service=summary_service,
        profile_service=ProfileService(profile_repository),
        workflow_service=workflow_service,
        task_runner=task_runner,
        close_resources=close_resources,
    )
