"""Supabase repository for recommendations."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import parse_date, parse_datetime
from calorie_tracker.domain.summaries import Recommendation
from calorie_tracker.services.summaries import RecommendationRepository


@dataclass
class SupabaseRecommendationRepository(RecommendationRepository):
    """Supabase implementation for recommendations."""

    client: Client

    def create_recommendation(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        text: str,
        reason: str,
        priority: int,
    ) -> Recommendation:
        """Insert a recommendation row."""
        response = (
            self.client.table("recommendations")
            .insert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "recommendation_text": text,
                    "reason": reason,
                    "priority": priority,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create recommendation")
        return _parse_recommendation(response.data[0])

    def get_latest_recommendation(
        self, user_id: UUID, day: date
    ) -> Recommendation | None:
        """Return the newest recommendation for a user-day."""
        response = (
            self.client.table("recommendations")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recommendation(response.data[0])


def _parse_recommendation(row: dict[str, object]) -> Recommendation:
    return Recommendation(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=parse_date(row["date"]),
        recommendation_text=str(row.get("recommendation_text") or ""),
        reason=str(row.get("reason") or ""),
        priority=int(row.get("priority") or 1),
        created_at=parse_datetime(row.get("created_at")),
    )
