"""Supabase repository for daily summaries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import parse_date, parse_datetime, to_float
from calorie_tracker.domain.summaries import DailySummary, DailyTotals
from calorie_tracker.services.summaries import SummaryRepository


@dataclass
class SupabaseSummaryRepository(SummaryRepository):
    """Supabase implementation for daily summaries."""

    client: Client

    def get_summary(self, user_id: UUID, day: date) -> DailySummary | None:
        """Return the summary for a user-day."""
        response = (
            self.client.table("daily_summaries")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_summary(response.data[0])

    def create_summary(
        self, user_id: UUID, day: date, totals: DailyTotals, calorie_goal: float
    ) -> DailySummary:
        """Insert a summary row, upserting on (user_id, date)."""
        response = (
            self.client.table("daily_summaries")
            .upsert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    **_totals_payload(totals),
                    "calorie_goal": calorie_goal,
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create daily summary")
        return _parse_summary(response.data[0])

    def update_summary(
        self, user_id: UUID, day: date, totals: DailyTotals
    ) -> DailySummary | None:
        """Overwrite totals for an existing summary row."""
        response = (
            self.client.table("daily_summaries")
            .update(_totals_payload(totals))
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .execute()
        )
        if not response.data:
            return None
        return _parse_summary(response.data[0])


def _totals_payload(totals: DailyTotals) -> dict[str, object]:
    return {
        "total_calories": totals.calories,
        "total_protein": totals.protein,
        "total_carbs": totals.carbs,
        "total_fats": totals.fats,
        "meals_count": totals.meals_count,
        "updated_at": datetime.now(tz=UTC).isoformat(),
    }


def _parse_summary(row: dict[str, object]) -> DailySummary:
    return DailySummary(
        id=UUID(str(row["id"])) if row.get("id") else None,
        user_id=UUID(str(row["user_id"])),
        date=parse_date(row["date"]),
        total_calories=to_float(row.get("total_calories")),
        total_protein=to_float(row.get("total_protein")),
        total_carbs=to_float(row.get("total_carbs")),
        total_fats=to_float(row.get("total_fats")),
        calorie_goal=to_float(row.get("calorie_goal"), default=2000.0),
        meals_count=int(row.get("meals_count") or 0),
        updated_at=parse_datetime(row.get("updated_at")),
    )
