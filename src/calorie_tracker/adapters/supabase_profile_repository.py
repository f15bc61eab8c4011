"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    decode_json_field,
    parse_date,
    parse_datetime,
    to_float,
)
from calorie_tracker.domain.profiles import UserProfile
from calorie_tracker.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Insert a profile row."""
        response = (
            self.client.table("user_profiles")
            .insert({"user_id": str(user_id), **_serialize(payload)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create profile")
        return _parse_profile(response.data[0])

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        """Patch the user's profile row."""
        response = (
            self.client.table("user_profiles")
            .update(
                {
                    **_serialize(changes),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])


def _serialize(payload: dict[str, object]) -> dict[str, object]:
    serialized: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, date):
            value = value.isoformat()
        serialized[key] = value
    return serialized


def _parse_profile(row: dict[str, object]) -> UserProfile:
    goal_weight = row.get("goal_weight")
    preferences = decode_json_field(
        row.get("dietary_preferences"), "dietary_preferences"
    )
    return UserProfile(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        full_name=str(row.get("full_name") or ""),
        birthdate=parse_date(row["birthdate"]),
        gender=str(row.get("gender") or ""),
        current_weight=to_float(row.get("current_weight")),
        height=to_float(row.get("height")),
        goal_weight=to_float(goal_weight) if goal_weight is not None else None,
        activity_level=str(row.get("activity_level") or ""),
        dietary_preferences=(
            [str(item) for item in preferences]
            if isinstance(preferences, list)
            else None
        ),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
