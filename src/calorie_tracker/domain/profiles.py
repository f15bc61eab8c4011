"""User profile domain models."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "Sedentary"
    LIGHTLY_ACTIVE = "Lightly Active"
    ACTIVE = "Active"
    VERY_ACTIVE = "Very Active"


@dataclass(frozen=True)
class UserProfile:
    """Profile captured during onboarding."""

    id: UUID
    user_id: UUID
    full_name: str
    birthdate: date
    gender: str
    current_weight: float
    height: float
    goal_weight: float | None
    activity_level: str
    dietary_preferences: list[str] | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
