"""User profile service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.profiles import UserProfile

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, if present."""

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Create and return a profile."""

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        """Patch a profile; return None when the user has none."""


class ProfileExistsError(ValueError):
    """Raised when onboarding is attempted twice for the same user."""


@dataclass
class ProfileService:
    """Application service for profile onboarding and edits."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile or None when onboarding has not happened."""
        return self.repository.get_profile(user_id)

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Create the user's profile."""
        if self.repository.get_profile(user_id) is not None:
            raise ProfileExistsError("Profile already exists")
        profile = self.repository.create_profile(user_id, payload)
        _logger.info("Profile created", extra={"user_id": str(user_id)})
        return profile

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        """Apply a partial update; fields set to None are left unchanged."""
        patch = {key: value for key, value in changes.items() if value is not None}
        return self.repository.update_profile(user_id, patch)
