"""Best-effort chat history recording."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.summaries import ChatEntry

_logger = logging.getLogger(__name__)


class ChatRepository(Protocol):
    """Persistence interface for chat history."""

    def append_message(self, entry: ChatEntry) -> None:
        """Append a chat line."""


@dataclass
class ChatHistoryService:
    """Records chat lines; failures are logged and dropped."""

    repository: ChatRepository

    def record(self, entry: ChatEntry) -> bool:
        """Append a chat line and report whether it was stored."""
        try:
            self.repository.append_message(entry)
        except Exception:
            _logger.exception(
                "Failed to save chat message",
                extra={"user_id": str(entry.user_id), "role": entry.role},
            )
            return False
        return True
