"""Supabase repository for chat history."""

from dataclasses import dataclass

from supabase import Client

from calorie_tracker.domain.summaries import ChatEntry
from calorie_tracker.services.chat import ChatRepository


@dataclass
class SupabaseChatRepository(ChatRepository):
    """Supabase-backed chat history."""

    client: Client

    def append_message(self, entry: ChatEntry) -> None:
        """Insert a chat_threads row."""
        self.client.table("chat_threads").insert(
            {
                "user_id": str(entry.user_id),
                "message": entry.message,
                "role": entry.role,
                "meal_id": str(entry.meal_id) if entry.meal_id else None,
            }
        ).execute()
