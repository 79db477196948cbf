"""Supabase implementation of the key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from lunabloom.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores each key as a row with key and value columns."""

    client: Client
    table: str = "app_storage"

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set_item(self, key: str, value: str) -> None:
        """Insert or replace the row for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()

    def remove_item(self, key: str) -> None:
        """Delete the row for a key."""
        self.client.table(self.table).delete().eq("key", key).execute()

    def keys(self) -> list[str]:
        """Return all stored keys."""
        response = self.client.table(self.table).select("key").execute()
        return [row["key"] for row in response.data or []]
