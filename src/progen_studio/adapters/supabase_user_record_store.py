"""Supabase-backed user quota record store."""

import logging
from dataclasses import dataclass
from datetime import date

from supabase import AsyncClient

from progen_studio.domain.models import UserQuotaRecord
from progen_studio.services.users import RecordListener, Unsubscribe, UserRecordStore

logger = logging.getLogger(__name__)

_COLUMNS = "id, daily_quota, usage_count, last_usage_date"


@dataclass
class SupabaseUserRecordStore(UserRecordStore):
    """Supabase implementation with realtime change notification."""

    client: AsyncClient
    table: str = "users"
    schema: str = "public"

    async def fetch(self, user_id: str) -> UserQuotaRecord | None:
        """Return the current record for a user, if present."""
        response = (
            await self.client.table(self.table)
            .select(_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    async def subscribe(self, user_id: str, on_change: RecordListener) -> Unsubscribe:
        """Listen for row updates and deliver the current row immediately."""

        def handle(payload: dict[str, object]) -> None:
            row = _changed_row(payload)
            if row is None:
                logger.warning("Ignoring realtime payload without a record")
                return
            on_change(_to_record(row))

        channel = self.client.channel(f"user-record-{user_id}")
        channel.on_postgres_changes(
            "UPDATE",
            callback=handle,
            table=self.table,
            schema=self.schema,
            filter=f"id=eq.{user_id}",
        )
        await channel.subscribe()

        initial = await self.fetch(user_id)
        if initial is not None:
            on_change(initial)

        async def unsubscribe() -> None:
            await self.client.remove_channel(channel)

        return unsubscribe

    async def update(self, user_id: str, fields: dict[str, object]) -> None:
        """Merge fields into the user's row."""
        response = (
            await self.client.table(self.table)
            .update(fields)
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update user record {user_id}")


def _changed_row(payload: dict[str, object]) -> dict[str, object] | None:
    data = payload.get("data", payload)
    if not isinstance(data, dict):
        return None
    for key in ("record", "new"):
        row = data.get(key)
        if isinstance(row, dict) and row:
            return row
    return None


def _to_record(row: dict[str, object]) -> UserQuotaRecord:
    last_usage = row.get("last_usage_date")
    return UserQuotaRecord(
        id=str(row["id"]),
        daily_quota=int(row.get("daily_quota") or 0),
        usage_count=int(row.get("usage_count") or 0),
        last_usage_date=(
            date.fromisoformat(str(last_usage)[:10]) if last_usage else None
        ),
    )
