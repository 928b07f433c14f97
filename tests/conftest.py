"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from pathlib import Path

import pytest

from progen_studio.config import Settings
from progen_studio.containers import AppContainer, build_session_registry
from progen_studio.domain.generation import ContentPart, ImagePayload
from progen_studio.domain.models import UserQuotaRecord
from progen_studio.services.generation import ImageGenerationClient
from progen_studio.services.presets import default_catalog
from progen_studio.services.results import ResultPresenter
from progen_studio.services.sessions import GenerationSession
from progen_studio.services.users import (
    RecordListener,
    Unsubscribe,
    UserRecordMirror,
    UserRecordStore,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-image"
FIXED_NOW = datetime(2026, 10, 19, 8, 30, tzinfo=UTC)


@dataclass
class InMemoryUserRecordStore(UserRecordStore):
    """In-memory record store that notifies subscribers synchronously."""

    records: dict[str, UserQuotaRecord] = field(default_factory=dict)
    listeners: dict[str, list[RecordListener]] = field(default_factory=dict)
    updates: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    unsubscribe_calls: int = 0
    notify_on_update: bool = True
    fail_updates: bool = False
    on_update: Callable[[str, dict[str, object]], None] | None = None
    update_gate: asyncio.Event | None = None

    async def subscribe(self, user_id: str, on_change: RecordListener) -> Unsubscribe:
        self.listeners.setdefault(user_id, []).append(on_change)
        if user_id in self.records:
            on_change(self.records[user_id])

        async def unsubscribe() -> None:
            self.unsubscribe_calls += 1
            self.listeners[user_id].remove(on_change)

        return unsubscribe

    async def update(self, user_id: str, fields: dict[str, object]) -> None:
        if self.on_update is not None:
            self.on_update(user_id, fields)
        self.updates.append((user_id, dict(fields)))
        if self.update_gate is not None:
            await self.update_gate.wait()
        if self.fail_updates:
            raise RuntimeError("permission denied")
        current = self.records[user_id]
        last_usage = fields.get("last_usage_date")
        updated = replace(
            current,
            usage_count=int(fields.get("usage_count", current.usage_count)),
            last_usage_date=(
                date.fromisoformat(str(last_usage))
                if last_usage
                else current.last_usage_date
            ),
        )
        if self.notify_on_update:
            self.push(updated)
        else:
            self.records[user_id] = updated

    def push(self, record: UserQuotaRecord) -> None:
        """Store a record and deliver it to every listener for that user."""
        self.records[record.id] = record
        for listener in list(self.listeners.get(record.id, [])):
            listener(record)


@dataclass
class FakeImageClient(ImageGenerationClient):
    """Fake image client that records prompts and returns fixed parts."""

    parts: list[ContentPart] = field(
        default_factory=lambda: [ContentPart(image=ImagePayload(data=PNG_BYTES))]
    )
    error: Exception | None = None
    calls: list[tuple[str, str]] = field(default_factory=list)
    gate: asyncio.Event | None = None

    async def generate(self, *, model: str, prompt: str) -> list[ContentPart]:
        self.calls.append((model, prompt))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.parts


def make_record(
    user_id: str = "user-1", daily_quota: int = 5, usage_count: int = 0
) -> UserQuotaRecord:
    return UserQuotaRecord(
        id=user_id,
        daily_quota=daily_quota,
        usage_count=usage_count,
        last_usage_date=date(2026, 10, 19),
    )


async def open_session(
    store: InMemoryUserRecordStore,
    client: ImageGenerationClient | None,
    export_dir: Path,
    user_id: str = "user-1",
) -> GenerationSession:
    mirror = await UserRecordMirror.subscribe(store, user_id)
    return GenerationSession(
        user_id=user_id,
        mirror=mirror,
        record_store=store,
        catalog=default_catalog(),
        presenter=ResultPresenter(export_dir=export_dir, clock=lambda: FIXED_NOW),
        client=client,
        model="gemini-2.5-flash-image",
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        gemini_api_key="gemini-key",
        export_dir=str(tmp_path / "exports"),
    )


@pytest.fixture
def record_store() -> InMemoryUserRecordStore:
    return InMemoryUserRecordStore()


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def container(
    settings: Settings,
    record_store: InMemoryUserRecordStore,
    image_client: FakeImageClient,
) -> AppContainer:
    catalog = default_catalog()
    session_registry = build_session_registry(
        settings, catalog, record_store, image_client
    )

    async def close_resources() -> None:
        await session_registry.close_all()

    return AppContainer(
        settings=settings,
        catalog=catalog,
        record_store=record_store,
        image_client=image_client,
        session_registry=session_registry,
        close_resources=close_resources,
    )
