"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import AsyncClient

from progen_studio.adapters.gemini_image_client import GeminiImageClient
from progen_studio.adapters.openai_image_client import OpenAIImageClient
from progen_studio.adapters.supabase_user_record_store import SupabaseUserRecordStore
from progen_studio.config import Settings
from progen_studio.services.generation import ImageGenerationClient
from progen_studio.services.presets import PresetCatalog, default_catalog
from progen_studio.services.results import ResultPresenter
from progen_studio.services.sessions import GenerationSession, SessionRegistry
from progen_studio.services.users import UserRecordMirror, UserRecordStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog: PresetCatalog
    record_store: UserRecordStore
    image_client: ImageGenerationClient | None
    session_registry: SessionRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_image_client(settings: Settings) -> ImageGenerationClient | None:
    """Create the image client for the configured provider, if a key is set."""
    api_key = settings.generation_api_key()
    if api_key is None:
        return None
    if settings.image_provider == "openai":
        return OpenAIImageClient.create(api_key)
    return GeminiImageClient.create(api_key)


def build_session_registry(
    settings: Settings,
    catalog: PresetCatalog,
    record_store: UserRecordStore,
    image_client: ImageGenerationClient | None,
) -> SessionRegistry:
    """Create a registry that opens sessions against the given collaborators."""

    async def open_session(user_id: str) -> GenerationSession:
        mirror = await UserRecordMirror.subscribe(record_store, user_id)
        return GenerationSession(
            user_id=user_id,
            mirror=mirror,
            record_store=record_store,
            catalog=catalog,
            presenter=ResultPresenter(export_dir=Path(settings.export_dir)),
            client=image_client,
            model=settings.generation_model(),
            admin_user_id=settings.admin_user_id,
        )

    return SessionRegistry(factory=open_session)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = AsyncClient(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    record_store = SupabaseUserRecordStore(
        supabase_client, table=resolved_settings.users_table
    )
    catalog = default_catalog()
    image_client = build_image_client(resolved_settings)
    session_registry = build_session_registry(
        resolved_settings, catalog, record_store, image_client
    )

    async def close_resources() -> None:
        await session_registry.close_all()

    return AppContainer(
        settings=resolved_settings,
        catalog=catalog,
        record_store=record_store,
        image_client=image_client,
        session_registry=session_registry,
        close_resources=close_resources,
    )
