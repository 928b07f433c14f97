"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import FileResponse

from progen_studio.api.models import (
    PresetCategoryView,
    PresetView,
    SessionView,
    TextUpdate,
)
from progen_studio.app_logging import configure_logging
from progen_studio.containers import AppContainer
from progen_studio.services.sessions import GenerationSession


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.container.image_client is None:
            logger.warning("No image generation API key configured")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/presets")
    async def list_presets(request: Request) -> list[PresetCategoryView]:
        """Return the preset catalog grouped by category."""
        state_container: AppContainer = request.app.state.container
        return [
            PresetCategoryView(
                id=category.id,
                label=category.label,
                presets=[PresetView(**asdict(preset)) for preset in category.presets],
            )
            for category in state_container.catalog.categories()
        ]

    @app.post("/sessions/{user_id}")
    async def open_session(user_id: str, request: Request) -> SessionView:
        """Open a session for a user and subscribe to their quota record."""
        state_container: AppContainer = request.app.state.container
        session = await state_container.session_registry.open(user_id)
        return _session_view(session)

    @app.get("/sessions/{user_id}")
    async def get_session(user_id: str, request: Request) -> SessionView:
        return _session_view(_require_session(request, user_id))

    @app.put("/sessions/{user_id}/text")
    async def update_text(
        user_id: str, body: TextUpdate, request: Request
    ) -> SessionView:
        session = _require_session(request, user_id)
        session.set_text(body.text)
        return _session_view(session)

    @app.post("/sessions/{user_id}/presets/{preset_id}/toggle")
    async def toggle_preset(
        user_id: str, preset_id: str, request: Request
    ) -> SessionView:
        session = _require_session(request, user_id)
        session.toggle_preset(preset_id)
        return _session_view(session)

    @app.post("/sessions/{user_id}/generate")
    async def generate(user_id: str, request: Request) -> SessionView:
        """Submit the composed prompt for generation."""
        session = _require_session(request, user_id)
        await session.submit()
        return _session_view(session)

    @app.get("/sessions/{user_id}/image")
    async def get_image(user_id: str, request: Request) -> Response:
        session = _require_session(request, user_id)
        image = session.presenter.image
        if image is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(content=image.data, media_type=image.mime_type)

    @app.post("/sessions/{user_id}/export", response_class=FileResponse)
    async def export_image(user_id: str, request: Request) -> FileResponse:
        """Save the current image and return it as a download."""
        session = _require_session(request, user_id)
        path = session.presenter.export()
        if path is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return FileResponse(path, media_type="image/png", filename=path.name)

    @app.delete("/sessions/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def close_session(user_id: str, request: Request) -> None:
        """Close a session and release its record subscription."""
        state_container: AppContainer = request.app.state.container
        if not await state_container.session_registry.close(user_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    return app


def _require_session(request: Request, user_id: str) -> GenerationSession:
    container: AppContainer = request.app.state.container
    session = container.session_registry.get(user_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return session


def _session_view(session: GenerationSession) -> SessionView:
    return SessionView(**asdict(session.snapshot()))
