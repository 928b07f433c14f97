"""Session state machine for image generation."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from progen_studio.domain.errors import (
    ConfigurationError,
    EmptyPromptError,
    ExternalCallError,
    GenerationError,
    NoImageProducedError,
    QuotaExceededError,
    QuotaWriteError,
)
from progen_studio.domain.generation import GenerationRequest, GenerationResult
from progen_studio.domain.models import QuotaPolicy, UserQuotaRecord
from progen_studio.domain.presets import Preset
from progen_studio.domain.sessions import (
    Composing,
    Failed,
    Generating,
    Idle,
    SessionState,
    Succeeded,
)
from progen_studio.services.generation import ImageGenerationClient, extract_image
from progen_studio.services.presets import PresetCatalog
from progen_studio.services.prompts import compose
from progen_studio.services.results import ResultPresenter
from progen_studio.services.users import UserRecordMirror, UserRecordStore

logger = logging.getLogger(__name__)

PROFILE_NOT_LOADED = "User profile is not loaded yet. Please try again."
GENERATION_CANCELLED = "Generation was cancelled. Please try again."


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for presentation."""

    user_id: str
    status: str
    free_text: str
    selected_preset_id: str | None
    error_message: str | None
    notice: str | None
    has_image: bool
    daily_quota: int | None
    usage_count: int | None
    remaining: int | None
    quota_exempt: bool


@dataclass
class GenerationSession:
    """State machine for one user's generation session."""

    user_id: str
    mirror: UserRecordMirror
    record_store: UserRecordStore
    catalog: PresetCatalog
    presenter: ResultPresenter
    client: ImageGenerationClient | None
    model: str
    admin_user_id: str = "admin"
    clock: Callable[[], datetime] = _utcnow
    state: SessionState = field(default_factory=Idle)
    free_text: str = ""
    selected_preset: Preset | None = None
    _written_usage: tuple[int, date] | None = field(default=None, repr=False)

    def set_text(self, text: str) -> SessionState:
        """Replace the free-form prompt text."""
        self.free_text = text
        return self._after_edit()

    def toggle_preset(self, preset_id: str) -> SessionState:
        """Select a preset, or deselect it if it is already selected."""
        preset = self.catalog.lookup(preset_id)
        if preset is None or (
            self.selected_preset is not None and self.selected_preset.id == preset.id
        ):
            self.selected_preset = None
        else:
            self.selected_preset = preset
        return self._after_edit()

    async def submit(self) -> SessionState:  # noqa: PLR0911
        """Run one generation attempt if no other attempt is in flight."""
        if isinstance(self.state, Generating):
            logger.info("Ignoring submit for user %s while generating", self.user_id)
            return self.state

        record = self.mirror.current
        if record is None:
            self.presenter.show_error(ConfigurationError(PROFILE_NOT_LOADED).message)
            self.state = Idle()
            return self.state
        if self.client is None:
            return self._fail(ConfigurationError())

        policy = record.policy(self.admin_user_id)
        usage_count = self._usage_count(record)
        if policy is QuotaPolicy.ENFORCED and usage_count >= record.daily_quota:
            logger.info(
                "Quota exceeded for user %s (%s/%s)",
                record.id,
                usage_count,
                record.daily_quota,
            )
            return self._fail(QuotaExceededError())

        try:
            prompt = compose(self.selected_preset, self.free_text)
        except EmptyPromptError as exc:
            return self._fail(exc)

        request = GenerationRequest(
            prompt=prompt,
            preset_id=self.selected_preset.id if self.selected_preset else None,
            created_at=self.clock(),
        )
        self.state = Generating(request=request)
        self.presenter.clear()

        try:
            parts = await self.client.generate(model=self.model, prompt=prompt)
        except asyncio.CancelledError:
            logger.warning("Generation cancelled for user %s", self.user_id)
            self._fail(ExternalCallError(GENERATION_CANCELLED))
            raise
        except Exception as exc:
            logger.exception("Generation call failed for user %s", self.user_id)
            return self._fail(ExternalCallError(str(exc) or None))

        image = extract_image(parts)
        if image is None:
            logger.warning("Generation for user %s returned no image", self.user_id)
            return self._fail(NoImageProducedError())

        self.presenter.show_image(image)
        try:
            if policy is QuotaPolicy.ENFORCED:
                await self._record_usage(record)
        finally:
            result = GenerationResult(request=request, image=image)
            self.state = Succeeded(result=result)
        return self.state

    async def close(self) -> None:
        """Release the record subscription."""
        await self.mirror.unsubscribe()

    def snapshot(self) -> SessionSnapshot:
        record = self.mirror.current
        return SessionSnapshot(
            user_id=self.user_id,
            status=self.state.status,
            free_text=self.free_text,
            selected_preset_id=(
                self.selected_preset.id if self.selected_preset else None
            ),
            error_message=self.presenter.error_message,
            notice=self.presenter.notice,
            has_image=self.presenter.image is not None,
            daily_quota=record.daily_quota if record else None,
            usage_count=self._usage_count(record) if record else None,
            remaining=(
                max(record.daily_quota - self._usage_count(record), 0)
                if record
                else None
            ),
            quota_exempt=(
                record is not None
                and record.policy(self.admin_user_id) is QuotaPolicy.EXEMPT
            ),
        )

    async def _record_usage(self, submitted: UserQuotaRecord) -> None:
        latest = self.mirror.current or submitted
        usage_count = self._usage_count(latest) + 1
        today = self.clock().date()
        fields: dict[str, object] = {
            "usage_count": usage_count,
            "last_usage_date": today.isoformat(),
        }
        try:
            await self.record_store.update(self.user_id, fields)
        except Exception:
            logger.exception("Failed to record usage for user %s", self.user_id)
            self.presenter.show_notice(QuotaWriteError().message)
            return
        self._written_usage = (usage_count, today)

    def _usage_count(self, record: UserQuotaRecord) -> int:
        """Return the mirrored count, or this session's last write if it is ahead."""
        if self._written_usage is None:
            return record.usage_count
        written, written_on = self._written_usage
        if written_on != self.clock().date() or record.usage_count >= written:
            return record.usage_count
        return written

    def _after_edit(self) -> SessionState:
        if isinstance(self.state, Generating):
            return self.state
        if self.free_text or self.selected_preset is not None:
            self.state = Composing()
        else:
            self.state = Idle()
        return self.state

    def _fail(self, error: GenerationError) -> SessionState:
        self.presenter.show_error(error.message)
        self.state = Failed(error=error)
        return self.state


SessionFactory = Callable[[str], Awaitable[GenerationSession]]


@dataclass
class SessionRegistry:
    """Keeps at most one open generation session per user."""

    factory: SessionFactory
    _sessions: dict[str, GenerationSession] = field(default_factory=dict)

    async def open(self, user_id: str) -> GenerationSession:
        """Return the user's session, creating it if needed."""
        existing = self._sessions.get(user_id)
        if existing is not None:
            return existing
        session = await self.factory(user_id)
        existing = self._sessions.get(user_id)
        if existing is not None:
            await session.close()
            return existing
        self._sessions[user_id] = session
        return session

    def get(self, user_id: str) -> GenerationSession | None:
        return self._sessions.get(user_id)

    async def close(self, user_id: str) -> bool:
        """Close and forget a session. Return False if none was open."""
        session = self._sessions.pop(user_id, None)
        if session is None:
            return False
        await session.close()
        return True

    async def close_all(self) -> None:
        for user_id in list(self._sessions):
            await self.close(user_id)
