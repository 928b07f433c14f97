"""Presentation state for generated images."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from progen_studio.domain.generation import ImagePayload

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ResultPresenter:
    """Exposes the current image plus a single error slot and a passive notice."""

    export_dir: Path
    clock: Callable[[], datetime] = _utcnow
    image: ImagePayload | None = None
    error_message: str | None = None
    notice: str | None = None
    _last_export_stamp: int = field(default=0, repr=False)

    def show_image(self, image: ImagePayload) -> None:
        self.image = image
        self.error_message = None

    def show_error(self, message: str) -> None:
        self.error_message = message

    def show_notice(self, message: str) -> None:
        self.notice = message

    def clear(self) -> None:
        """Drop the previous image, error and notice."""
        self.image = None
        self.error_message = None
        self.notice = None

    def export(self) -> Path | None:
        """Write the current image to a new file and return its path."""
        if self.image is None:
            return None
        self.export_dir.mkdir(parents=True, exist_ok=True)
        stamp = max(int(self.clock().timestamp() * 1000), self._last_export_stamp + 1)
        path = self.export_dir / f"generated-{stamp}.png"
        while path.exists():
            stamp += 1
            path = self.export_dir / f"generated-{stamp}.png"
        path.write_bytes(self.image.data)
        self._last_export_stamp = stamp
        logger.info("Exported image to %s", path)
        return path
