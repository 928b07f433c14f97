"""Models for image generation requests and results."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ImagePayload:
    """Encoded raster image returned by the generation service."""

    data: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class ContentPart:
    """One part of a generation response: text, inline image data, or both."""

    text: str | None = None
    image: ImagePayload | None = None


@dataclass(frozen=True)
class GenerationRequest:
    """A single generation attempt."""

    prompt: str
    preset_id: str | None
    created_at: datetime


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generation attempt."""

    request: GenerationRequest
    image: ImagePayload
