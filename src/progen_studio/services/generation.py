"""Image generation client interface and response extraction."""

from typing import Protocol

from progen_studio.domain.generation import ContentPart, ImagePayload


class ImageGenerationClient(Protocol):
    """Interface for text-to-image generation services."""

    async def generate(self, *, model: str, prompt: str) -> list[ContentPart]:
        """Return the content parts produced for a prompt."""


def extract_image(parts: list[ContentPart]) -> ImagePayload | None:
    """Return the first part carrying inline image data."""
    for part in parts:
        if part.image is not None and part.image.data:
            return part.image
    return None
