"""OpenAI Images API client for image generation."""

import base64
from dataclasses import dataclass

from openai import AsyncOpenAI

from progen_studio.domain.generation import ContentPart, ImagePayload
from progen_studio.services.generation import ImageGenerationClient


@dataclass
class OpenAIImageClient(ImageGenerationClient):
    """Image generation backed by the OpenAI Images API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIImageClient":
        """Create an OpenAI image client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(self, *, model: str, prompt: str) -> list[ContentPart]:
        """Call images.generate and map each returned image."""
        response = await self.client.images.generate(model=model, prompt=prompt, n=1)
        parts: list[ContentPart] = []
        for item in response.data or []:
            if item.b64_json:
                image = ImagePayload(data=base64.b64decode(item.b64_json))
                parts.append(ContentPart(image=image))
            elif item.revised_prompt:
                parts.append(ContentPart(text=item.revised_prompt))
        return parts
