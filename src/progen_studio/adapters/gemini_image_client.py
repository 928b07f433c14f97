"""Google GenAI client for image generation."""

import base64
from dataclasses import dataclass

from google import genai
from google.genai import types

from progen_studio.domain.generation import ContentPart, ImagePayload
from progen_studio.services.generation import ImageGenerationClient


@dataclass
class GeminiImageClient(ImageGenerationClient):
    """Image generation backed by Gemini image models."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiImageClient":
        """Create a Gemini image client."""
        return cls(client=genai.Client(api_key=api_key))

    async def generate(self, *, model: str, prompt: str) -> list[ContentPart]:
        """Call generate_content and map the first candidate's parts."""
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE", "TEXT"],
            ),
        )
        candidates = response.candidates or []
        if not candidates or candidates[0].content is None:
            return []
        parts: list[ContentPart] = []
        for part in candidates[0].content.parts or []:
            inline = part.inline_data
            if inline is not None and inline.data:
                data = inline.data
                if isinstance(data, str):
                    data = base64.b64decode(data)
                parts.append(
                    ContentPart(
                        image=ImagePayload(
                            data=data, mime_type=inline.mime_type or "image/png"
                        )
                    )
                )
            elif part.text:
                parts.append(ContentPart(text=part.text))
        return parts
