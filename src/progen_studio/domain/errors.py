"""Errors raised while generating images."""


class GenerationError(Exception):
    """Base error with a user-facing message."""

    default_message = "Failed to generate image."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(GenerationError):
    """Required configuration is missing."""

    default_message = "System Error: API Key not configured."


class QuotaExceededError(GenerationError):
    """The user has used up today's quota."""

    default_message = "Daily quota exceeded. Please upgrade your plan."


class EmptyPromptError(GenerationError):
    """Neither a preset nor any text was provided."""

    default_message = "Please enter a prompt or select a preset."


class ExternalCallError(GenerationError):
    """The generation service call failed."""


class NoImageProducedError(GenerationError):
    """The generation service responded without image data."""

    default_message = "No image generated."


class QuotaWriteError(GenerationError):
    """Recording usage after a successful generation failed."""

    default_message = (
        "Your image was generated, but usage could not be recorded right now."
    )
