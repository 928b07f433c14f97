"""Prompt composition from presets and free text."""

from progen_studio.domain.errors import EmptyPromptError
from progen_studio.domain.presets import Preset

PRESET_SEPARATOR = "\n\nAdditional details: "


def compose(preset: Preset | None, free_text: str) -> str:
    """Combine an optional preset template with the user's text."""
    if preset is not None:
        prompt = f"{preset.template}{PRESET_SEPARATOR}{free_text}"
    else:
        prompt = free_text
    if not prompt.strip():
        raise EmptyPromptError()
    return prompt
