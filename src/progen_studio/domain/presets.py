"""Domain models for style presets."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Preset:
    """A named prompt template."""

    id: str
    label_en: str
    label_th: str
    template: str


@dataclass(frozen=True)
class PresetCategory:
    """A labelled group of presets."""

    id: str
    label: str
    presets: tuple[Preset, ...]
