"""Request and response models for the HTTP API."""

from pydantic import BaseModel


class TextUpdate(BaseModel):
    """Body for replacing the free-form prompt text."""

    text: str


class PresetView(BaseModel):
    id: str
    label_en: str
    label_th: str
    template: str


class PresetCategoryView(BaseModel):
    id: str
    label: str
    presets: list[PresetView]


class SessionView(BaseModel):
    """Presentation state of a generation session."""

    user_id: str
    status: str
    free_text: str
    selected_preset_id: str | None = None
    error_message: str | None = None
    notice: str | None = None
    has_image: bool = False
    daily_quota: int | None = None
    usage_count: int | None = None
    remaining: int | None = None
    quota_exempt: bool = False
