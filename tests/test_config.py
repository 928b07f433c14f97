"""Tests for settings helpers."""

from progen_studio.config import Settings


def _settings(**overrides) -> Settings:  # type: ignore[no-untyped-def]
    values = {
        "supabase_url": "https://example.supabase.co",
        "supabase_service_key": "service-key",
        "gemini_api_key": None,
        "openai_api_key": None,
    }
    values.update(overrides)
    return Settings(**values)


def test_gemini_is_default_provider() -> None:
    settings = _settings(gemini_api_key="gemini-key")

    assert settings.generation_api_key() == "gemini-key"
    assert settings.generation_model() == "gemini-2.5-flash-image"


def test_openai_provider_uses_openai_key() -> None:
    settings = _settings(image_provider="openai", openai_api_key="sk-test")

    assert settings.generation_api_key() == "sk-test"
    assert settings.generation_model() == "gpt-image-1"


def test_blank_key_counts_as_missing() -> None:
    settings = _settings(gemini_api_key="   ")

    assert settings.generation_api_key() is None
