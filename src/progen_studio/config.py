"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    image_provider: str = "gemini"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash-image"
    openai_api_key: str | None = None
    openai_image_model: str = "gpt-image-1"
    admin_user_id: str = "admin"
    users_table: str = "users"
    export_dir: str = "exports"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def generation_api_key(self) -> str | None:
        """Return the credential for the selected image provider, if set."""
        if self.image_provider == "openai":
            key = self.openai_api_key
        else:
            key = self.gemini_api_key
        if key is None or not key.strip():
            return None
        return key.strip()

    def generation_model(self) -> str:
        """Return the model name for the selected image provider."""
        if self.image_provider == "openai":
            return self.openai_image_model
        return self.gemini_model
