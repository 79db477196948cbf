"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_BACKENDS = {"file", "supabase"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    storage_backend: str = "file"
    storage_path: str = "lunabloom_data.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "app_storage"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_storage_backend(settings: Settings) -> str:
    """Return the normalized storage backend, validating its requirements."""
    backend = settings.storage_backend.strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")
    if backend == "supabase" and not (
        settings.supabase_url and settings.supabase_service_key
    ):
        raise ValueError("Supabase storage needs SUPABASE_URL and SUPABASE_SERVICE_KEY")
    return backend
