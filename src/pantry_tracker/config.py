"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from pantry_tracker.domain.recipes import DishType

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "medium"
    openai_store: bool = False
    recipe_default_count: int = 3
    recipe_max_count: int = 10
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_dish_type(raw: str | None) -> DishType | None:
    """Parse a dish type leniently ("Main Course", "main-course", "MAIN_COURSE")."""
    if raw is None:
        return None
    cleaned = raw.strip().lower().replace("-", "_").replace(" ", "_")
    if not cleaned:
        return None
    try:
        return DishType(cleaned)
    except ValueError:
        return None
