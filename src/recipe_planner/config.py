"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "kv_store"
    storage_namespace: str | None = None
    spoonacular_api_key: str | None = None
    spoonacular_base_url: str = "https://api.spoonacular.com/recipes"
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    openrouter_api_key: str | None = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_model: str = "meta-llama/llama-3.2-3b-instruct:free"
    openrouter_referer: str = "https://ai-recipe-finder.vercel.app"
    openrouter_title: str = "AI Recipe Finder & Meal Planner"
    daily_calorie_target: float = 2000.0
    default_servings: int = 4
    allowed_origins: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Return True when durable Supabase storage is configured."""
        return bool(self.supabase_url and self.supabase_service_key)


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse a comma separated list of CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
