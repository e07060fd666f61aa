# storefront/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - JWT_SECRET (HS256 secret shared with the identity provider)

    Optional:
      - DATABASE_URL (defaults to a local SQLite file)
      - ASSET_BACKEND ("local" | "supabase")
      - SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY (only for the supabase backend)
    """

    PROJECT_NAME: str = "Storefront API"
    API_V1_STR: str = "/api"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./storefront.db"

    # JWT verification (backend-side)
    JWT_SECRET: str
    JWT_ALG: str = "HS256"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Uploaded images
    ASSET_BACKEND: str = "local"
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PATH: str = "/uploads"

    # Supabase Storage (ASSET_BACKEND=supabase)
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    SUPABASE_SERVICE_ROLE_KEY: str | None = None
    SUPABASE_BUCKET: str = "assets"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
