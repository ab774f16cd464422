"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # Storage buckets
    DESIGNS_BUCKET: str = "designs"
    AI_DESIGNS_BUCKET: str = "ai_designs"

    # AI design generation (Supabase edge function)
    AI_DESIGN_FUNCTION: str = "generate-design"
    IMAGE_FETCH_TIMEOUT_SECONDS: float = 30.0

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore[call-arg]
