"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./marketplace.db"

    # Application
    app_name: str = "Food Marketplace API"
    log_level: str = "INFO"

    # Identity
    token_ttl_hours: int = 24

    # Ordering
    strict_status_transitions: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
