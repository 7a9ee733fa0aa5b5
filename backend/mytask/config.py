from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MYTASK_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Storage
    storage_path: Path = Path("mytask_storage.json")
    email_key: str = "mytask_email"
    tasks_key: str = "mytask_tasks"
    tags_key: str = "mytask_tags"

    # Navigation
    welcome_delay_seconds: float = 2.5  # Welcome screen auto-advance


settings = Settings()
