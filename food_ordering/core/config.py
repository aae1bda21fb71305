"""Application configuration."""
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


StorageBackend = Literal["memory", "file", "database"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    storage_backend: StorageBackend = "memory"
    data_file: str = "data/data.json"
    database_url: str = "sqlite+aiosqlite:///./food_ordering.db"

    # Abort startup instead of degrading when storage is unreachable
    fail_closed: bool = False

    # Menu seed (YAML); built-in seed is used when unset or missing
    menu_file: Optional[str] = None

    # Restaurant
    restaurant_name: str = "Restaurant"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
