from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    APP_ENV: Literal["development", "production"] = "production"
    PORT: int = 8000

    CATALOG_API_URL: str = "https://clawhub.ai/api/v1"
    CATALOG_TIMEOUT: float = 10.0
    CATALOG_MAX_RETRIES: int = 3
    # Per-query result limits for category searches
    CATALOG_MAIN_LIMIT: int = 4
    CATALOG_SUB_LIMIT: int = 2
    CATALOG_SUB_QUERIES: int = 3

    RECOMMENDATION_LIMIT: int = 10

    DECLARED_PROFILE_PATH: Path = Path.home() / ".config" / "claude" / "USER.md"


settings = Settings()
