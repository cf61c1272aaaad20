"""
Application configuration using pydantic-settings.
"""
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = "Channel Catalog Proxy"
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        return v

    # YouTube Data API
    # Optional at startup: a missing key is reported per request as a configuration error.
    YOUTUBE_API_KEY: Optional[str] = None
    YOUTUBE_CHANNEL_ID: str = "UCMq4uUwcWnYgfe3z5w3Kt7A"
    YOUTUBE_API_BASE_URL: str = "https://www.googleapis.com/youtube/v3"
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0
    PREFETCH_COLLECTIONS: bool = False

    # Client fetch layer
    CATALOG_API_ENDPOINT: str = "http://localhost:8000/api/youtube"
    CATALOG_USE_LIVE_API: bool = True
    CATALOG_TIMEOUT_SECONDS: float = 10.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
