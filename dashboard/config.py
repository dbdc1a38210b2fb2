# dashboard/config.py
"""Application settings using Pydantic Settings."""

import logging
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class Settings(BaseSettings):
    """Settings loaded from environment variables (or a .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Debug mode")

    # Database
    database_url: str = Field(
        default="sqlite:///db.sqlite",
        description="SQLAlchemy database URL",
    )

    # Forms
    image_url_policy: Literal["path", "url"] = Field(
        default="path",
        description="'path' accepts /some/file.png, 'url' accepts absolute http(s) URLs",
    )

    # Listings
    invoices_page_size: int = Field(default=6, ge=1)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
    )
