from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

load_dotenv()

DEFAULT_PRICES_URL = "https://cheapplayitasapi.azurewebsites.net/api/prices"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    prices_url: str = Field(DEFAULT_PRICES_URL, alias="PRICES_URL")
    http_timeout_s: float = Field(15.0, alias="HTTP_TIMEOUT_S")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, alias="LOG_FILE")

    @field_validator("prices_url")
    @classmethod
    def _url_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("PRICES_URL must be a non-empty string")
        return v.strip()

    @field_validator("http_timeout_s")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT_S must be greater than 0")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL {v!r} is not a logging level")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Return application settings loaded from the environment."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["DEFAULT_PRICES_URL", "Settings", "get_settings"]
