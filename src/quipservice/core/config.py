"""QuipService configuration.

Client settings loaded from environment variables with QUIP_ prefix.

Example:
    >>> from quipservice.core.config import get_settings
    >>> settings = get_settings(access_token="secret", max_429_retries=5)
    >>> settings.max_429_retries
    5
    >>> settings.api_url
    'https://platform.quip.com:443/1'
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://platform.quip.com:443/1"


class Settings(BaseSettings):
    """Client settings.

    Loads from environment variables with QUIP_ prefix.

    Example:
        >>> from quipservice.core.config import Settings
        >>> s = Settings(access_token="token")
        >>> s.waiting_ms
        1000
        >>> s.max_429_retries
        3
    """

    model_config = SettingsConfigDict(
        env_prefix="QUIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API access
    access_token: str = Field(default="", description="Bearer token for the API")
    api_url: str = Field(default=DEFAULT_API_URL, description="Base API URL including version")

    # Retry policy
    max_429_retries: int = Field(default=3, ge=0, description="Retries per path on HTTP 429")
    waiting_ms: int = Field(default=1000, ge=0, description="Base wait between retries")
    request_timeout: float = Field(default=30.0, ge=1.0)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from quipservice.core.config import get_settings
        >>> s = get_settings(waiting_ms=250)
        >>> s.waiting_ms
        250
    """
    return Settings(**overrides)
