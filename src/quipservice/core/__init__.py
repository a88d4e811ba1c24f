"""Core configuration, logging and exceptions."""

from quipservice.core.config import Settings, get_settings
from quipservice.core.exceptions import (
    ConfigurationError,
    HttpStatusError,
    QuipServiceError,
    RateLimitExhaustedError,
    ServiceUnavailableError,
    TransportError,
)
from quipservice.core.log import configure_logging

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Exceptions
    "QuipServiceError",
    "TransportError",
    "RateLimitExhaustedError",
    "ServiceUnavailableError",
    "HttpStatusError",
    "ConfigurationError",
]
