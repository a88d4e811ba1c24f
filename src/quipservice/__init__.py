"""
QuipService - Async client for the Quip collaboration API.

Wraps the platform's HTTP API with one method per endpoint and handles
transient failures: HTTP 429 and 503 responses are retried within a
per-path budget, everything else is logged and reported as a missing
result.

Quick Start:
    >>> from quipservice import QuipService
    >>> async with QuipService("token") as quip:
    ...     thread = await quip.get_thread("AbCdEf")
    ...     docx = await quip.get_docx("AbCdEf")

Architecture:
    Accessors: QuipService
    Dispatch: RequestDispatcher, RetryState, DispatchResult
    Observability: ServiceStats, LoggerAdapter
"""

from quipservice.core.config import Settings, get_settings
from quipservice.core.exceptions import (
    ConfigurationError,
    HttpStatusError,
    QuipServiceError,
    RateLimitExhaustedError,
    ServiceUnavailableError,
    TransportError,
)
from quipservice.http.dispatcher import DispatchOutcome, DispatchResult, RequestDispatcher
from quipservice.http.retry_state import RetryState
from quipservice.metrics.stats import ServiceStats, StatsSummary
from quipservice.protocols.logger import LoggerAdapter, ServiceLogger
from quipservice.service import QuipService

__version__ = "0.1.0"

__all__ = [
    # Client
    "QuipService",
    # Dispatch
    "DispatchOutcome",
    "DispatchResult",
    "RequestDispatcher",
    "RetryState",
    # Observability
    "LoggerAdapter",
    "ServiceLogger",
    "ServiceStats",
    "StatsSummary",
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "QuipServiceError",
    "TransportError",
    "RateLimitExhaustedError",
    "ServiceUnavailableError",
    "HttpStatusError",
    "ConfigurationError",
    "__version__",
]
