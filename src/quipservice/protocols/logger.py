"""Logging collaborator protocol.

Defines the two-method logger the dispatcher reports through, plus the
default implementation backed by the standard library.

Example:
    >>> from quipservice.protocols.logger import LoggerAdapter, ServiceLogger
    >>> isinstance(LoggerAdapter(), ServiceLogger)
    True
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ServiceLogger(Protocol):
    """Logger protocol.

    Any object with these two methods can replace the default logger,
    including a ``unittest.mock.Mock`` in tests.
    """

    def debug(self, message: str) -> None:
        """Log a diagnostic message (retries, non-retryable statuses)."""
        ...

    def error(self, message: str, detail: Any = None) -> None:
        """Log a failure, optionally with an exception or other detail."""
        ...


class LoggerAdapter:
    """Forwards service diagnostics to a stdlib logger.

    Example:
        >>> adapter = LoggerAdapter()
        >>> adapter.logger.name
        'quipservice'
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("quipservice")

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def error(self, message: str, detail: Any = None) -> None:
        if detail is None:
            self.logger.error(message)
        elif isinstance(detail, BaseException):
            self.logger.error("%s%s", message, detail, exc_info=detail)
        else:
            self.logger.error("%s%s", message, detail)


__all__ = [
    "LoggerAdapter",
    "ServiceLogger",
]
