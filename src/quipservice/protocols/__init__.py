"""Protocol definitions for injectable collaborators."""

from quipservice.protocols.logger import LoggerAdapter, ServiceLogger

__all__ = [
    "LoggerAdapter",
    "ServiceLogger",
]
