"""Custom exceptions.

The dispatcher reports failures as a missing result by default. These
exceptions give callers a way to tell the failure kinds apart:

Example:
    >>> from quipservice.core.exceptions import HttpStatusError, QuipServiceError
    >>> isinstance(HttpStatusError("/threads/abc", 404), QuipServiceError)
    True
    >>> try:
    ...     raise HttpStatusError("/threads/abc", 404)
    ... except QuipServiceError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: HttpStatusError
"""

from __future__ import annotations


class QuipServiceError(Exception):
    """Base exception for QuipService.

    Example:
        >>> from quipservice.core.exceptions import QuipServiceError
        >>> e = QuipServiceError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class TransportError(QuipServiceError):
    """The request never produced a usable HTTP response."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Couldn't fetch {path}: {reason}")


class RateLimitExhaustedError(QuipServiceError):
    """HTTP 429 retry budget for a path is used up.

    Example:
        >>> from quipservice.core.exceptions import RateLimitExhaustedError
        >>> str(RateLimitExhaustedError("/users/current", 3))
        "Couldn't fetch /users/current, tried to get it 3 times"
    """

    def __init__(self, path: str, attempts: int):
        self.path = path
        self.attempts = attempts
        super().__init__(f"Couldn't fetch {path}, tried to get it {attempts} times")


class ServiceUnavailableError(QuipServiceError):
    """HTTP 503 retry budget for a path is used up."""

    def __init__(self, path: str, attempts: int):
        self.path = path
        self.attempts = attempts
        super().__init__(f"Couldn't fetch {path}, tried to get it {attempts} times")


class HttpStatusError(QuipServiceError):
    """Non-retryable HTTP status.

    Example:
        >>> from quipservice.core.exceptions import HttpStatusError
        >>> HttpStatusError("/folders/x", 500).status_code
        500
    """

    def __init__(self, path: str, status_code: int):
        self.path = path
        self.status_code = status_code
        super().__init__(f"Couldn't fetch {path}, received {status_code}")


class ConfigurationError(QuipServiceError):
    """Configuration is invalid.

    Example:
        >>> from quipservice.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("missing token")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: missing token
    """
