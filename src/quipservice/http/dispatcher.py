"""Request dispatch with per-path retry budgets.

Every API call goes through ``RequestDispatcher``. It sends the request,
sorts the response into one of five outcomes and retries 429 and 503
responses until the path's budget runs out:

- 2xx: body decoded as bytes or JSON and returned
- 429: flat wait of ``waiting_ms``, up to ``max_429_retries`` per path
- 503: wait until the server's ``x-ratelimit-reset`` time if it is in the
  future, otherwise ``waiting_ms``; up to 10 retries per path
- any other status: logged at debug level, not retried
- transport failure: logged as an error, not retried

``dispatch()`` collapses every failure to ``None``. ``dispatch_result()``
runs the same loop and reports which outcome occurred.

Example:
    >>> from quipservice.http import RequestDispatcher
    >>> 
    >>> async with RequestDispatcher("token", "https://platform.quip.com:443/1") as dispatcher:
    ...     thread = await dispatcher.dispatch("/threads/AbCdEf")
    ...     pdf = await dispatcher.dispatch("/threads/AbCdEf/export/pdf", binary=True)
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from quipservice.core.config import DEFAULT_API_URL
from quipservice.core.exceptions import (
    HttpStatusError,
    RateLimitExhaustedError,
    ServiceUnavailableError,
    TransportError,
)
from quipservice.http.retry_state import DEFAULT_MAX_429_RETRIES, RetryState
from quipservice.metrics.stats import QUERY_COUNTER, ServiceStats
from quipservice.protocols.logger import LoggerAdapter, ServiceLogger

DEFAULT_WAITING_MS = 1000
RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset"


class DispatchOutcome(str, Enum):
    """How a dispatch ended."""

    OK = "ok"
    TRANSPORT_FAILURE = "transport_failure"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    HTTP_ERROR = "http_error"


@dataclass(frozen=True)
class DispatchResult:
    """Result of a dispatch, including the failure kind.
    
    Attributes:
        path: Request path
        outcome: Which branch ended the dispatch
        value: Decoded body (only for ``OK``)
        status_code: Last HTTP status seen, if any
        attempts: Network attempts made, retries included
        retry_limit: Retry budget that ran out (429/503 outcomes only)
        error: Exception raised by the transport or decoder
    """
    path: str
    outcome: DispatchOutcome
    value: Any = None
    status_code: int | None = None
    attempts: int = 1
    retry_limit: int | None = None
    error: BaseException | None = None
    
    @property
    def ok(self) -> bool:
        return self.outcome is DispatchOutcome.OK
    
    def raise_for_outcome(self) -> Any:
        """Return the value, or raise the exception matching the failure.
        
        Raises:
            TransportError: Network failure or undecodable body
            RateLimitExhaustedError: 429 budget used up
            ServiceUnavailableError: 503 budget used up
            HttpStatusError: Any other non-2xx status
        """
        if self.outcome is DispatchOutcome.OK:
            return self.value
        if self.outcome is DispatchOutcome.TRANSPORT_FAILURE:
            raise TransportError(self.path, str(self.error)) from self.error
        if self.outcome is DispatchOutcome.RATE_LIMITED:
            raise RateLimitExhaustedError(self.path, self.retry_limit or 0)
        if self.outcome is DispatchOutcome.SERVICE_UNAVAILABLE:
            raise ServiceUnavailableError(self.path, self.retry_limit or 0)
        raise HttpStatusError(self.path, self.status_code or 0)


class RequestDispatcher:
    """Sends API requests and retries transient failures per path.
    
    Retry budgets live in a ``RetryState`` owned by the dispatcher and
    persist across calls: once a path has exhausted its budget, later
    calls to it give up on the first matching response.
    
    Example:
        >>> dispatcher = RequestDispatcher("token", max_429_retries=5)
        >>> dispatcher.waiting_ms = 250  # read on every retry
    
    Attributes:
        waiting_ms: Base wait between retries in milliseconds
        retry_state: Per-path retry counters
        stats: Statistics; ``query_count`` counts every attempt
    """
    
    def __init__(
        self,
        access_token: str,
        api_url: str = DEFAULT_API_URL,
        max_429_retries: int = DEFAULT_MAX_429_RETRIES,
        *,
        waiting_ms: int = DEFAULT_WAITING_MS,
        timeout: float = 30.0,
        logger: ServiceLogger | None = None,
        stats: ServiceStats | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize dispatcher.
        
        Args:
            access_token: Bearer token sent with every request
            api_url: Base URL, paths are appended as-is
            max_429_retries: Retries allowed per path on HTTP 429
            waiting_ms: Base wait between retries
            timeout: Request timeout for the owned client
            logger: Diagnostics sink (default: stdlib-backed adapter)
            stats: Shared statistics (default: a private instance)
            client: Existing client to use instead of creating one
            transport: Transport for the owned client (tests use MockTransport)
        """
        self.access_token = access_token
        self.api_url = api_url
        self.waiting_ms = waiting_ms
        self.retry_state = RetryState(max_429_retries=max_429_retries)
        self.logger: ServiceLogger = logger or LoggerAdapter()
        self.stats = stats or ServiceStats()
        self._timeout = timeout
        self._transport = transport
        self._client = client
        self._owns_client = client is None
    
    @property
    def max_429_retries(self) -> int:
        """Retries allowed per path on HTTP 429."""
        return self.retry_state.max_429_retries
    
    @property
    def headers(self) -> dict[str, str]:
        """Headers for every request.
        
        Content-Type is JSON even for binary downloads; the API ignores it.
        """
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }
    
    def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
            self._owns_client = True
        return self._client
    
    async def close(self) -> None:
        """Close the HTTP client if this dispatcher created it."""
        if self._owns_client and self._client is not None:
            if not self._client.is_closed:
                await self._client.aclose()
            self._client = None
    
    async def __aenter__(self) -> "RequestDispatcher":
        self._ensure_client()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
    
    async def send(self, path: str, method: str = "GET") -> httpx.Response:
        """Send one request with no retry handling.
        
        Raises:
            httpx.HTTPError: On transport failure
        """
        client = self._ensure_client()
        return await client.request(method, f"{self.api_url}{path}", headers=self.headers)
    
    async def dispatch(self, path: str, method: str = "GET", binary: bool = False) -> Any | None:
        """Fetch ``path`` and decode the body.
        
        Args:
            path: Path relative to ``api_url``
            method: HTTP method
            binary: Return raw bytes instead of parsed JSON
            
        Returns:
            Decoded body, or None on any failure (already logged)
        """
        result = await self.dispatch_result(path, method, binary)
        return result.value
    
    async def dispatch_result(
        self,
        path: str,
        method: str = "GET",
        binary: bool = False,
    ) -> DispatchResult:
        """Fetch ``path``, retrying 429/503 within the path's budget.
        
        Never raises for HTTP or transport failures; see ``DispatchResult``.
        """
        attempts = 0
        
        while True:
            attempts += 1
            self.stats.increment(QUERY_COUNTER)
            
            try:
                response = await self.send(path, method)
                if response.is_success:
                    value = response.content if binary else response.json()
                    return DispatchResult(
                        path, DispatchOutcome.OK, value, response.status_code, attempts
                    )
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
                self.logger.error(f"Couldn't fetch {path}, ", e)
                return DispatchResult(
                    path, DispatchOutcome.TRANSPORT_FAILURE, attempts=attempts, error=e
                )
            
            status = response.status_code
            
            if status == 429:
                wait_ms = self.retry_state.next_429_wait(path, self.waiting_ms)
                if wait_ms is None:
                    self.logger.error(
                        f"Couldn't fetch {path}, tried to get it {self.max_429_retries} times"
                    )
                    return DispatchResult(
                        path,
                        DispatchOutcome.RATE_LIMITED,
                        status_code=status,
                        attempts=attempts,
                        retry_limit=self.max_429_retries,
                    )
                self.logger.debug(f"HTTP 429: for {path}, waiting in ms: {wait_ms}")
            
            elif status == 503:
                wait_ms = self._service_unavailable_wait(response)
                self.logger.debug(f"HTTP 503: for {path}, waiting in ms: {wait_ms}")
                if not self.retry_state.check_503(path):
                    self.logger.error(
                        f"Couldn't fetch {path}, tried to get it "
                        f"{self.retry_state.max_503_retries} times"
                    )
                    return DispatchResult(
                        path,
                        DispatchOutcome.SERVICE_UNAVAILABLE,
                        status_code=status,
                        attempts=attempts,
                        retry_limit=self.retry_state.max_503_retries,
                    )
            
            else:
                self.logger.debug(f"Couldn't fetch {path}, received {status}")
                return DispatchResult(
                    path, DispatchOutcome.HTTP_ERROR, status_code=status, attempts=attempts
                )
            
            await asyncio.sleep(wait_ms / 1000)
    
    def _service_unavailable_wait(self, response: httpx.Response) -> int:
        """Milliseconds to wait after a 503.
        
        Uses the server's reset time when it is still in the future,
        otherwise the base wait. An unparseable or non-finite header
        counts as no hint.
        """
        now_ms = int(time.time() * 1000)
        raw = response.headers.get(RATE_LIMIT_RESET_HEADER)
        try:
            reset_ms = int(float(raw) * 1000) if raw else 0
        except (ValueError, OverflowError):
            reset_ms = 0
        return max(self.waiting_ms, reset_ms - now_ms)


__all__ = [
    "DispatchOutcome",
    "DispatchResult",
    "RequestDispatcher",
]
