"""Quip API accessors.

``QuipService`` has one method per API endpoint. Each bumps its own
statistic, builds the path and hands it to the ``RequestDispatcher``
with the binary flag set for exports and blobs.

Example:
    >>> from quipservice import QuipService
    >>> 
    >>> async with QuipService("token") as quip:
    ...     me = await quip.get_current_user()
    ...     threads = await quip.get_threads(["AbCdEf", "GhIjKl"])
    ...     pdf = await quip.get_pdf("AbCdEf")
    ...     print(quip.stats.summary())
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx

from quipservice.core.config import DEFAULT_API_URL, Settings
from quipservice.core.exceptions import TransportError
from quipservice.http.dispatcher import DEFAULT_WAITING_MS, RequestDispatcher
from quipservice.http.retry_state import DEFAULT_MAX_429_RETRIES
from quipservice.metrics.stats import ServiceStats
from quipservice.protocols.logger import LoggerAdapter, ServiceLogger

Ids = str | Iterable[str]


def _join_ids(ids: Ids) -> str:
    """Comma-join ids; a single string is passed through unchanged."""
    if isinstance(ids, str):
        return ids
    return ",".join(ids)


class QuipService:
    """Client for the Quip platform API.
    
    Failures never raise: accessors return None and the reason goes to
    the logger. Use ``dispatcher.dispatch_result()`` to tell failure
    kinds apart.
    
    Example:
        >>> quip = QuipService("token", "http://quip.example", max_429_retries=2)
        >>> quip.api_url
        'http://quip.example'
        >>> quip.stats.get("get_thread_count")
        0
    
    Attributes:
        stats: Invocation counters, shared with the dispatcher
        dispatcher: Request dispatcher holding the retry state
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
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the service.
        
        Args:
            access_token: Bearer token
            api_url: Base API URL including the version segment
            max_429_retries: Retries allowed per path on HTTP 429
            waiting_ms: Base wait between retries
            timeout: Request timeout in seconds
            logger: Diagnostics sink (default: ``LoggerAdapter``)
            client: Existing httpx client to reuse
            transport: Transport for the owned client
        """
        self.stats = ServiceStats()
        self.dispatcher = RequestDispatcher(
            access_token,
            api_url,
            max_429_retries,
            waiting_ms=waiting_ms,
            timeout=timeout,
            logger=logger or LoggerAdapter(),
            stats=self.stats,
            client=client,
            transport=transport,
        )
    
    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "QuipService":
        """Build a service from ``Settings``.
        
        Example:
            >>> from quipservice.core.config import Settings
            >>> quip = QuipService.from_settings(Settings(access_token="t", waiting_ms=10))
            >>> quip.waiting_ms
            10
        """
        return cls(
            settings.access_token,
            settings.api_url,
            settings.max_429_retries,
            waiting_ms=settings.waiting_ms,
            timeout=settings.request_timeout,
            **kwargs,
        )
    
    @property
    def access_token(self) -> str:
        return self.dispatcher.access_token
    
    @property
    def api_url(self) -> str:
        return self.dispatcher.api_url
    
    @property
    def max_429_retries(self) -> int:
        return self.dispatcher.max_429_retries
    
    @property
    def waiting_ms(self) -> int:
        """Base wait between retries, in milliseconds."""
        return self.dispatcher.waiting_ms
    
    @waiting_ms.setter
    def waiting_ms(self, value: int) -> None:
        self.dispatcher.waiting_ms = value
    
    @property
    def logger(self) -> ServiceLogger:
        return self.dispatcher.logger
    
    def set_logger(self, logger: ServiceLogger) -> None:
        """Replace the logging collaborator."""
        self.dispatcher.logger = logger
    
    async def close(self) -> None:
        await self.dispatcher.close()
    
    async def __aenter__(self) -> "QuipService":
        await self.dispatcher.__aenter__()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
    
    # =========================================================================
    # Authentication check
    # =========================================================================
    
    async def check_user(self) -> bool:
        """Check that the token is accepted.
        
        Single request, no retries.
        
        Returns:
            True if ``/users/current`` answered with a 2xx status
            
        Raises:
            TransportError: If no response was received
        """
        self.stats.increment("get_current_user_count")
        
        try:
            response = await self.dispatcher.send("/users/current")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError("/users/current", str(e)) from e
        return response.is_success
    
    # =========================================================================
    # Structured endpoints
    # =========================================================================
    
    async def get_user(self, user_ids: Ids) -> Any | None:
        """Get one user, or several when given multiple ids."""
        self.stats.increment("get_user_count")
        return await self.api_call_json(f"/users/{_join_ids(user_ids)}")
    
    async def get_current_user(self) -> Any | None:
        self.stats.increment("get_current_user_count")
        return await self.api_call_json("/users/current")
    
    async def get_folder(self, folder_id: str) -> Any | None:
        self.stats.increment("get_folder_count")
        return await self.api_call_json(f"/folders/{folder_id}")
    
    async def get_folders(self, folder_ids: Ids) -> Any | None:
        """Get several folders keyed by id."""
        self.stats.increment("get_folders_count")
        return await self.api_call_json(f"/folders/?ids={_join_ids(folder_ids)}")
    
    async def get_thread(self, thread_id: str) -> Any | None:
        self.stats.increment("get_thread_count")
        return await self.api_call_json(f"/threads/{thread_id}")
    
    async def get_threads(self, thread_ids: Ids) -> Any | None:
        """Get several threads keyed by id."""
        self.stats.increment("get_threads_count")
        return await self.api_call_json(f"/threads/?ids={_join_ids(thread_ids)}")
    
    async def get_thread_messages(self, thread_id: str) -> Any | None:
        self.stats.increment("get_thread_messages_count")
        return await self.api_call_json(f"/messages/{thread_id}")
    
    # =========================================================================
    # Binary endpoints
    # =========================================================================
    
    async def get_blob(self, thread_id: str, blob_id: str) -> bytes | None:
        """Download an image or attachment embedded in a thread."""
        self.stats.increment("get_blob_count")
        return await self.api_call_blob(f"/blob/{thread_id}/{blob_id}")
    
    async def get_pdf(self, thread_id: str) -> bytes | None:
        self.stats.increment("get_pdf_count")
        return await self.api_call_blob(f"/threads/{thread_id}/export/pdf")
    
    async def get_docx(self, thread_id: str) -> bytes | None:
        self.stats.increment("get_docx_count")
        return await self.api_call_blob(f"/threads/{thread_id}/export/docx")
    
    async def get_xlsx(self, thread_id: str) -> bytes | None:
        self.stats.increment("get_xlsx_count")
        return await self.api_call_blob(f"/threads/{thread_id}/export/xlsx")
    
    # =========================================================================
    # Dispatch helpers
    # =========================================================================
    
    async def api_call_json(self, path: str, method: str = "GET") -> Any | None:
        return await self.dispatcher.dispatch(path, method, False)
    
    async def api_call_blob(self, path: str, method: str = "GET") -> bytes | None:
        return await self.dispatcher.dispatch(path, method, True)


__all__ = [
    "QuipService",
]
