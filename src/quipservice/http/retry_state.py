"""Per-path retry budgets for rate-limited and unavailable responses.

Two independent tables keyed by request path. Entries are created on the
first 429/503 for a path and live as long as the ``RetryState`` instance;
exhausted budgets are never cleared, so a later call to the same path
fails immediately.

Example:
    >>> from quipservice.http.retry_state import RetryState
    >>> 
    >>> state = RetryState(max_429_retries=2)
    >>> state.next_429_wait("/threads/abc", 1000)
    1000
    >>> state.next_429_wait("/threads/abc", 1000)
    1000
    >>> state.next_429_wait("/threads/abc", 1000) is None
    True
"""

from __future__ import annotations

DEFAULT_MAX_429_RETRIES = 3
MAX_503_RETRIES = 10


class RetryState:
    """Retry counters for HTTP 429 and 503, tracked per path.
    
    Check-and-increment never suspends, so on a single event loop two
    coroutines cannot both pass the check for the last retry.
    
    Attributes:
        max_429_retries: Retries allowed per path for 429 responses
        max_503_retries: Retries allowed per path for 503 responses
    """
    
    def __init__(
        self,
        max_429_retries: int = DEFAULT_MAX_429_RETRIES,
        max_503_retries: int = MAX_503_RETRIES,
    ):
        if not isinstance(max_429_retries, int) or max_429_retries < 0:
            raise ValueError(
                f"max_429_retries must be a non-negative integer, got {max_429_retries}"
            )
        if not isinstance(max_503_retries, int) or max_503_retries < 0:
            raise ValueError(
                f"max_503_retries must be a non-negative integer, got {max_503_retries}"
            )
        
        self.max_429_retries = max_429_retries
        self.max_503_retries = max_503_retries
        self._counts_429: dict[str, int] = {}
        self._counts_503: dict[str, int] = {}
    
    def next_429_wait(self, path: str, waiting_ms: int) -> int | None:
        """Consume one 429 retry for ``path``.
        
        Args:
            path: Request path
            waiting_ms: Flat wait to hand back when a retry is granted
            
        Returns:
            ``waiting_ms`` if a retry is granted, ``None`` once the path
            has used all of its retries
        """
        count = self._counts_429.get(path, 0)
        if count >= self.max_429_retries:
            return None
        
        self._counts_429[path] = count + 1
        return waiting_ms
    
    def check_503(self, path: str) -> bool:
        """Consume one 503 retry for ``path``.
        
        The counter is bumped before the check, so it ends one past the
        ceiling once the budget is gone.
        
        Returns:
            True if another attempt is allowed
        """
        count = self._counts_503.get(path, 0) + 1
        self._counts_503[path] = count
        return count <= self.max_503_retries
    
    def count_429(self, path: str) -> int:
        """429 retries consumed so far for ``path``."""
        return self._counts_429.get(path, 0)
    
    def count_503(self, path: str) -> int:
        """503 retry checks made so far for ``path``."""
        return self._counts_503.get(path, 0)
    
    def reset(self, path: str | None = None) -> None:
        """Forget retry history for one path, or for all paths."""
        if path is None:
            self._counts_429.clear()
            self._counts_503.clear()
        else:
            self._counts_429.pop(path, None)
            self._counts_503.pop(path, None)


__all__ = [
    "DEFAULT_MAX_429_RETRIES",
    "MAX_503_RETRIES",
    "RetryState",
]
