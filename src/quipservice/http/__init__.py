"""QuipService HTTP layer.

Provides the request dispatcher and its per-path retry state.

Example:
    >>> from quipservice.http import RequestDispatcher
    >>> 
    >>> async with RequestDispatcher("token") as dispatcher:
    ...     user = await dispatcher.dispatch("/users/current")
    ...     result = await dispatcher.dispatch_result("/threads/AbCdEf")
    ...     if not result.ok:
    ...         print(result.outcome)
"""

from quipservice.http.dispatcher import DispatchOutcome, DispatchResult, RequestDispatcher
from quipservice.http.retry_state import RetryState

__all__ = [
    "DispatchOutcome",
    "DispatchResult",
    "RequestDispatcher",
    "RetryState",
]
