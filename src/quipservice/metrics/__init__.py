"""QuipService call statistics.

Example:
    >>> from quipservice.metrics import ServiceStats
    >>> 
    >>> stats = ServiceStats()
    >>> stats.increment("get_thread_count")
    >>> stats.get("get_thread_count")
    1
"""

from quipservice.metrics.stats import OPERATION_COUNTERS, ServiceStats, StatsSummary

__all__ = [
    "OPERATION_COUNTERS",
    "ServiceStats",
    "StatsSummary",
]
