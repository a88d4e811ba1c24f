"""Invocation counters for API operations.

Counts are purely observational: ``query_count`` goes up once per network
attempt (retries included), every other counter once per public accessor
call.

Example:
    >>> from quipservice.metrics.stats import ServiceStats
    >>> 
    >>> stats = ServiceStats()
    >>> stats.increment("query_count")
    >>> stats.increment("get_pdf_count")
    >>> stats.summary().total_queries
    1
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("quipservice.metrics")

QUERY_COUNTER = "query_count"

OPERATION_COUNTERS: tuple[str, ...] = (
    "get_thread_count",
    "get_threads_count",
    "get_folder_count",
    "get_folders_count",
    "get_blob_count",
    "get_pdf_count",
    "get_xlsx_count",
    "get_docx_count",
    "get_current_user_count",
    "get_thread_messages_count",
    "get_user_count",
)


@dataclass
class StatsSummary:
    """Summary of collected statistics.
    
    Attributes:
        total_queries: Network attempts made by the dispatcher
        total_calls: Public accessor calls across all operations
        by_operation: Accessor calls grouped by counter name
    """
    
    total_queries: int = 0
    total_calls: int = 0
    by_operation: dict[str, int] = field(default_factory=dict)
    
    def __str__(self) -> str:
        """Format summary as human-readable string."""
        lines = [
            "QuipService Statistics",
            "=" * 40,
            f"Total queries: {self.total_queries:,}",
            f"Total calls: {self.total_calls:,}",
        ]
        
        called = {name: count for name, count in self.by_operation.items() if count}
        if called:
            lines.append("\nCalls by operation:")
            for name, count in sorted(called.items(), key=lambda x: -x[1]):
                lines.append(f"  {name}: {count:,}")
        
        return "\n".join(lines)
    
    def to_dict(self) -> dict[str, Any]:
        """Convert summary to dictionary for JSON serialization."""
        return {
            "total_queries": self.total_queries,
            "total_calls": self.total_calls,
            "by_operation": self.by_operation,
        }


class ServiceStats:
    """Monotonic counters keyed by operation name.
    
    All known counters start at zero so ``to_dict()`` always has the full
    set of keys; unknown names are accepted and created on first use.
    
    Example:
        >>> stats = ServiceStats()
        >>> stats.get("get_user_count")
        0
        >>> stats.increment("get_user_count")
        >>> stats["get_user_count"]
        1
    """
    
    def __init__(self) -> None:
        self._counts: dict[str, int] = defaultdict(int)
        self.reset()
    
    def increment(self, name: str, count: int = 1) -> None:
        """Add ``count`` to a counter.
        
        Args:
            name: Counter name (e.g., "query_count", "get_thread_count")
            count: Amount to add, must not be negative
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        self._counts[name] += count
    
    def get(self, name: str) -> int:
        """Current value of a counter (0 if never incremented)."""
        return self._counts.get(name, 0)
    
    def __getitem__(self, name: str) -> int:
        return self.get(name)
    
    def summary(self) -> StatsSummary:
        """Get statistics summary.
        
        Returns:
            StatsSummary with aggregated counts
        """
        by_operation = {
            name: count for name, count in self._counts.items() if name != QUERY_COUNTER
        }
        return StatsSummary(
            total_queries=self.get(QUERY_COUNTER),
            total_calls=sum(by_operation.values()),
            by_operation=by_operation,
        )
    
    def reset(self) -> None:
        """Reset all counters to zero."""
        self._counts.clear()
        for name in (QUERY_COUNTER, *OPERATION_COUNTERS):
            self._counts[name] = 0
        logger.debug("Statistics reset")
    
    def to_dict(self) -> dict[str, int]:
        """Export counters as a plain dictionary."""
        return dict(self._counts)


__all__ = [
    "OPERATION_COUNTERS",
    "QUERY_COUNTER",
    "ServiceStats",
    "StatsSummary",
]
