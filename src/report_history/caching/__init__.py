"""
Caching Layer.

Provides the in-memory history cache:
    - HistoryStore: Per-entity newest-first histories
    - CachedHistory: One entity's slot (entries plus sequence index)
    - StoreStats: Statistics tracking for store operations
"""

from report_history.caching.history_store import (
    CachedHistory,
    HistoryStore,
    StoreStats,
)

__all__ = [
    "CachedHistory",
    "HistoryStore",
    "StoreStats",
]
