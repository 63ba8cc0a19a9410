"""
Sync Package - Cache Consistency Between Store and Source.

    - HistorySyncEngine: get / set / get_or_fetch / get_cache_only
    - SyncStats: Counters per strategy taken
"""

from report_history.sync.engine import HistorySyncEngine, SyncStats

__all__ = ["HistorySyncEngine", "SyncStats"]
