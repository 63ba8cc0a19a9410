"""
Domain Layer - History Entries and Errors.

Entities:
    - HistoryEntry: One sequence-numbered action of an entity's log
    - HistorySnapshot: Immutable newest-first tuple of entries

Errors:
    - ReportHistoryError: Base class
    - HistoryFetchError: The remote source failed
    - CacheNotLoadedError: Merge attempted before a full load (strict mode)
    - ConfigError: Configuration file unreadable or invalid
    - MalformedEntryError: Entry rejected at the boundary

Design Principles:
    - Immutable (frozen pydantic models, tuple snapshots)
    - No infrastructure dependencies
"""

from report_history.domain.entities import HistoryEntry, HistorySnapshot
from report_history.domain.exceptions import (
    CacheNotLoadedError,
    ConfigError,
    HistoryFetchError,
    MalformedEntryError,
    ReportHistoryError,
)

__all__ = [
    "CacheNotLoadedError",
    "ConfigError",
    "HistoryEntry",
    "HistoryFetchError",
    "HistorySnapshot",
    "MalformedEntryError",
    "ReportHistoryError",
]
