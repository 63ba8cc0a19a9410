"""
Exceptions raised by the report history cache.
"""

from __future__ import annotations

from typing import Any, List, Optional


class ReportHistoryError(Exception):
    """Base class for all report history errors."""
    pass


class HistoryFetchError(ReportHistoryError):
    """Raised when the history source fails to deliver a batch."""

    def __init__(self, entity_id: Any, offset: Optional[int] = None) -> None:
        if offset is None:
            message = f"Full history fetch failed for {entity_id!r}"
        else:
            message = f"Incremental history fetch failed for {entity_id!r} (offset={offset})"
        super().__init__(message)
        self.entity_id = entity_id
        self.offset = offset


class CacheNotLoadedError(ReportHistoryError):
    """Raised by a strict store when merging into a history that was never loaded."""

    def __init__(self, entity_id: Any) -> None:
        super().__init__(f"No cached history for {entity_id!r}; replace() must run first")
        self.entity_id = entity_id


class MalformedEntryError(ReportHistoryError):
    """Raised when a raw entry cannot be turned into a HistoryEntry."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class ConfigError(ReportHistoryError):
    """Raised when a history cache configuration cannot be loaded."""

    def __init__(self, source: str, problems: List[str]) -> None:
        super().__init__(f"Invalid history cache config {source}: " + "; ".join(problems))
        self.source = source
        self.problems = problems
