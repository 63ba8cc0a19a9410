"""
Report History - Client-Side Cache for Sequence-Numbered Entity Histories.

Keeps the event history of each entity (for example a report) in memory
and reconciles it with a remote service using as few fetches as
possible. Entries of hidden categories stay in the cache but are never
returned to callers.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - Configuration-driven exclusion policy via YAML

Main Components:
    - domain: HistoryEntry and the exception hierarchy
    - interfaces: HistorySource protocol
    - caching: HistoryStore (per-entity newest-first histories)
    - filters: ExclusionFilter
    - sync: HistorySyncEngine (get / set reconciliation)
    - validation: Boundary checks for incoming entries
    - adapters: InMemoryHistorySource
    - config: Configuration models and loaders

Example:
    >>> from report_history import HistorySyncEngine, load_config
    >>> engine = HistorySyncEngine.from_config(api_source, load_config("config.yaml"))
    >>> history = await engine.get(report_id)
    >>> history = await engine.set(report_id, pushed_action)

"""

import logging

__version__ = "1.0.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Report History.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import report_history
        >>> report_history.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("report_history").setLevel(level)


from report_history.adapters import InMemoryHistorySource  # noqa: E402
from report_history.caching import HistoryStore, StoreStats  # noqa: E402
from report_history.config import (  # noqa: E402
    ConfigLoader,
    ExclusionPolicyConfig,
    HistoryCacheConfig,
    StoreConfig,
    load_config,
)
from report_history.domain import (  # noqa: E402
    CacheNotLoadedError,
    ConfigError,
    HistoryEntry,
    HistoryFetchError,
    HistorySnapshot,
    MalformedEntryError,
    ReportHistoryError,
)
from report_history.filters import ExclusionFilter  # noqa: E402
from report_history.interfaces import HistorySource  # noqa: E402
from report_history.sync import HistorySyncEngine, SyncStats  # noqa: E402
from report_history.validation import EntryValidator  # noqa: E402

__all__ = [
    "CacheNotLoadedError",
    "ConfigError",
    "ConfigLoader",
    "EntryValidator",
    "ExclusionFilter",
    "ExclusionPolicyConfig",
    "HistoryCacheConfig",
    "HistoryEntry",
    "HistoryFetchError",
    "HistorySnapshot",
    "HistorySource",
    "HistoryStore",
    "HistorySyncEngine",
    "InMemoryHistorySource",
    "MalformedEntryError",
    "ReportHistoryError",
    "StoreConfig",
    "StoreStats",
    "SyncStats",
    "configure_logging",
    "load_config",
]
