"""
History Sync Engine - Decide and Execute the Fetch Strategy.

Wraps a HistorySource and a HistoryStore. For every request it picks one
of three strategies:
    - serve the cache as-is (duplicate or in-order live push)
    - full fetch and replace (entity never loaded)
    - incremental fetch from the newest cached sequence number and merge

Design Notes:
    - Only component that talks to the source
    - Per-entity asyncio.Lock serializes operations on one entity;
      identical concurrent requests are serialized, not coalesced
    - The store is only mutated after a fetch resolved and validated
    - Every returned value is a filtered tuple snapshot
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional, Protocol

from report_history.caching.history_store import HistoryStore
from report_history.config.models import HistoryCacheConfig
from report_history.domain.entities import HistoryEntry, HistorySnapshot
from report_history.domain.exceptions import HistoryFetchError
from report_history.filters.exclusion import ExclusionFilter
from report_history.interfaces.history_source import HistorySource
from report_history.validation.entry_validator import EntryValidator

logger = logging.getLogger(__name__)


class MetricsCollectorProtocol(Protocol):
    """Protocol for metrics collection."""

    def record_metric(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record a metric."""
        ...


@dataclass
class SyncStats:
    """Counters for the strategies taken by the engine."""

    full_fetches: int = 0
    incremental_fetches: int = 0
    fast_path_hits: int = 0
    duplicate_deliveries: int = 0
    gap_reconciliations: int = 0
    fetch_failures: int = 0


class HistorySyncEngine:
    """
    Keeps per-entity histories in sync with a remote source.

    Usage:
        engine = HistorySyncEngine(api_source)

        # First call: full fetch
        history = await engine.get(report_id)

        # Live push of the next action: no network round trip
        history = await engine.set(report_id, {"sequenceNumber": 6, ...})

    An engine is bound to the event loop it is first used on: its
    per-entity locks are created lazily and never dropped, so do not
    share one engine across loops (for example per-test loops).
    """

    def __init__(
        self,
        source: HistorySource,
        store: Optional[HistoryStore] = None,
        exclusion_filter: Optional[ExclusionFilter] = None,
        validator: Optional[EntryValidator] = None,
        metrics_collector: Optional[MetricsCollectorProtocol] = None,
    ) -> None:
        """
        Initialize sync engine.

        Args:
            source: Remote history source
            store: History store (creates one if None)
            exclusion_filter: Presentation filter (default policy if None)
            validator: Boundary validator for incoming entries
            metrics_collector: Optional metrics collector for tracking
        """
        self.source = source
        self.store = store or HistoryStore()
        self.exclusion_filter = exclusion_filter or ExclusionFilter()
        self.validator = validator or EntryValidator()
        self.metrics = metrics_collector

        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._stats = SyncStats()

    @classmethod
    def from_config(
        cls,
        source: HistorySource,
        config: HistoryCacheConfig,
        metrics_collector: Optional[MetricsCollectorProtocol] = None,
    ) -> "HistorySyncEngine":
        """Build an engine whose store and filter follow a loaded config."""
        return cls(
            source,
            store=HistoryStore(config.store),
            exclusion_filter=ExclusionFilter(config.exclusion),
            metrics_collector=metrics_collector,
        )

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def get(self, entity_id: Hashable) -> HistorySnapshot:
        """
        Return the freshest history of an entity.

        Never loaded: full fetch. Otherwise: incremental fetch of the
        entries newer than the cached head, merged into the cache.

        Raises:
            HistoryFetchError: If the source fails
            MalformedEntryError: If the source returns an unusable entry
        """
        async with self._lock_for(entity_id):
            snapshot = await self._refresh(entity_id)
        return self._present(snapshot)

    async def set(self, entity_id: Hashable, entry: Any) -> HistorySnapshot:
        """
        Reconcile a single live-pushed entry.

        Args:
            entity_id: Entity identifier
            entry: HistoryEntry or raw mapping

        Returns:
            Filtered history after reconciliation

        Raises:
            MalformedEntryError: If the entry has no usable sequence number
            HistoryFetchError: If a fallback fetch fails
        """
        entry = self.validator.validate(entry)
        seq = entry.sequence_number

        async with self._lock_for(entity_id):
            if not self.store.is_loaded(entity_id):
                await self._fetch_all(entity_id)

            if self.store.contains(entity_id, seq):
                self._record("duplicate_deliveries")
                logger.debug(f"{entity_id!r}: entry {seq} already cached")
                snapshot = self.store.read(entity_id) or ()

            elif self.store.contains(entity_id, seq - 1):
                self._record("fast_path_hits")
                logger.debug(f"{entity_id!r}: entry {seq} follows cached {seq - 1}, no fetch")
                snapshot = self.store.add(entity_id, entry)

            else:
                self._record("gap_reconciliations")
                logger.debug(
                    f"{entity_id!r}: predecessor of {seq} missing, reconciling with source"
                )
                snapshot = await self._refresh(entity_id)

        return self._present(snapshot)

    async def get_or_fetch(self, entity_id: Hashable) -> HistorySnapshot:
        """Serve the cached history when present, full fetch otherwise."""
        async with self._lock_for(entity_id):
            snapshot = self.store.read(entity_id)
            if snapshot is None:
                snapshot = await self._fetch_all(entity_id)
        return self._present(snapshot)

    def get_cache_only(self, entity_id: Hashable) -> Optional[HistorySnapshot]:
        """Filtered cached history, or None if never loaded. No network access."""
        snapshot = self.store.read(entity_id)
        if snapshot is None:
            return None
        return self._present(snapshot)

    def filter_hidden(self, entries: Iterable[Any]) -> tuple:
        """Apply the exclusion filter to a history obtained elsewhere."""
        return self.exclusion_filter.apply(entries)

    def get_stats(self) -> SyncStats:
        """Get a copy of the strategy counters."""
        return SyncStats(**vars(self._stats))

    # ------------------------------------------------------------------
    # Strategies (caller holds the entity lock)
    # ------------------------------------------------------------------

    async def _refresh(self, entity_id: Hashable) -> HistorySnapshot:
        newest = self.store.newest_sequence(entity_id)
        if newest is None:
            return await self._fetch_all(entity_id)

        self._record("incremental_fetches")
        logger.debug(f"{entity_id!r}: incremental fetch after {newest}")
        delta = await self._fetch(entity_id, offset=newest)
        return self.store.merge(entity_id, delta)

    async def _fetch_all(self, entity_id: Hashable) -> HistorySnapshot:
        self._record("full_fetches")
        logger.debug(f"{entity_id!r}: full fetch")
        entries = await self._fetch(entity_id)
        return self.store.replace(entity_id, entries)

    async def _fetch(
        self,
        entity_id: Hashable,
        offset: Optional[int] = None,
    ) -> List[HistoryEntry]:
        """Call the source and validate the batch. Leaves the store untouched on failure."""
        try:
            if offset is None:
                raw = await self.source.fetch_history(entity_id)
            else:
                raw = await self.source.fetch_history(entity_id, offset=offset)
        except Exception as e:
            self._record("fetch_failures")
            logger.error(f"History fetch for {entity_id!r} failed: {e}")
            raise HistoryFetchError(entity_id, offset) from e

        return self.validator.validate_batch(raw)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _present(self, snapshot: HistorySnapshot) -> HistorySnapshot:
        return self.exclusion_filter.apply(snapshot)

    def _lock_for(self, entity_id: Hashable) -> asyncio.Lock:
        """Per-entity lock; binds to the running loop on first contention."""
        lock = self._locks.get(entity_id)
        if lock is None:
            lock = self._locks[entity_id] = asyncio.Lock()
        return lock

    def _record(self, counter: str) -> None:
        setattr(self._stats, counter, getattr(self._stats, counter) + 1)

        if self.metrics:
            self.metrics.record_metric(
                "history_sync",
                1.0,
                tags={"strategy": counter},
            )
