"""
History Store - Per-Entity Newest-First History Cache.

Holds, per entity identifier, the cached history sorted newest-first
with unique sequence numbers. Never performs network access or
filtering.

Design Notes:
    - Memory only, no TTL and no eviction
    - Thread-safe with a reentrant lock
    - Sequence-number index per entity for O(1) membership checks
    - Callers only ever receive tuples of deep-copied entries
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, List, Optional, Set

from report_history.config.models import StoreConfig
from report_history.domain.entities import HistoryEntry, HistorySnapshot
from report_history.domain.exceptions import CacheNotLoadedError

logger = logging.getLogger(__name__)


def _sequence(entry: HistoryEntry) -> int:
    return entry.sequence_number


@dataclass
class CachedHistory:
    """Mutable cache slot for one entity (owned by the store)."""

    entries: List[HistoryEntry] = field(default_factory=list)
    sequence_numbers: Set[int] = field(default_factory=set)

    @property
    def newest_sequence(self) -> int:
        """Highest cached sequence number, 0 for an empty history."""
        return self.entries[0].sequence_number if self.entries else 0

    def snapshot(self) -> HistorySnapshot:
        """Deep copies, so nested payload handed out cannot reach the store."""
        return tuple(entry.model_copy(deep=True) for entry in self.entries)


@dataclass
class StoreStats:
    """Store statistics."""

    entities: int = 0
    entries: int = 0
    replacements: int = 0
    merges: int = 0
    merged_entries: int = 0
    precondition_violations: int = 0


class HistoryStore:
    """
    In-memory store of newest-first entity histories.

    Operations:
        - read: current snapshot or None when never loaded
        - replace: install a complete history (after a full fetch)
        - merge: fold a delta batch in, skipping known sequence numbers
        - add: ordered insert of a single entry
    """

    def __init__(self, config: Optional[StoreConfig] = None) -> None:
        """
        Initialize history store.

        Args:
            config: Store configuration
        """
        self.config = config or StoreConfig()
        self._histories: Dict[Hashable, CachedHistory] = {}
        self._lock = threading.RLock()
        self._stats = StoreStats()

    def read(self, entity_id: Hashable) -> Optional[HistorySnapshot]:
        """
        Read the cached history of an entity.

        Args:
            entity_id: Entity identifier

        Returns:
            Newest-first snapshot, or None if the entity was never loaded
        """
        with self._lock:
            history = self._histories.get(entity_id)
            if history is None:
                if self.config.log_access:
                    logger.debug(f"Store MISS: {entity_id!r}")
                return None
            if self.config.log_access:
                logger.debug(f"Store HIT: {entity_id!r} ({len(history.entries)} entries)")
            return history.snapshot()

    def is_loaded(self, entity_id: Hashable) -> bool:
        with self._lock:
            return entity_id in self._histories

    def contains(self, entity_id: Hashable, sequence_number: int) -> bool:
        """Check whether a sequence number is cached for an entity."""
        with self._lock:
            history = self._histories.get(entity_id)
            return history is not None and sequence_number in history.sequence_numbers

    def newest_sequence(self, entity_id: Hashable) -> Optional[int]:
        """
        Newest cached sequence number.

        Returns:
            None if never loaded, 0 if loaded but empty
        """
        with self._lock:
            history = self._histories.get(entity_id)
            return None if history is None else history.newest_sequence

    def replace(
        self,
        entity_id: Hashable,
        entries: Iterable[HistoryEntry],
    ) -> HistorySnapshot:
        """
        Install a complete history, overwriting anything cached before.

        Input is expected newest-first and unique; it is normalized anyway
        so a differently ordered full fetch cannot break the invariant.
        The first occurrence of a duplicated sequence number wins.

        Args:
            entity_id: Entity identifier
            entries: Complete history

        Returns:
            Snapshot of the installed history
        """
        history = CachedHistory()
        for entry in entries:
            if entry.sequence_number in history.sequence_numbers:
                continue
            history.sequence_numbers.add(entry.sequence_number)
            history.entries.append(entry)
        history.entries.sort(key=_sequence, reverse=True)

        with self._lock:
            self._histories[entity_id] = history
            self._stats.replacements += 1
            logger.info(f"Store REPLACED {entity_id!r}: {len(history.entries)} entries")
            return history.snapshot()

    def merge(
        self,
        entity_id: Hashable,
        delta: Iterable[HistoryEntry],
    ) -> HistorySnapshot:
        """
        Merge a delta batch into a cached history.

        Delta entries may arrive in any order. Entries whose sequence
        number is already cached are skipped. When every new entry is newer
        than the cached head the batch is prepended newest-first; older
        stragglers are placed at their ordered position.

        Args:
            entity_id: Entity identifier (must already be loaded)
            delta: Entries to fold in

        Returns:
            Snapshot after the merge; empty if the entity was never loaded
            and strict_merge is off

        Raises:
            CacheNotLoadedError: If the entity was never loaded and
                strict_merge is on
        """
        delta = list(delta)

        with self._lock:
            history = self._histories.get(entity_id)
            if history is None:
                self._stats.precondition_violations += 1
                if self.config.strict_merge:
                    raise CacheNotLoadedError(entity_id)
                logger.warning(
                    f"Merge into unloaded history {entity_id!r} ignored "
                    f"({len(delta)} entries dropped)"
                )
                return ()

            if not delta:
                return history.snapshot()

            fresh: Dict[int, HistoryEntry] = {}
            for entry in sorted(delta, key=_sequence):
                seq = entry.sequence_number
                if seq not in history.sequence_numbers and seq not in fresh:
                    fresh[seq] = entry

            if fresh:
                ordered = sorted(fresh.values(), key=_sequence, reverse=True)
                if not history.entries or ordered[-1].sequence_number > history.newest_sequence:
                    history.entries[:0] = ordered
                else:
                    history.entries.extend(ordered)
                    history.entries.sort(key=_sequence, reverse=True)
                    logger.debug(f"Store backfilled older entries into {entity_id!r}")
                history.sequence_numbers.update(fresh)

            self._stats.merges += 1
            self._stats.merged_entries += len(fresh)
            logger.debug(
                f"Store MERGED {entity_id!r}: {len(fresh)} new of {len(delta)} delivered"
            )
            return history.snapshot()

    def add(self, entity_id: Hashable, entry: HistoryEntry) -> HistorySnapshot:
        """Insert a single entry at its ordered position (see merge)."""
        return self.merge(entity_id, [entry])

    def entity_ids(self) -> List[Hashable]:
        with self._lock:
            return list(self._histories)

    def clear(self) -> None:
        """Drop every cached history."""
        with self._lock:
            self._histories.clear()
            logger.info("Store CLEARED")

    def get_stats(self) -> StoreStats:
        """Get store statistics."""
        with self._lock:
            return StoreStats(
                entities=len(self._histories),
                entries=sum(len(h.entries) for h in self._histories.values()),
                replacements=self._stats.replacements,
                merges=self._stats.merges,
                merged_entries=self._stats.merged_entries,
                precondition_violations=self._stats.precondition_violations,
            )
