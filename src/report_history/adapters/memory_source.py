"""
In-Memory History Source.

A fake remote for development and testing. Holds one append-only log
per entity and answers full or incremental fetches the way the real
service does.
"""

from __future__ import annotations

import asyncio
import random
from typing import Any, Dict, Hashable, List, Optional, Tuple


class InMemoryHistorySource:
    """Authoritative append-only logs served over the HistorySource protocol."""

    # Delivery orders for fetched batches
    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"
    SHUFFLED = "shuffled"

    def __init__(
        self,
        delivery_order: str = NEWEST_FIRST,
        seed: int = 42,
        latency_seconds: float = 0.0,
    ) -> None:
        """
        Initialize in-memory source.

        Args:
            delivery_order: Order of entries in returned batches
            seed: Random seed for the shuffled order
            latency_seconds: Simulated network delay per fetch
        """
        if delivery_order not in (self.NEWEST_FIRST, self.OLDEST_FIRST, self.SHUFFLED):
            raise ValueError(f"Unknown delivery order: {delivery_order}")

        self.delivery_order = delivery_order
        self.latency_seconds = latency_seconds
        self._rng = random.Random(seed)
        self._logs: Dict[Hashable, List[Dict[str, Any]]] = {}
        self._failures: Dict[Hashable, Exception] = {}
        self.calls: List[Tuple[Hashable, Optional[int]]] = []

    def append(self, entity_id: Hashable, action_name: str, **payload: Any) -> Dict[str, Any]:
        """
        Append the next action to an entity's log.

        Sequence numbers start at 1 and increase by one.

        Returns:
            The stored entry (wire format)
        """
        log = self._logs.setdefault(entity_id, [])
        sequence_number = log[-1]["sequenceNumber"] + 1 if log else 1
        entry = {"sequenceNumber": sequence_number, "actionName": action_name, **payload}
        log.append(entry)
        return dict(entry)

    def fail_next(self, entity_id: Hashable, error: Exception) -> None:
        """Make the next fetch for an entity raise ``error``."""
        self._failures[entity_id] = error

    async def fetch_history(
        self,
        entity_id: Hashable,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return entries newer than ``offset`` (all entries if omitted or 0)."""
        self.calls.append((entity_id, offset))

        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

        error = self._failures.pop(entity_id, None)
        if error is not None:
            raise error

        if entity_id not in self._logs:
            raise KeyError(f"Unknown entity: {entity_id!r}")

        floor = offset or 0
        batch = [dict(e) for e in self._logs[entity_id] if e["sequenceNumber"] > floor]

        if self.delivery_order == self.NEWEST_FIRST:
            batch.reverse()
        elif self.delivery_order == self.SHUFFLED:
            self._rng.shuffle(batch)
        return batch
