"""
History Source Protocol.

Defines the abstract interface for the remote service that owns the
authoritative history of each entity. The sync engine is the only
component that calls it.

Contract:
    - offset omitted (None) or 0: return the complete history
    - offset N > 0: return only entries with sequenceNumber > N
    - Entries may come back in any order
    - Failures surface as exceptions raised by the coroutine

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - Entries may be raw mappings or HistoryEntry objects; the engine
      validates them at the boundary
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class HistorySource(Protocol):
    """Abstract interface for fetching entity histories."""

    async def fetch_history(
        self,
        entity_id: Hashable,
        offset: Optional[int] = None,
    ) -> Sequence[Any]:
        """
        Fetch the history of an entity.

        Args:
            entity_id: Entity whose history is requested
            offset: Only return entries newer than this sequence number

        Returns:
            Sequence of history entries (mappings or HistoryEntry)
        """
        ...
