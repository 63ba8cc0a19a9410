"""
Integration Tests for HistorySyncEngine with InMemoryHistorySource.

Simulates a client receiving live pushes for a report, some of which
are dropped, while the remote log keeps growing.
"""

from __future__ import annotations

import asyncio

import pytest

from report_history.adapters.memory_source import InMemoryHistorySource
from report_history.domain.exceptions import HistoryFetchError
from report_history.sync.engine import HistorySyncEngine


def seqs(history):
    return [e.sequence_number for e in history]


class TestLiveUpdates:
    """End-to-end reconciliation scenarios."""

    @pytest.mark.asyncio
    async def test_in_order_pushes_need_no_fetch(self, memory_source) -> None:
        engine = HistorySyncEngine(memory_source)
        await engine.get(1)

        for _ in range(3):
            pushed = memory_source.append(1, "ADDCOMMENT")
            history = await engine.set(1, pushed)

        assert seqs(history) == [8, 7, 6, 5, 4, 3, 2, 1]
        assert memory_source.calls == [(1, None)]

    @pytest.mark.asyncio
    async def test_dropped_pushes_are_recovered(self, memory_source) -> None:
        engine = HistorySyncEngine(memory_source)
        await engine.get(1)

        memory_source.append(1, "ADDCOMMENT")  # 6, never pushed
        memory_source.append(1, "BILLABLEDELEGATE")  # 7, never pushed
        pushed = memory_source.append(1, "APPROVED")  # 8

        history = await engine.set(1, pushed)

        assert memory_source.calls == [(1, None), (1, 5)]
        assert seqs(history) == [8, 6, 5, 4, 3, 2, 1]
        assert seqs(engine.store.read(1)) == [8, 7, 6, 5, 4, 3, 2, 1]

    @pytest.mark.parametrize(
        "order",
        [
            InMemoryHistorySource.NEWEST_FIRST,
            InMemoryHistorySource.OLDEST_FIRST,
            InMemoryHistorySource.SHUFFLED,
        ],
    )
    @pytest.mark.asyncio
    async def test_delivery_order_does_not_matter(self, order) -> None:
        source = InMemoryHistorySource(delivery_order=order)
        for _ in range(10):
            source.append("R", "ADDCOMMENT")
        engine = HistorySyncEngine(source)

        await engine.get("R")
        for _ in range(5):
            source.append("R", "ADDCOMMENT")
        history = await engine.get("R")

        assert seqs(history) == list(range(15, 0, -1))

    @pytest.mark.asyncio
    async def test_redelivered_push_after_gap_is_idempotent(self, memory_source) -> None:
        engine = HistorySyncEngine(memory_source)
        await engine.get(1)
        memory_source.append(1, "ADDCOMMENT")
        pushed = memory_source.append(1, "ADDCOMMENT")

        first = await engine.set(1, pushed)
        second = await engine.set(1, pushed)

        assert first == second
        assert len(memory_source.calls) == 2

    @pytest.mark.asyncio
    async def test_failure_then_recovery(self, memory_source) -> None:
        engine = HistorySyncEngine(memory_source)
        await engine.get(1)
        memory_source.append(1, "ADDCOMMENT")
        memory_source.fail_next(1, ConnectionError("offline"))

        with pytest.raises(HistoryFetchError):
            await engine.get(1)
        assert seqs(engine.store.read(1)) == [5, 4, 3, 2, 1]

        history = await engine.get(1)
        assert seqs(history) == [6, 5, 4, 3, 2, 1]

    @pytest.mark.asyncio
    async def test_unknown_entity_surfaces_fetch_error(self, memory_source) -> None:
        engine = HistorySyncEngine(memory_source)

        with pytest.raises(HistoryFetchError) as exc_info:
            await engine.get(404)

        assert isinstance(exc_info.value.__cause__, KeyError)
        assert engine.get_cache_only(404) is None

    @pytest.mark.asyncio
    async def test_concurrent_gets_are_serialized(self) -> None:
        """
        SCENARIO: Two gets for one entity race before the first resolves
        EXPECTED: Second waits, then fetches incrementally; no duplicates
        """
        source = InMemoryHistorySource(latency_seconds=0.01)
        for _ in range(3):
            source.append("R", "ADDCOMMENT")
        engine = HistorySyncEngine(source)

        first, second = await asyncio.gather(engine.get("R"), engine.get("R"))

        assert seqs(first) == seqs(second) == [3, 2, 1]
        assert source.calls == [("R", None), ("R", 3)]

    @pytest.mark.asyncio
    async def test_entities_are_independent(self, memory_source) -> None:
        memory_source.append(2, "CREATED")
        engine = HistorySyncEngine(memory_source)

        await engine.get(1)
        history = await engine.get(2)

        assert seqs(history) == [1]
        assert sorted(engine.store.entity_ids()) == [1, 2]
