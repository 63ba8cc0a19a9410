"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock

import pytest

from report_history.adapters.memory_source import InMemoryHistorySource
from report_history.caching.history_store import HistoryStore
from report_history.config.models import ExclusionPolicyConfig, StoreConfig
from report_history.domain.entities import HistoryEntry
from report_history.filters.exclusion import ExclusionFilter
from report_history.sync.engine import HistorySyncEngine


def make_entry(sequence_number: int, action_name: str = "ADDCOMMENT", **payload) -> HistoryEntry:
    """Build a HistoryEntry from wire-style fields."""
    return HistoryEntry.model_validate(
        {"sequenceNumber": sequence_number, "actionName": action_name, **payload}
    )


@pytest.fixture
def entry_factory() -> Callable[..., HistoryEntry]:
    return make_entry


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def exclusion_policy() -> ExclusionPolicyConfig:
    """Default policy of the source deployment."""
    return ExclusionPolicyConfig()


@pytest.fixture
def exclusion_filter(exclusion_policy) -> ExclusionFilter:
    return ExclusionFilter(exclusion_policy)


@pytest.fixture
def store() -> HistoryStore:
    return HistoryStore()


@pytest.fixture
def strict_store() -> HistoryStore:
    return HistoryStore(StoreConfig(strict_merge=True))


@pytest.fixture
def mock_source() -> AsyncMock:
    """History source whose fetch_history returns an empty batch by default."""
    source = AsyncMock()
    source.fetch_history.return_value = []
    return source


@pytest.fixture
def engine(mock_source, store, exclusion_filter) -> HistorySyncEngine:
    """Engine over a mocked source and an empty store."""
    return HistorySyncEngine(mock_source, store=store, exclusion_filter=exclusion_filter)


@pytest.fixture
def memory_source() -> InMemoryHistorySource:
    """In-memory source with report 1 holding five visible actions."""
    source = InMemoryHistorySource(delivery_order=InMemoryHistorySource.NEWEST_FIRST)
    for action in ("CREATED", "ADDCOMMENT", "SUBMITTED", "ADDCOMMENT", "APPROVED"):
        source.append(1, action)
    return source
