"""
Exclusion Filter - Hide Internal Actions from Callers.

An entry is hidden when its action name is one of the configured hidden
categories, or when it starts with the reserved prefix. The filter is a
presentation-time view: the store keeps hidden entries so predecessor
checks still see them.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Mapping, Optional, Union

from report_history.config.models import ExclusionPolicyConfig
from report_history.domain.entities import HistoryEntry

EntryLike = Union[HistoryEntry, Mapping[str, Any]]


class ExclusionFilter:
    """Pure predicate over single entries, driven by an ExclusionPolicyConfig."""

    def __init__(self, policy: Optional[ExclusionPolicyConfig] = None) -> None:
        """
        Initialize exclusion filter.

        Args:
            policy: Hidden categories and reserved prefix
        """
        self.policy = policy or ExclusionPolicyConfig()
        self._hidden: FrozenSet[str] = frozenset(self.policy.hidden_categories)
        self._prefix = self.policy.reserved_prefix

    def is_hidden(self, entry: EntryLike) -> bool:
        """Check whether an entry must never be shown."""
        action_name = self._action_name(entry)
        if action_name in self._hidden:
            return True
        return bool(self._prefix) and action_name.startswith(self._prefix)

    def apply(self, entries: Iterable[EntryLike]) -> tuple:
        """
        Return the visible entries, preserving order.

        Args:
            entries: HistoryEntry objects or raw mappings

        Returns:
            Tuple of the entries that are not hidden
        """
        return tuple(e for e in entries if not self.is_hidden(e))

    @staticmethod
    def _action_name(entry: EntryLike) -> str:
        if isinstance(entry, HistoryEntry):
            return entry.action_name
        name = entry.get("actionName", entry.get("action_name"))
        # Non-string labels never match a category; treated as visible
        return name if isinstance(name, str) else ""
