"""
Entry Validator - Parse Raw History Entries at the Boundary.

Every entry coming from the history source or a live push passes
through here before it can reach the store:
    - Must be a mapping or a HistoryEntry
    - Must carry an integer sequenceNumber >= 0
    - actionName, when present, must be a string

Design Notes:
    - Fail-fast: one malformed entry rejects the whole batch
    - Booleans are not accepted as sequence numbers
    - Accepted entries are deep copies; the caller keeps no reference
      into what gets stored
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from report_history.domain.entities import HistoryEntry
from report_history.domain.exceptions import MalformedEntryError

logger = logging.getLogger(__name__)

SEQUENCE_FIELDS = ("sequenceNumber", "sequence_number")


class EntryValidator:
    """Turns raw entries into validated HistoryEntry objects."""

    def validate(self, raw: Any) -> HistoryEntry:
        """
        Validate a single entry.

        Args:
            raw: HistoryEntry or mapping with at least a sequenceNumber

        Returns:
            Validated HistoryEntry

        Raises:
            MalformedEntryError: If the entry is unusable
        """
        if isinstance(raw, HistoryEntry):
            return raw.model_copy(deep=True)

        if not isinstance(raw, Mapping):
            raise MalformedEntryError(
                f"History entry must be a mapping, got {type(raw).__name__}"
            )

        sequence_error = self._check_sequence_number(raw)
        if sequence_error:
            logger.error(f"Rejected history entry: {sequence_error}")
            raise MalformedEntryError(sequence_error, field="sequenceNumber")

        try:
            return HistoryEntry.model_validate(copy.deepcopy(dict(raw)))
        except ValidationError as e:
            logger.error(f"Rejected history entry: {e}")
            raise MalformedEntryError(str(e)) from e

    def validate_batch(self, raw_entries: Optional[Iterable[Any]]) -> List[HistoryEntry]:
        """
        Validate a batch returned by the source.

        A ``None`` batch is treated as empty.

        Raises:
            MalformedEntryError: If any entry is unusable
        """
        if raw_entries is None:
            return []
        return [self.validate(raw) for raw in raw_entries]

    def _check_sequence_number(self, raw: Mapping[str, Any]) -> Optional[str]:
        """Return an error message if the sequence number is missing or invalid."""
        for key in SEQUENCE_FIELDS:
            if key in raw:
                value = raw[key]
                break
        else:
            return "History entry is missing sequenceNumber"

        if isinstance(value, bool) or not isinstance(value, int):
            return f"sequenceNumber must be an integer, got {value!r}"

        if value < 0:
            return f"sequenceNumber must be non-negative, got {value}"

        return None
