"""
Core Domain Entities.

This module defines the history entry, the unit of every per-entity
event log handled by the cache.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field


class HistoryEntry(BaseModel):
    """One sequence-numbered action in an entity's history."""

    sequence_number: int = Field(
        ..., ge=0, alias="sequenceNumber", description="Position in the entity log"
    )
    action_name: str = Field(
        default="", alias="actionName", description="Category label of the action"
    )

    model_config = {
        "frozen": True,
        "extra": "allow",
        "populate_by_name": True,
    }

    def to_payload(self) -> Dict[str, Any]:
        """Return the entry as a wire dict (camelCase keys, payload included)."""
        return self.model_dump(by_alias=True)


# Immutable view handed to callers, newest-first
HistorySnapshot = Tuple[HistoryEntry, ...]
