"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

# Actions never shown to users but still kept in the cache
DEFAULT_HIDDEN_CATEGORIES = [
    "BILLABLEUPDATETRANSACTION",
    "BILLABLEDELEGATE",
    "QUEUEDFOREXPORT",
    "REIMBURSEMENTACHBOUNCEFASTDEBIT",
    "REIMBURSEMENTRETRYDEBIT",
    "DIGITALSIGNATURE",
]


class ExclusionPolicyConfig(BaseModel):
    """Which action categories are hidden from callers."""

    hidden_categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_HIDDEN_CATEGORIES)
    )
    # Empty string disables prefix matching
    reserved_prefix: str = Field(default="CC")

    @field_validator("hidden_categories")
    @classmethod
    def _strip_blank(cls, value: List[str]) -> List[str]:
        return [v for v in value if v]


class StoreConfig(BaseModel):
    """Configuration for the history store."""

    # Raise instead of returning an empty history when merging into an unloaded id
    strict_merge: bool = False
    log_access: bool = False


class HistoryCacheConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    exclusion: ExclusionPolicyConfig = Field(default_factory=ExclusionPolicyConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
