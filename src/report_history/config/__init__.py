"""
Configuration Package - Models and Loaders.

Configuration Structure:
    - HistoryCacheConfig: Root configuration object
    - ExclusionPolicyConfig: Hidden categories and reserved prefix
    - StoreConfig: Store behaviour (strict merge, access logging)

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Support for profiles merged over a base file
"""

from report_history.config.loader import ConfigLoader, load_config
from report_history.config.models import (
    DEFAULT_HIDDEN_CATEGORIES,
    ExclusionPolicyConfig,
    HistoryCacheConfig,
    StoreConfig,
)

__all__ = [
    "ConfigLoader",
    "DEFAULT_HIDDEN_CATEGORIES",
    "ExclusionPolicyConfig",
    "HistoryCacheConfig",
    "StoreConfig",
    "load_config",
]
