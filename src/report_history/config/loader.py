"""
Configuration Loader - YAML Files into HistoryCacheConfig.

A deployment keeps one base file and, optionally, named profiles that
override parts of it (for example a ``strict`` profile enabling strict
merges). Profiles live in a ``profiles/`` directory next to the base file
unless another directory is given.

Every failure (unreadable YAML, non-mapping document, invalid value)
surfaces as ConfigError naming the file and the offending keys.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from report_history.config.models import HistoryCacheConfig
from report_history.domain.exceptions import ConfigError

logger = logging.getLogger(__name__)

PROFILES_DIRNAME = "profiles"


def _overlay(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Nested sections merge key by key; lists and scalars are replaced."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _overlay(current, value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Reads a base config file plus an optional profile."""

    def __init__(self, profiles_dir: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize config loader.

        Args:
            profiles_dir: Where profiles live. Defaults to ``profiles/``
                beside each loaded config file.
        """
        self.profiles_dir = Path(profiles_dir) if profiles_dir else None

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> HistoryCacheConfig:
        """
        Load and validate a config file.

        Args:
            config_path: Base YAML file
            profile: Optional profile name overriding the base file

        Returns:
            Validated HistoryCacheConfig

        Raises:
            FileNotFoundError: If the file or profile doesn't exist
            ConfigError: If a file is unreadable or a value is invalid
        """
        path = Path(config_path)
        raw = self._read(path)
        source = str(path)

        if profile:
            profile_path = self._profile_path(path, profile)
            raw = _overlay(raw, self._read(profile_path))
            source = f"{path} (profile {profile})"
            logger.debug(f"Applied config profile {profile} from {profile_path}")

        return self.load_from_dict(raw, source=source)

    def load_from_dict(
        self,
        config_dict: Dict[str, Any],
        source: str = "<dict>",
    ) -> HistoryCacheConfig:
        """Validate an already parsed configuration."""
        try:
            return HistoryCacheConfig.model_validate(config_dict)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            logger.error(f"Rejected config {source}: {problems}")
            raise ConfigError(source, problems) from e

    def _profile_path(self, config_path: Path, profile: str) -> Path:
        directory = self.profiles_dir or config_path.parent / PROFILES_DIRNAME
        profile_path = directory / f"{profile}.yaml"
        if not profile_path.exists():
            raise FileNotFoundError(f"Profile not found: {profile} (looked in {directory})")
        return profile_path

    def _read(self, path: Path) -> Dict[str, Any]:
        with open(path, encoding="utf-8") as f:
            try:
                document = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(str(path), [f"unreadable YAML: {e}"]) from e

        if document is None:
            return {}
        if not isinstance(document, dict):
            raise ConfigError(str(path), ["top level must be a mapping"])
        return document


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    profiles_dir: Optional[Union[str, Path]] = None,
) -> HistoryCacheConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Base YAML file
        profile: Optional profile name
        profiles_dir: Overrides the ``profiles/`` directory next to the file

    Returns:
        Validated HistoryCacheConfig
    """
    return ConfigLoader(profiles_dir=profiles_dir).load(config_path, profile)
