"""
Configuration Loader - YAML Loading with Validation.

Loads configuration from YAML files and validates using Pydantic models.
Command-line flags are applied on top as overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from kamailio_exporter.config.models import ExporterConfig
from kamailio_exporter.domain.exceptions import InvalidConfiguration


class ConfigLoader:
    """Loads and validates configuration from YAML files."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Initialize config loader.

        Args:
            base_path: Base path for relative config paths
        """
        self._base_path = base_path or Path(".")

    def load(
        self,
        config_path: Union[str, Path],
        overrides: Optional[Dict[str, Any]] = None,
    ) -> ExporterConfig:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file
            overrides: Values that replace the file's (None values ignored)

        Returns:
            Validated ExporterConfig object

        Raises:
            FileNotFoundError: If config file doesn't exist
            InvalidConfiguration: If config is invalid
        """
        path = self._resolve_path(config_path)
        config_dict = self._load_yaml(path)
        return self.load_from_dict(config_dict, overrides)

    def load_from_dict(
        self,
        config_dict: Dict[str, Any],
        overrides: Optional[Dict[str, Any]] = None,
    ) -> ExporterConfig:
        """
        Load configuration from dictionary.

        Raises:
            InvalidConfiguration: If config is invalid
        """
        if overrides:
            config_dict = self._merge_configs(
                config_dict,
                {k: v for k, v in overrides.items() if v is not None},
            )
        try:
            return ExporterConfig.model_validate(config_dict)
        except ValidationError as e:
            raise InvalidConfiguration(_format_validation_error(e)) from e

    def _resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve config path relative to base path."""
        p = Path(path)
        if p.is_absolute():
            return p
        return self._base_path / p

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML file."""
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidConfiguration(f"cannot parse {path}: {e}") from e
        if not isinstance(data, dict):
            raise InvalidConfiguration(f"{path}: top level must be a mapping")
        return data

    def _merge_configs(
        self,
        base: Dict[str, Any],
        overlay: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Deep merge overlay into base config."""
        result = dict(base)
        for key, value in overlay.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        return result


def _format_validation_error(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "config"
        messages.append(f"{location}: {item['msg']}")
    return "; ".join(messages)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    base_path: Optional[Path] = None,
) -> ExporterConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to YAML config file; defaults only when None
        overrides: Values replacing the file's
        base_path: Base path for resolving relative paths

    Returns:
        Validated ExporterConfig object
    """
    loader = ConfigLoader(base_path=base_path)
    if config_path is None:
        return loader.load_from_dict({}, overrides)
    return loader.load(config_path, overrides)
