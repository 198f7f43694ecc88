"""
Configuration I/O Module

Save/load ReplayConfig objects as YAML or JSON.

Files may be partial: any section or field that is missing keeps its
default value.

Usage:
    from radar_replay.config.io import ConfigIO

    ConfigIO.save(ReplayConfig.create_default(), "replay.yaml")
    config = ConfigIO.load("replay.yaml")
"""

import datetime
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml
from pydantic import ValidationError

from radar_replay.core.exceptions import ConfigurationError

from .models import AppConfig
from .replay_config import ReplayConfig

logger = logging.getLogger(__name__)

CURRENT_CONFIG_VERSION = "1.0.0"

_YAML_SUFFIXES = (".yaml", ".yml")


class ConfigIO:
    """
    Configuration I/O handler for ReplayConfig objects.
    """

    @staticmethod
    def save(
        config: ReplayConfig,
        file_path: Union[str, Path],
        format: str = "auto",
        include_metadata: bool = True,
    ) -> None:
        """
        Save ReplayConfig to file.

        Args:
            config: ReplayConfig to save
            file_path: Path to output file (.yaml, .yml, or .json)
            format: "yaml", "json", or "auto" to detect from extension
            include_metadata: Include version and timestamp metadata

        Raises:
            ConfigurationError: If format is invalid or the file cannot be written
        """
        file_path = Path(file_path)

        if format == "auto":
            format = "json" if file_path.suffix.lower() == ".json" else "yaml"
        if format not in ("yaml", "json"):
            raise ConfigurationError(f"Unsupported config format: {format!r}")

        config_dict = ConfigIO._config_to_dict(config, include_metadata)

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if format == "yaml":
                    yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)
                else:
                    json.dump(config_dict, f, indent=2, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(f"Failed to write config file {file_path}: {e}") from e

        logger.info(f"Configuration saved to {file_path}")

    @staticmethod
    def load(file_path: Union[str, Path]) -> ReplayConfig:
        """
        Load ReplayConfig from file.

        Raises:
            ConfigurationError: File missing, unreadable, wrong format or invalid values
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise ConfigurationError(f"Config file not found: {file_path}")

        suffix = file_path.suffix.lower()
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                if suffix in _YAML_SUFFIXES:
                    config_dict = yaml.safe_load(f)
                elif suffix == ".json":
                    config_dict = json.load(f)
                else:
                    raise ConfigurationError(
                        f"Unsupported file format: {file_path.suffix}. "
                        "Use .yaml, .yml, or .json"
                    )
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read config file {file_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Invalid config file format: expected mapping, got {type(config_dict).__name__}"
            )

        config = ConfigIO._dict_to_config(config_dict)
        logger.debug(f"Configuration loaded from {file_path}")
        return config

    @staticmethod
    def _config_to_dict(config: ReplayConfig, include_metadata: bool = True) -> Dict[str, Any]:
        result: Dict[str, Any] = {"app_config": config.app_config.to_dict()}
        if include_metadata:
            result["_metadata"] = {
                "version": CURRENT_CONFIG_VERSION,
                "created_at": datetime.datetime.now().isoformat(),
                "description": "Radar Replay Configuration",
            }
        return result

    @staticmethod
    def _dict_to_config(config_dict: Dict[str, Any]) -> ReplayConfig:
        config_dict = {k: v for k, v in config_dict.items() if not k.startswith("_")}
        sections = config_dict.get("app_config", {}) or {}
        if not isinstance(sections, dict):
            raise ConfigurationError("app_config must be a mapping")
        return ReplayConfig.create_with_overrides(sections)

    @staticmethod
    def validate(config_dict: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate configuration dictionary structure.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors: List[str] = []

        app_config = config_dict.get("app_config")
        if app_config is None:
            errors.append("Missing required key: app_config")
        elif not isinstance(app_config, dict):
            errors.append("app_config must be a mapping")
        else:
            sections = AppConfig.model_fields
            for section, values in app_config.items():
                if section not in sections:
                    errors.append(f"Unknown app_config section: {section}")
                elif not isinstance(values, dict):
                    errors.append(f"{section} must be a mapping")
                else:
                    known = sections[section].annotation.model_fields
                    for key in values:
                        if key not in known:
                            errors.append(f"Unknown field in {section}: {key}")

        if not errors:
            try:
                ConfigIO._dict_to_config(config_dict)
            except (ConfigurationError, ValidationError) as e:
                errors.append(f"Invalid config structure: {e}")

        return len(errors) == 0, errors
