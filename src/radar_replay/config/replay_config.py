"""
Immutable Replay Configuration Container

Dependency-injection friendly configuration container. Everything that
reads configuration receives a ReplayConfig explicitly instead of reaching
for module globals.

Usage:
    from radar_replay.config.replay_config import ReplayConfig

    config = ReplayConfig.create_default()

    config = ReplayConfig.create_with_overrides({
        "playback": {"staleness_tolerance": 0.05}
    })
"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError

from radar_replay.core.exceptions import ConfigurationError

from .defaults import create_default_app_config
from .models import AppConfig


@dataclass(frozen=True)
class ReplayConfig:
    """
    Immutable configuration container for a replay run.

    Attributes:
        app_config: Playback, recording and display parameters
    """

    app_config: AppConfig

    @classmethod
    def create_default(cls) -> "ReplayConfig":
        """Create a default replay configuration."""
        return cls(app_config=create_default_app_config())

    @classmethod
    def create_with_overrides(
        cls,
        overrides: Dict[str, Dict[str, Any]],
        base_config: Optional["ReplayConfig"] = None,
    ) -> "ReplayConfig":
        """
        Create configuration with overrides applied.

        Args:
            overrides: Section name -> {field: value} overrides
            base_config: Base configuration (defaults to create_default() if None)

        Raises:
            ConfigurationError: Unknown section or a value fails validation
        """
        if base_config is None:
            base_config = cls.create_default()

        app_config_dict = base_config.app_config.model_dump()

        for section, section_overrides in overrides.items():
            if section not in app_config_dict:
                raise ConfigurationError(f"Unknown configuration section: {section!r}")
            if not isinstance(section_overrides, dict):
                raise ConfigurationError(f"{section} must be a mapping")
            app_config_dict[section].update(section_overrides)

        try:
            new_app_config = AppConfig(**app_config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration override: {e}") from e

        return cls(app_config=new_app_config)

    def clone(self) -> "ReplayConfig":
        """Deep copy; AppConfig is a mutable pydantic model."""
        return deepcopy(self)

    @property
    def playback(self):
        return self.app_config.playback

    @property
    def recording(self):
        return self.app_config.recording

    @property
    def display(self):
        return self.app_config.display
