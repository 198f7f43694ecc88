"""
Configuration Package for Radar Replay

Configuration modules:
- constants: Default values (single source of truth)
- models: Pydantic models with validation
- defaults: Default AppConfig factory
- replay_config: Immutable ReplayConfig container
- io: YAML/JSON load and save

Usage:
    from radar_replay.config import ReplayConfig

    config = ReplayConfig.create_default()
    tolerance = config.playback.staleness_tolerance
"""

from .constants import Constants
from .defaults import create_default_app_config
from .io import ConfigIO
from .models import AppConfig, DisplayParams, PlaybackParams, RecordingParams
from .replay_config import ReplayConfig

__all__ = [
    "Constants",
    "AppConfig",
    "PlaybackParams",
    "RecordingParams",
    "DisplayParams",
    "create_default_app_config",
    "ReplayConfig",
    "ConfigIO",
]
