"""
Unit tests for the configuration package.

Tests model validation, the ReplayConfig container and YAML/JSON I/O.
"""

import json

import pytest
import yaml
from pydantic import ValidationError

from radar_replay.config import (
    AppConfig,
    ConfigIO,
    Constants,
    PlaybackParams,
    RecordingParams,
    ReplayConfig,
    create_default_app_config,
)
from radar_replay.core.display import DisplayMode
from radar_replay.core.exceptions import ConfigurationError


@pytest.mark.unit
class TestDefaults:
    def test_defaults_match_constants(self):
        config = create_default_app_config()
        assert config.playback.default_step == Constants.DEFAULT_STEP
        assert config.playback.staleness_tolerance == Constants.STALENESS_TOLERANCE
        assert config.recording.beam_count == 4
        assert config.recording.beam_max_range == 200_000.0
        assert config.display.mode is DisplayMode.CARTESIAN
        assert config.display.arc_steps == 5

    def test_dict_round_trip(self):
        config = create_default_app_config()
        data = config.to_dict()
        assert data["display"]["mode"] == "cartesian"
        assert AppConfig.from_dict(data) == config


@pytest.mark.unit
class TestValidation:
    def test_zero_step_rejected(self):
        with pytest.raises(ValidationError):
            PlaybackParams(default_step=0.0)

    def test_negative_step_allowed(self):
        assert PlaybackParams(default_step=-0.01).default_step == -0.01

    def test_tolerance_must_be_positive(self):
        with pytest.raises(ValidationError):
            PlaybackParams(staleness_tolerance=0.0)

    def test_fine_must_not_exceed_coarse(self):
        with pytest.raises(ValidationError):
            PlaybackParams(fine_speed_increment=0.1, coarse_speed_increment=0.01)

    def test_beam_count_at_least_one(self):
        with pytest.raises(ValidationError):
            RecordingParams(beam_count=0)

    def test_unusual_beam_count_warns(self, caplog):
        with caplog.at_level("WARNING"):
            RecordingParams(beam_count=6)
        assert "beam_count=6" in caplog.text


@pytest.mark.unit
class TestReplayConfig:
    def test_overrides(self):
        config = ReplayConfig.create_with_overrides(
            {"playback": {"staleness_tolerance": 0.05}}
        )
        assert config.playback.staleness_tolerance == 0.05
        assert config.display.fov_range == 200_000.0

    def test_overrides_on_base(self):
        base = ReplayConfig.create_with_overrides({"display": {"arc_steps": 8}})
        config = ReplayConfig.create_with_overrides(
            {"playback": {"start_paused": True}}, base_config=base
        )
        assert config.display.arc_steps == 8
        assert config.playback.start_paused is True

    def test_unknown_section(self):
        with pytest.raises(ConfigurationError):
            ReplayConfig.create_with_overrides({"physics": {"mass": 1.0}})

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            ReplayConfig.create_with_overrides({"playback": {"default_step": 0}})

    @pytest.mark.parametrize("section_value", [5, [1, 2], "fast", None])
    def test_section_must_be_mapping(self, section_value):
        with pytest.raises(ConfigurationError, match="playback must be a mapping"):
            ReplayConfig.create_with_overrides({"playback": section_value})

    def test_unknown_field_rejected(self):
        with pytest.raises(ConfigurationError, match="staleness_tolerence"):
            ReplayConfig.create_with_overrides({"playback": {"staleness_tolerence": 0.5}})

    def test_frozen(self):
        config = ReplayConfig.create_default()
        with pytest.raises(AttributeError):
            config.app_config = create_default_app_config()

    def test_clone_is_independent(self):
        config = ReplayConfig.create_default()
        copy = config.clone()
        copy.app_config.playback.default_step = 0.5
        assert config.playback.default_step == 0.01


@pytest.mark.unit
class TestConfigIO:
    def test_yaml_round_trip(self, tmp_path):
        config = ReplayConfig.create_with_overrides({"display": {"mode": "spherical"}})
        path = tmp_path / "replay.yaml"
        ConfigIO.save(config, path)

        data = yaml.safe_load(path.read_text())
        assert data["_metadata"]["version"] == "1.0.0"
        assert ConfigIO.load(path).app_config == config.app_config

    def test_json_round_trip(self, tmp_path):
        config = ReplayConfig.create_with_overrides({"playback": {"default_step": 0.02}})
        path = tmp_path / "replay.json"
        ConfigIO.save(config, path, include_metadata=False)

        assert "_metadata" not in json.loads(path.read_text())
        assert ConfigIO.load(path).playback.default_step == 0.02

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("app_config:\n  playback:\n    staleness_tolerance: 0.1\n")
        config = ConfigIO.load(path)
        assert config.playback.staleness_tolerance == 0.1
        assert config.playback.default_step == 0.01

    def test_empty_file_is_default(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ConfigIO.load(path).app_config == create_default_app_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigIO.load(tmp_path / "nope.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "replay.toml"
        path.write_text("")
        with pytest.raises(ConfigurationError):
            ConfigIO.load(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            ConfigIO.load(path)

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"app_config": {"recording": {"beam_count": 0}}}))
        with pytest.raises(ConfigurationError):
            ConfigIO.load(path)

    def test_scalar_section_in_file(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("app_config:\n  playback: 5\n")
        with pytest.raises(ConfigurationError):
            ConfigIO.load(path)

    def test_misspelled_field_in_file(self, tmp_path):
        path = tmp_path / "typo.yaml"
        path.write_text("app_config:\n  playback:\n    staleness_tolerence: 0.5\n")
        with pytest.raises(ConfigurationError):
            ConfigIO.load(path)

    def test_bad_format_on_save(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigIO.save(ReplayConfig.create_default(), tmp_path / "x.yaml", format="ini")

    def test_validate(self):
        ok, errors = ConfigIO.validate({"app_config": {"playback": {"default_step": 0.02}}})
        assert ok and errors == []

        ok, errors = ConfigIO.validate({"app_config": {"physics": {}}})
        assert not ok
        assert any("physics" in e for e in errors)

        ok, errors = ConfigIO.validate({})
        assert not ok

    def test_validate_reports_field_problems(self):
        ok, errors = ConfigIO.validate(
            {"app_config": {"playback": {"staleness_tolerence": 0.5}, "display": [1]}}
        )
        assert not ok
        assert "Unknown field in playback: staleness_tolerence" in errors
        assert "display must be a mapping" in errors
