"""
Unit tests for settings and the JSON configuration loader
"""

import json

import pytest
from pydantic import ValidationError

from signalstream.infrastructure.config import (
    AppSettings,
    LoggingSettings,
    LogLevel,
    NumericSettings,
    get_settings,
    load_app_settings_from_json,
    reset_settings_cache,
)


@pytest.mark.fast
@pytest.mark.unit
class TestNumericSettings:

    def test_defaults(self):
        settings = NumericSettings()
        assert settings.precision == 28
        assert settings.rounding == "ROUND_HALF_EVEN"

    def test_rounding_is_normalized(self):
        assert NumericSettings(rounding="round_half_up").rounding == "ROUND_HALF_UP"

    def test_unknown_rounding_rejected(self):
        with pytest.raises(ValidationError):
            NumericSettings(rounding="ROUND_SIDEWAYS")

    def test_non_positive_precision_rejected(self):
        with pytest.raises(ValidationError):
            NumericSettings(precision=0)

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("DECIMAL_PRECISION", "12")
        assert NumericSettings().precision == 12


@pytest.mark.fast
@pytest.mark.unit
class TestLoggingSettings:

    def test_defaults(self):
        settings = LoggingSettings()
        assert settings.level == LogLevel.INFO
        assert settings.console_enabled is True
        assert settings.file_enabled is False

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert AppSettings().logging.level == LogLevel.DEBUG


@pytest.mark.fast
@pytest.mark.unit
class TestConfigLoader:

    def test_load_from_json_with_env_placeholders(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SIGNALSTREAM_TEST_LEVEL", "WARNING")
        config_file = tmp_path / "signalstream.json"
        config_file.write_text(json.dumps({
            "numeric": {"precision": 40, "rounding": "ROUND_DOWN"},
            "logging": {"level": "${SIGNALSTREAM_TEST_LEVEL}"},
            "unrelated": {"ignored": True},
        }), encoding="utf-8")

        settings = load_app_settings_from_json(str(config_file))

        assert settings.numeric.precision == 40
        assert settings.numeric.rounding == "ROUND_DOWN"
        assert settings.logging.level == LogLevel.WARNING

    def test_get_settings_finds_working_directory_config(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "signalstream.json").write_text(
            json.dumps({"numeric": {"precision": 16}}), encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)
        reset_settings_cache()

        assert get_settings().numeric.precision == 16

    def test_get_settings_is_cached_until_reset(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        first = get_settings()
        assert get_settings() is first

        reset_settings_cache()
        assert get_settings() is not first

    def test_invalid_json_values_raise(self, tmp_path):
        config_file = tmp_path / "signalstream.json"
        config_file.write_text(json.dumps({"numeric": {"precision": -1}}), encoding="utf-8")
        with pytest.raises(ValidationError):
            load_app_settings_from_json(str(config_file))
