"""
Tests for configuration loading.
"""

import logging

import pytest
from pydantic import ValidationError

from color_matrix.config import (
    HighlightConfig,
    Settings,
    SystemConfig,
    TagConfig,
    get_settings,
    reload_settings,
    setup_logging,
)


class TestSettings:
    """Test settings defaults, environment overrides and YAML files"""

    def test_defaults(self):
        settings = Settings()

        assert settings.tags.strict is True
        assert settings.highlight.mask_threshold == 127
        assert settings.highlight.saturation == 255
        assert settings.highlight.value == 255
        assert settings.system.log_level == "INFO"
        assert settings.environment == "production"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CM_TAGS_STRICT", "false")
        monkeypatch.setenv("CM_HIGHLIGHT_MASK_THRESHOLD", "64")

        assert TagConfig().strict is False
        assert HighlightConfig().mask_threshold == 64

    def test_threshold_out_of_range(self):
        with pytest.raises(ValidationError):
            HighlightConfig(mask_threshold=300)

    def test_log_level_normalized(self):
        assert SystemConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SystemConfig(log_level="chatty")

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="moon")

    def test_yaml_config_file(self, tmp_path):
        config_file = tmp_path / "color_matrix.yaml"
        config_file.write_text(
            "environment: test\n"
            "highlight:\n"
            "  mask_threshold: 50\n"
            "tags:\n"
            "  strict: false\n"
        )

        settings = Settings(config_file=str(config_file))

        assert settings.environment == "test"
        assert settings.highlight.mask_threshold == 50
        assert settings.tags.strict is False

    def test_env_overrides_nested_yaml_entry(self, monkeypatch, tmp_path):
        config_file = tmp_path / "color_matrix.yaml"
        config_file.write_text(
            "highlight:\n"
            "  mask_threshold: 50\n"
            "  saturation: 100\n"
        )
        monkeypatch.setenv("CM_HIGHLIGHT_MASK_THRESHOLD", "90")

        settings = Settings(config_file=str(config_file))

        assert settings.highlight.mask_threshold == 90
        assert settings.highlight.saturation == 100

    def test_nested_env_merges_with_yaml_section(self, monkeypatch, tmp_path):
        config_file = tmp_path / "color_matrix.yaml"
        config_file.write_text(
            "highlight:\n"
            "  mask_threshold: 50\n"
            "  saturation: 100\n"
        )
        monkeypatch.setenv("CM_HIGHLIGHT__VALUE", "30")

        settings = Settings(config_file=str(config_file))

        assert settings.highlight.mask_threshold == 50
        assert settings.highlight.saturation == 100
        assert settings.highlight.value == 30

    def test_yaml_config_file_from_env(self, monkeypatch, tmp_path):
        config_file = tmp_path / "color_matrix.yaml"
        config_file.write_text("environment: development\n")
        monkeypatch.setenv("CM_CONFIG_FILE", str(config_file))

        assert Settings().environment == "development"

    def test_missing_config_file_ignored(self, tmp_path):
        settings = Settings(config_file=str(tmp_path / "missing.yaml"))

        assert settings.environment == "production"

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "saved.yaml"
        Settings(environment="staging").save_to_file(str(path))

        loaded = Settings(config_file=str(path))

        assert loaded.environment == "staging"
        assert loaded.highlight.mask_threshold == 127

    def test_to_dict(self):
        data = Settings().to_dict()

        assert data["highlight"]["mask_threshold"] == 127
        assert "config_file" not in data
        assert set(data["system"]) == {"log_level"}


class TestSettingsCache:
    """Test cached settings access"""

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_reload_picks_up_env(self, monkeypatch):
        get_settings()
        monkeypatch.setenv("CM_HIGHLIGHT_MASK_THRESHOLD", "10")

        assert reload_settings().highlight.mask_threshold == 10


def test_setup_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    setup_logging(Settings(system=SystemConfig(log_level="WARNING")))

    assert calls["level"] == logging.WARNING
    assert "%(levelname)s" in calls["format"]
