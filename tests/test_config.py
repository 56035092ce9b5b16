"""
Configuration Tests
===================

Defaults, YAML loading and environment overrides.
"""

import pytest
from pydantic import ValidationError

from digit_viewer.config import Settings, load_config


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in (
        "DIGIT_PRIMARY_URL",
        "DIGIT_SECONDARY_URL",
        "DIGIT_REQUEST_TIMEOUT",
        "DIGIT_FPS",
        "DIGIT_HOLD_FRAMES",
        "DIGIT_FADE_STEP",
        "DIGIT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Verify default values match the original viewer."""

    def test_defaults(self):
        settings = Settings()
        assert settings.viewer.canvas_size == 280
        assert settings.viewer.pixel_density == 2
        assert settings.viewer.fps == 60
        assert settings.playback.hold_frames == 60
        assert settings.playback.fade_step == 5
        assert settings.message.display_ms == 3000
        assert settings.sources.primary_url == "https://digit2image-backend.onrender.com"
        assert settings.sources.secondary_url == "http://localhost:8080"
        assert settings.sources.timeout_seconds is None

    def test_interpolation_validated(self):
        with pytest.raises(ValidationError):
            Settings.model_validate({"viewer": {"interpolation": "cubic"}})


class TestLoadConfig:
    """Tests for YAML + environment loading."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "playback:\n"
            "  hold_frames: 30\n"
            "sources:\n"
            "  secondary_url: http://127.0.0.1:9000\n"
        )

        settings = load_config(str(path))

        assert settings.playback.hold_frames == 30
        assert settings.playback.fade_step == 5
        assert settings.sources.secondary_url == "http://127.0.0.1:9000"

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)).viewer.fps == 60

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("playback:\n  hold_frames: 30\n")
        monkeypatch.setenv("DIGIT_HOLD_FRAMES", "90")
        monkeypatch.setenv("DIGIT_PRIMARY_URL", "http://remote.test")
        monkeypatch.setenv("DIGIT_REQUEST_TIMEOUT", "4.5")
        monkeypatch.setenv("DIGIT_LOG_LEVEL", "DEBUG")

        settings = load_config(str(path))

        assert settings.playback.hold_frames == 90
        assert settings.sources.primary_url == "http://remote.test"
        assert settings.sources.timeout_seconds == 4.5
        assert settings.logging.level == "DEBUG"

    def test_invalid_env_value_rejected(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("")
        monkeypatch.setenv("DIGIT_FADE_STEP", "0")

        with pytest.raises(ValidationError):
            load_config(str(path))
