"""
Digit Viewer Configuration
==========================

This module handles configuration loading for the digit viewer.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    DIGIT_PRIMARY_URL      -> sources.primary_url
    DIGIT_SECONDARY_URL    -> sources.secondary_url
    DIGIT_REQUEST_TIMEOUT  -> sources.timeout_seconds
    DIGIT_FPS              -> viewer.fps
    DIGIT_HOLD_FRAMES      -> playback.hold_frames
    DIGIT_FADE_STEP        -> playback.fade_step
    DIGIT_LOG_LEVEL        -> logging.level

Example:
    from digit_viewer.config import settings

    print(settings.sources.primary_url)
    print(settings.playback.hold_frames)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class ViewerConfig(BaseModel):
    """Window and canvas configuration."""

    window_name: str = Field(default="Digit Viewer", description="Window title")
    canvas_size: int = Field(
        default=280,
        ge=28,
        description="Logical canvas edge length in pixels",
    )
    pixel_density: int = Field(
        default=2,
        ge=1,
        le=4,
        description="Output scale factor applied to the logical canvas",
    )
    fps: int = Field(default=60, ge=1, le=240, description="Render loop rate")
    interpolation: str = Field(
        default="linear",
        pattern="^(linear|nearest)$",
        description="Upsampling filter: 'linear' or 'nearest'",
    )


class PlaybackConfig(BaseModel):
    """Crossfade timing, in rendered frames."""

    hold_frames: int = Field(
        default=60,
        ge=1,
        description="Frames each image is held before advancing",
    )
    fade_step: int = Field(
        default=5,
        ge=1,
        le=255,
        description="Alpha change per frame during a crossfade",
    )


class SourcesConfig(BaseModel):
    """Image generation endpoints, tried in order."""

    primary_url: str = Field(
        default="https://digit2image-backend.onrender.com",
        description="Base URL of the remote generation service",
    )
    secondary_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the local generation service",
    )
    timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-request timeout (None = transport default)",
    )


class MessageConfig(BaseModel):
    """Message box configuration."""

    display_ms: int = Field(
        default=3000,
        ge=0,
        description="How long a message stays visible",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the digit viewer.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    viewer: ViewerConfig = Field(default_factory=ViewerConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    message: MessageConfig = Field(default_factory=MessageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path("/app/config.yaml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Source settings
    if env_primary := os.environ.get("DIGIT_PRIMARY_URL"):
        config_data.setdefault("sources", {})["primary_url"] = env_primary
    if env_secondary := os.environ.get("DIGIT_SECONDARY_URL"):
        config_data.setdefault("sources", {})["secondary_url"] = env_secondary
    if env_timeout := os.environ.get("DIGIT_REQUEST_TIMEOUT"):
        config_data.setdefault("sources", {})["timeout_seconds"] = float(env_timeout)

    # Viewer settings
    if env_fps := os.environ.get("DIGIT_FPS"):
        config_data.setdefault("viewer", {})["fps"] = int(env_fps)

    # Playback settings
    if env_hold := os.environ.get("DIGIT_HOLD_FRAMES"):
        config_data.setdefault("playback", {})["hold_frames"] = int(env_hold)
    if env_step := os.environ.get("DIGIT_FADE_STEP"):
        config_data.setdefault("playback", {})["fade_step"] = int(env_step)

    # Logging settings
    if env_log := os.environ.get("DIGIT_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Loaded on import; the CLI reloads when --config is given
settings = load_config()
