"""Core services for avatar settings, errors, and logging."""

from .config import AvatarConfig, load_config, save_config
from .errors import (
    AvatarError,
    ConfigError,
    EmptyInputError,
    EncodingError,
    FontLoadError,
    GlyphDrawError,
    GlyphMetricsError,
)
from .logging_setup import configure_logging, get_logger, log_event

__all__ = [
    "AvatarConfig",
    "AvatarError",
    "ConfigError",
    "EmptyInputError",
    "EncodingError",
    "FontLoadError",
    "GlyphDrawError",
    "GlyphMetricsError",
    "configure_logging",
    "get_logger",
    "log_event",
    "load_config",
    "save_config",
]
