"""LineSheet configuration module.

This module provides TOML-based configuration with environment variable overrides.

Configuration is loaded from the following locations (in order of priority):
1. Environment variables (highest priority)
2. ./config.toml (project root - for development)
3. ~/.config/linesheet/config.toml (user config)
4. /etc/linesheet/config.toml (system config)
"""

from linesheet.config.schema import (
    ExportConfig,
    LinesheetConfig,
    LoggingConfig,
    ServerConfig,
    UploadConfig,
)
from linesheet.config.settings import get_settings, reset_settings, settings

__all__ = [
    "ExportConfig",
    "LinesheetConfig",
    "LoggingConfig",
    "ServerConfig",
    "UploadConfig",
    "get_settings",
    "reset_settings",
    "settings",
]
