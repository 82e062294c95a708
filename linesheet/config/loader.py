"""Configuration loader for LineSheet.

Loads configuration from TOML files. Environment variables can override
any configuration value.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from linesheet.config.schema import LinesheetConfig

logger = logging.getLogger(__name__)

# Env var -> (section, key)
ENV_MAPPINGS: dict[str, tuple[str, str]] = {
    # Server
    "SERVER_HOST": ("server", "host"),
    "SERVER_PORT": ("server", "port"),
    "SERVER_DEBUG": ("server", "debug"),
    "SERVER_RATE_LIMIT_PER_MINUTE": ("server", "rate_limit_per_minute"),
    "HOST": ("server", "host"),  # Shorthand
    "PORT": ("server", "port"),  # Shorthand
    "DEBUG": ("server", "debug"),  # Shorthand
    # Upload
    "UPLOAD_MAX_UPLOAD_MB": ("upload", "max_upload_mb"),
    "MAX_UPLOAD_MB": ("upload", "max_upload_mb"),  # Shorthand
    # Export
    "EXPORT_VENDOR": ("export", "vendor"),
    "EXPORT_PRODUCT_TYPE": ("export", "product_type"),
    "EXPORT_PUBLISHED": ("export", "published"),
    "EXPORT_WEIGHT_UNIT": ("export", "weight_unit"),
    "EXPORT_RETAIL_MARKUP": ("export", "retail_markup"),
    # Logging
    "LOG_LEVEL": ("logging", "level"),
}

_INT_KEYS = {"port", "rate_limit_per_minute", "max_upload_mb"}
_FLOAT_KEYS = {"retail_markup"}
_BOOL_KEYS = {"debug", "published"}


def get_config_search_paths() -> list[Path]:
    """Get the list of paths to search for configuration files.

    Returns paths in priority order (first found wins):
    1. ./config.toml (project root - for development)
    2. ~/.config/linesheet/config.toml (user config)
    3. /etc/linesheet/config.toml (system config)
    """
    return [
        Path.cwd() / "config.toml",
        Path.home() / ".config" / "linesheet" / "config.toml",
        Path("/etc/linesheet/config.toml"),
    ]


def find_config_file() -> Path | None:
    """Find the first existing config file from search paths."""
    for path in get_config_search_paths():
        if path.exists() and path.is_file():
            logger.debug(f"Found config file: {path}")
            return path
    return None


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = "LINESHEET") -> None:
    """Apply environment variable overrides to a configuration dictionary.

    Environment variables are mapped as follows:
    - LINESHEET_SERVER_PORT -> config_dict["server"]["port"]
    - LINESHEET_EXPORT_VENDOR -> config_dict["export"]["vendor"]
    - etc.

    Note: This modifies config_dict in place.
    """
    for suffix, (section, key) in ENV_MAPPINGS.items():
        value = os.environ.get(f"{prefix}_{suffix}")
        if value is None:
            continue

        section_dict = config_dict.setdefault(section, {})
        if key in _INT_KEYS:
            section_dict[key] = int(value)
        elif key in _FLOAT_KEYS:
            section_dict[key] = float(value)
        elif key in _BOOL_KEYS:
            section_dict[key] = value.lower() in ("true", "1", "yes")
        elif key == "level":
            section_dict[key] = value.upper()
        else:
            section_dict[key] = value


def load_config(config_file: Path | None = None) -> LinesheetConfig:
    """Load configuration from TOML file with environment variable overrides.

    Args:
        config_file: Optional path to config file. If not provided,
                     searches default locations.

    Returns:
        LinesheetConfig instance with all settings loaded.
    """
    config_dict: dict[str, Any] = {}

    if config_file is None:
        config_file = find_config_file()

    if config_file and config_file.exists():
        logger.info(f"Loading config from: {config_file}")
        config_dict = load_toml_file(config_file)
    else:
        logger.info("No config file found, using defaults with env overrides")

    apply_env_overrides(config_dict)

    return LinesheetConfig(**config_dict)
