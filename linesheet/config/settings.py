"""Global settings instance for LineSheet.

The settings object provides a flat interface over the structured
configuration loaded from config.toml and environment overrides.
"""

import logging

from linesheet.config.loader import load_config
from linesheet.config.schema import LinesheetConfig
from linesheet.schemas.export import ShopifyExportOptions

logger = logging.getLogger(__name__)


class Settings:
    """Flat accessors over the structured LinesheetConfig."""

    def __init__(self, config: LinesheetConfig | None = None):
        """Initialize settings.

        Args:
            config: Optional LinesheetConfig instance. If not provided, loads from file.
        """
        self._config = config or load_config()

    @property
    def config(self) -> LinesheetConfig:
        """Get the full configuration object."""
        return self._config

    # Application
    @property
    def app_name(self) -> str:
        return self._config.app_name

    @property
    def debug(self) -> bool:
        return self._config.server.debug

    # Server
    @property
    def host(self) -> str:
        return self._config.server.host

    @property
    def port(self) -> int:
        return self._config.server.port

    @property
    def rate_limit_per_minute(self) -> int:
        return self._config.server.rate_limit_per_minute

    @property
    def cors_origins(self) -> list[str]:
        return self._config.server.cors_origins

    # Upload
    @property
    def max_upload_size_mb(self) -> int:
        return self._config.upload.max_upload_mb

    @property
    def max_upload_size_bytes(self) -> int:
        return self._config.upload.max_upload_bytes

    # Logging
    @property
    def log_level(self) -> str:
        return self._config.logging.level

    # Export
    def shopify_export_options(self, **overrides) -> ShopifyExportOptions:
        """Build Shopify export options from config, with per-call overrides."""
        export = self._config.export
        values = {
            "vendor": export.vendor,
            "product_type": export.product_type,
            "tags": list(export.tags),
            "published": export.published,
            "weight_unit": export.weight_unit,
            "retail_markup": export.retail_markup,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return ShopifyExportOptions(**values)


# Global settings instance - lazily initialized
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance.

    This is primarily useful for testing to reload configuration.
    """
    global _settings
    _settings = None


class _SettingsProxy:
    """Proxy object that lazily loads settings on first access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return repr(get_settings())


settings = _SettingsProxy()
