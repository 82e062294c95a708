"""Pydantic models for LineSheet configuration.

These models define the structure of config.toml.
"""

from typing import Literal

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    rate_limit_per_minute: int = 60
    # CORS configuration - empty list means same-origin only
    cors_origins: list[str] = []


class UploadConfig(BaseModel):
    """Upload limits."""

    max_upload_mb: int = 10

    @property
    def max_upload_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_mb * 1024 * 1024


class ExportConfig(BaseModel):
    """Defaults for Shopify product CSV exports."""

    vendor: str = "ENROUTE"
    product_type: str = ""
    tags: list[str] = []
    published: bool = False
    weight_unit: Literal["kg", "lb", "g", "oz"] = "kg"
    retail_markup: float = 2.5


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class LinesheetConfig(BaseModel):
    """Main LineSheet configuration loaded from config.toml."""

    app_name: str = "LineSheet"
    server: ServerConfig = Field(default_factory=ServerConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
