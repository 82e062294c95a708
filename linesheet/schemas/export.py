"""Pydantic schemas for line item export functionality."""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class ExportFormat(str, Enum):
    """Supported export formats."""

    CSV = "csv"
    XLSX = "xlsx"
    YAML = "yaml"
    JSON = "json"


class ShopifyExportOptions(BaseModel):
    """Product-level values written into a Shopify product import CSV."""

    vendor: str = "ENROUTE"
    product_type: str = ""
    tags: list[str] = Field(default_factory=list)
    published: bool = False
    weight_unit: Literal["kg", "lb", "g", "oz"] = "kg"
    # Price used when an item has no retail: unit cost times this markup
    retail_markup: float = Field(2.5, gt=0)


class ExportMetadata(BaseModel):
    """Metadata included in hierarchical exports (JSON, YAML)."""

    exported_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_count: int
    total_units: float
    total_cost: float
    format: str
