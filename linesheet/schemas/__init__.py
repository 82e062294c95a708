"""Pydantic schemas for LineSheet."""

from linesheet.schemas.export import ExportFormat, ExportMetadata, ShopifyExportOptions
from linesheet.schemas.line_items import (
    ColumnPreviewResponse,
    FileUploadResult,
    InferredColumn,
    LineItem,
    UploadSummary,
)

__all__ = [
    "ColumnPreviewResponse",
    "ExportFormat",
    "ExportMetadata",
    "FileUploadResult",
    "InferredColumn",
    "LineItem",
    "ShopifyExportOptions",
    "UploadSummary",
]
