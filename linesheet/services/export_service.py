"""Export service for writing line items to Shopify and flat file formats."""

import csv
import io
import re
from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import yaml
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from linesheet.schemas.export import ExportFormat, ExportMetadata, ShopifyExportOptions
from linesheet.schemas.line_items import LineItem

# Shopify product import columns
SHOPIFY_HEADERS = [
    "Handle",
    "Title",
    "Body (HTML)",
    "Vendor",
    "Type",
    "Tags",
    "Published",
    "Option1 Name",
    "Option1 Value",
    "Option2 Name",
    "Option2 Value",
    "Option3 Name",
    "Option3 Value",
    "Variant SKU",
    "Variant Grams",
    "Variant Inventory Tracker",
    "Variant Inventory Qty",
    "Variant Inventory Policy",
    "Variant Fulfillment Service",
    "Variant Price",
    "Variant Compare At Price",
    "Variant Requires Shipping",
    "Variant Taxable",
    "Variant Barcode",
    "Image Src",
    "Image Position",
    "Image Alt Text",
    "Gift Card",
    "SEO Title",
    "SEO Description",
    "Variant Weight Unit",
    "Cost per item",
]

# Flat line item export columns
LINE_ITEM_HEADERS = [
    "id",
    "sku",
    "vendor_sku",
    "product_name",
    "variant_title",
    "size",
    "color",
    "material",
    "qty",
    "unit_cost",
    "unit_retail",
    "barcode",
    "weight",
    "hs_code",
    "country_of_origin",
]

_CONTENT_TYPES = {
    ExportFormat.CSV: "text/csv; charset=utf-8",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.YAML: "application/x-yaml",
    ExportFormat.JSON: "application/json",
}

_HANDLE_NOISE = re.compile(r"[^a-z0-9]+")


def get_content_type(export_format: ExportFormat) -> str:
    """Get the MIME type for an export format."""
    return _CONTENT_TYPES[export_format]


def generate_filename(export_type: str, export_format: ExportFormat) -> str:
    """Generate a timestamped filename such as ``linesheet_shopify_20240101_120000.csv``."""
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"linesheet_{export_type}_{timestamp}.{export_format.value}"


def format_file_size(size: int) -> str:
    """Format a byte count for display, e.g. ``512 B``, ``1.5 KB``, ``2.0 MB``."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _format_number(value: float | None) -> str | float:
    """Render whole floats without a trailing ``.0``."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return value


def _grams(weight_kg: float) -> int:
    """Convert kilograms to whole grams, rounding halves up."""
    grams = Decimal(str(weight_kg)) * 1000
    return int(grams.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def generate_handle(name: str) -> str:
    """Build a Shopify handle: lowercase with non-alphanumeric runs replaced by "-"."""
    return _HANDLE_NOISE.sub("-", name.lower()).strip("-")


def _group_by_product(items: Sequence[LineItem]) -> dict[str, list[LineItem]]:
    groups: dict[str, list[LineItem]] = {}
    for item in items:
        groups.setdefault(item.product_name, []).append(item)
    return groups


def _shopify_row(
    item: LineItem,
    handle: str,
    first_variant: bool,
    has_size: bool,
    has_color: bool,
    options: ShopifyExportOptions,
) -> list[Any]:
    price = item.unit_retail or item.unit_cost * options.retail_markup
    return [
        handle,
        item.product_name if first_variant else "",
        "",
        options.vendor if first_variant else "",
        options.product_type if first_variant else "",
        ", ".join(options.tags) if first_variant else "",
        ("TRUE" if options.published else "FALSE") if first_variant else "",
        "Size" if has_size else "",
        item.size or "",
        "Color" if has_color else "",
        item.color or "",
        "",
        "",
        item.sku or "",
        _grams(item.weight) if item.weight else "",
        "shopify",
        _format_number(item.qty),
        "deny",
        "manual",
        _format_number(price),
        "",
        "TRUE",
        "TRUE",
        item.barcode or "",
        "",
        "",
        "",
        "FALSE",
        "",
        "",
        options.weight_unit,
        _format_number(item.unit_cost),
    ]


def export_to_shopify_csv(
    items: Sequence[LineItem],
    options: ShopifyExportOptions | None = None,
) -> str:
    """Export line items as a Shopify product import CSV.

    Items sharing a product name become variants of one product. Product
    level columns are only filled on the first variant, and the Size and
    Color option names are set when any variant of the product has one.

    Args:
        items: Line items to export.
        options: Vendor, type, tags and pricing defaults.

    Returns:
        CSV text including the header row.
    """
    options = options or ShopifyExportOptions()

    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(SHOPIFY_HEADERS)

    for product_name, variants in _group_by_product(items).items():
        handle = generate_handle(product_name)
        has_size = any(v.size for v in variants)
        has_color = any(v.color for v in variants)
        for index, item in enumerate(variants):
            writer.writerow(_shopify_row(item, handle, index == 0, has_size, has_color, options))

    return output.getvalue()


def _line_item_to_row(item: LineItem) -> list[Any]:
    """Convert a line item to a row for CSV/Excel."""
    return [
        item.id,
        item.sku or "",
        item.vendor_sku or "",
        item.product_name,
        item.variant_title or "",
        item.size or "",
        item.color or "",
        item.material or "",
        item.qty,
        item.unit_cost,
        item.unit_retail if item.unit_retail is not None else "",
        item.barcode or "",
        item.weight if item.weight is not None else "",
        item.hs_code or "",
        item.country_of_origin or "",
    ]


def export_line_items_to_csv(items: Sequence[LineItem]) -> bytes:
    """Export line items to CSV format.

    Args:
        items: Line items to export

    Returns:
        CSV content as bytes
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(LINE_ITEM_HEADERS)
    for item in items:
        writer.writerow(_line_item_to_row(item))

    return output.getvalue().encode("utf-8")


def export_line_items_to_xlsx(items: Sequence[LineItem]) -> bytes:
    """Export line items to Excel (XLSX) format.

    Args:
        items: Line items to export

    Returns:
        XLSX content as bytes
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Line Items"

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="1F3A5F", end_color="1F3A5F", fill_type="solid")
    header_alignment = Alignment(horizontal="center")

    for col_idx, header in enumerate(LINE_ITEM_HEADERS, 1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment

    for row_idx, item in enumerate(items, 2):
        for col_idx, value in enumerate(_line_item_to_row(item), 1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    # Auto-adjust column widths
    for col_idx, header in enumerate(LINE_ITEM_HEADERS, 1):
        col_letter = get_column_letter(col_idx)
        max_length = len(header)
        for row_idx in range(2, len(items) + 2):
            cell_value = ws.cell(row=row_idx, column=col_idx).value
            if cell_value:
                max_length = max(max_length, len(str(cell_value)))
        ws.column_dimensions[col_letter].width = min(max_length + 2, 50)

    ws.freeze_panes = "A2"

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def _export_info(items: Sequence[LineItem], export_format: ExportFormat) -> dict[str, Any]:
    return ExportMetadata(
        total_count=len(items),
        total_units=sum(item.qty for item in items),
        total_cost=sum(item.qty * item.unit_cost for item in items),
        format=export_format.value,
    ).model_dump(mode="json")


def export_line_items_to_yaml(items: Sequence[LineItem]) -> bytes:
    """Export line items to YAML format with metadata."""
    export_data = {
        "line_items": [item.model_dump(mode="json", exclude_none=True) for item in items],
        "export_info": _export_info(items, ExportFormat.YAML),
    }
    return yaml.dump(export_data, default_flow_style=False, allow_unicode=True, sort_keys=False).encode("utf-8")


def export_line_items_to_json(items: Sequence[LineItem]) -> dict[str, Any]:
    """Export line items to a JSON-serializable dictionary with metadata."""
    return {
        "line_items": [item.model_dump(mode="json", exclude_none=True) for item in items],
        "export_info": _export_info(items, ExportFormat.JSON),
    }
