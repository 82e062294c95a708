"""Tests for the Shopify and flat line item exports."""

import csv
import io
import json

import pytest
import yaml
from httpx import AsyncClient
from openpyxl import load_workbook

from linesheet.schemas.export import ExportFormat, ShopifyExportOptions
from linesheet.schemas.line_items import LineItem
from linesheet.services.export_service import (
    LINE_ITEM_HEADERS,
    SHOPIFY_HEADERS,
    export_line_items_to_csv,
    export_line_items_to_json,
    export_line_items_to_xlsx,
    export_line_items_to_yaml,
    export_to_shopify_csv,
    format_file_size,
    generate_filename,
    generate_handle,
    get_content_type,
)


@pytest.fixture
def line_items() -> list[LineItem]:
    """Two sizes of one shoe and a cap without size or retail."""
    return [
        LineItem(
            id="li-1",
            sku="TR2-9",
            product_name="Trail Runner 2",
            size="9",
            color="Slate",
            qty=4,
            unit_cost=40,
            unit_retail=120,
            barcode="0123456789012",
            weight=0.45,
        ),
        LineItem(
            id="li-2",
            sku="TR2-10",
            product_name="Trail Runner 2",
            size="10",
            qty=6,
            unit_cost=40,
        ),
        LineItem(
            id="li-3",
            sku="CAP-1",
            product_name="Logo Cap",
            qty=12,
            unit_cost=8.5,
            hs_code="6505.00",
            country_of_origin="China",
        ),
    ]


def _read_csv(text: str) -> list[dict[str, str]]:
    return list(csv.DictReader(io.StringIO(text)))


# =============================================================================
# Helper Tests
# =============================================================================


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Trail Runner 2", "trail-runner-2"),
        ("  Crew Neck / Tee!! ", "crew-neck-tee"),
        ("Café Mug", "caf-mug"),
    ],
)
def test_generate_handle(name, expected) -> None:
    """Test Shopify handle generation."""
    assert generate_handle(name) == expected


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1536, "1.5 KB"),
        (2 * 1024 * 1024, "2.0 MB"),
    ],
)
def test_format_file_size(size, expected) -> None:
    """Test human readable file sizes."""
    assert format_file_size(size) == expected


def test_generate_filename() -> None:
    """Test timestamped export filenames."""
    filename = generate_filename("shopify", ExportFormat.CSV)
    assert filename.startswith("linesheet_shopify_")
    assert filename.endswith(".csv")


def test_get_content_type() -> None:
    """Test content types for each format."""
    assert get_content_type(ExportFormat.CSV).startswith("text/csv")
    assert get_content_type(ExportFormat.JSON) == "application/json"
    assert "spreadsheetml" in get_content_type(ExportFormat.XLSX)


# =============================================================================
# Shopify Export Tests
# =============================================================================


class TestShopifyExport:
    """Tests for export_to_shopify_csv."""

    def test_header(self, line_items):
        """Test the Shopify column header."""
        text = export_to_shopify_csv(line_items)
        assert next(csv.reader(io.StringIO(text))) == SHOPIFY_HEADERS

    def test_variants_grouped_by_product(self, line_items):
        """Test that sizes of one product share a handle and title."""
        rows = _read_csv(export_to_shopify_csv(line_items))
        assert len(rows) == 3
        assert [row["Handle"] for row in rows] == ["trail-runner-2", "trail-runner-2", "logo-cap"]
        assert [row["Title"] for row in rows] == ["Trail Runner 2", "", "Logo Cap"]
        assert [row["Vendor"] for row in rows] == ["ENROUTE", "", "ENROUTE"]

    def test_options(self, line_items):
        """Test Size and Color options are named when any variant has them."""
        first, second, cap = _read_csv(export_to_shopify_csv(line_items))
        assert (first["Option1 Name"], first["Option1 Value"]) == ("Size", "9")
        assert (first["Option2 Name"], first["Option2 Value"]) == ("Color", "Slate")
        assert (second["Option2 Name"], second["Option2 Value"]) == ("Color", "")
        assert cap["Option1 Name"] == ""
        assert cap["Option2 Name"] == ""

    def test_grams_round_half_up(self):
        """Test that half grams round up rather than to even."""
        items = [
            LineItem(id="li-1", product_name="Insole", qty=1, unit_cost=2, weight=0.0025),
            LineItem(id="li-2", product_name="Insole", qty=1, unit_cost=2, weight=0.0045),
            LineItem(id="li-3", product_name="Insole", qty=1, unit_cost=2, weight=0.0044),
        ]
        rows = _read_csv(export_to_shopify_csv(items))
        assert [row["Variant Grams"] for row in rows] == ["3", "5", "4"]

    def test_variant_values(self, line_items):
        """Test price, cost, grams and inventory columns."""
        first, second, cap = _read_csv(export_to_shopify_csv(line_items))
        assert first["Variant SKU"] == "TR2-9"
        assert first["Variant Price"] == "120"
        assert first["Cost per item"] == "40"
        assert first["Variant Grams"] == "450"
        assert first["Variant Inventory Qty"] == "4"
        assert first["Variant Barcode"] == "0123456789012"
        assert first["Variant Weight Unit"] == "kg"
        assert second["Variant Price"] == "100"
        assert second["Variant Grams"] == ""
        assert cap["Variant Price"] == "21.25"
        assert cap["Cost per item"] == "8.5"

    def test_options_override(self, line_items):
        """Test vendor, type, tags and markup options."""
        options = ShopifyExportOptions(
            vendor="ENROUTE.RUN",
            product_type="Footwear",
            tags=["SS25", "trail"],
            published=True,
            retail_markup=2,
        )
        first, second, _ = _read_csv(export_to_shopify_csv(line_items, options))
        assert first["Vendor"] == "ENROUTE.RUN"
        assert first["Type"] == "Footwear"
        assert first["Tags"] == "SS25, trail"
        assert first["Published"] == "TRUE"
        assert second["Variant Price"] == "80"

    def test_empty(self):
        """Test that no items gives just the header row."""
        assert export_to_shopify_csv([]).strip().split(",")[0] == "Handle"
        assert len(export_to_shopify_csv([]).splitlines()) == 1


# =============================================================================
# Flat Export Tests
# =============================================================================


def test_export_line_items_to_csv(line_items) -> None:
    """Test the flat CSV export."""
    rows = _read_csv(export_line_items_to_csv(line_items).decode("utf-8"))
    assert list(rows[0]) == LINE_ITEM_HEADERS
    assert rows[0]["id"] == "li-1"
    assert rows[1]["unit_retail"] == ""
    assert rows[2]["country_of_origin"] == "China"


def test_export_line_items_to_xlsx(line_items) -> None:
    """Test the flat XLSX export."""
    wb = load_workbook(io.BytesIO(export_line_items_to_xlsx(line_items)))
    ws = wb.active
    assert ws.title == "Line Items"
    assert [cell.value for cell in ws[1]] == LINE_ITEM_HEADERS
    assert ws.cell(row=2, column=4).value == "Trail Runner 2"
    assert ws.max_row == 4
    assert ws.freeze_panes == "A2"


def test_export_line_items_to_yaml(line_items) -> None:
    """Test the YAML export with metadata."""
    data = yaml.safe_load(export_line_items_to_yaml(line_items))
    assert len(data["line_items"]) == 3
    assert "unit_retail" not in data["line_items"][1]
    assert data["export_info"]["total_count"] == 3
    assert data["export_info"]["total_units"] == 22
    assert data["export_info"]["format"] == "yaml"


def test_export_line_items_to_json(line_items) -> None:
    """Test the JSON export totals."""
    data = export_line_items_to_json(line_items)
    assert data["export_info"]["total_cost"] == pytest.approx(4 * 40 + 6 * 40 + 12 * 8.5)
    json.dumps(data)


# =============================================================================
# Endpoint Tests
# =============================================================================


def _payload(items: list[LineItem]) -> list[dict]:
    return [item.model_dump(mode="json", exclude_none=True) for item in items]


@pytest.mark.asyncio
async def test_export_shopify_endpoint(client: AsyncClient, line_items) -> None:
    """Test downloading a Shopify CSV."""
    response = await client.post(
        "/api/export/shopify",
        params={"vendor": "ENROUTE.RUN", "tags": ["SS25", "trail"]},
        json=_payload(line_items),
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment; filename=linesheet_shopify_" in response.headers["content-disposition"]

    rows = _read_csv(response.text)
    assert rows[0]["Vendor"] == "ENROUTE.RUN"
    assert rows[0]["Tags"] == "SS25, trail"


@pytest.mark.asyncio
async def test_export_shopify_endpoint_config_vendor(
    client: AsyncClient, line_items, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that the configured vendor is used when none is given."""
    monkeypatch.setenv("LINESHEET_EXPORT_VENDOR", "Configured Vendor")
    response = await client.post("/api/export/shopify", json=_payload(line_items))
    assert _read_csv(response.text)[0]["Vendor"] == "Configured Vendor"


@pytest.mark.asyncio
@pytest.mark.parametrize("export_format", ["csv", "xlsx", "yaml"])
async def test_export_line_items_endpoint(client: AsyncClient, line_items, export_format) -> None:
    """Test downloading flat exports."""
    response = await client.post(
        "/api/export/line-items",
        params={"format": export_format},
        json=_payload(line_items),
    )
    assert response.status_code == 200
    assert f".{export_format}" in response.headers["content-disposition"]
    assert len(response.content) > 0


@pytest.mark.asyncio
async def test_export_line_items_endpoint_json(client: AsyncClient, line_items) -> None:
    """Test the default JSON export."""
    response = await client.post("/api/export/line-items", json=_payload(line_items))
    assert response.status_code == 200
    data = response.json()
    assert [item["id"] for item in data["line_items"]] == ["li-1", "li-2", "li-3"]
    assert data["export_info"]["format"] == "json"


@pytest.mark.asyncio
async def test_export_rejects_invalid_items(client: AsyncClient) -> None:
    """Test that items without a positive quantity are rejected."""
    response = await client.post(
        "/api/export/line-items",
        json=[{"id": "li-1", "product_name": "Tee", "qty": 0, "unit_cost": 1}],
    )
    assert response.status_code == 422
