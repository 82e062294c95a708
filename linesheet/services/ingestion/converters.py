"""Row mapping and line item conversion for vendor order sheets."""

import itertools
import logging
import re
import uuid
from collections.abc import Callable, Sequence
from typing import Literal

from linesheet.schemas.line_items import FileUploadResult, LineItem, UploadSummary

from .constants import RETAIL_COST_RATIO
from .errors import EmptyTableError, NoValidRowsError
from .header_row import find_header_row
from .mapping import infer_numeric_columns, map_column
from .pricing import parse_number, resolve_prices

logger = logging.getLogger(__name__)

# Header (lowercased, trimmed) -> cell text for one data row
RawRow = dict[str, str]

IdFactory = Callable[[], str]

NumericColumns = Sequence[tuple[str, Literal["qty", "cost"]]]

_TEXT_FIELDS = (
    "sku",
    "vendor_sku",
    "variant_title",
    "size",
    "color",
    "material",
    "barcode",
    "hs_code",
    "country_of_origin",
)

_HEADER_QUOTES = re.compile(r"['\"]")


def uuid_ids(prefix: str = "li") -> IdFactory:
    """Identifier source producing random UUID based ids."""
    return lambda: f"{prefix}-{uuid.uuid4().hex}"


def sequential_ids(prefix: str = "li", start: int = 1) -> IdFactory:
    """Identifier source producing ``prefix-1``, ``prefix-2``, ..."""
    counter = itertools.count(start)
    return lambda: f"{prefix}-{next(counter)}"


def _clean_header(cell: str) -> str:
    return _HEADER_QUOTES.sub("", cell.lower()).strip()


def table_to_raw_rows(table: Sequence[Sequence[str]], header_index: int) -> tuple[list[str], list[RawRow]]:
    """Key every data row below the header row by its header text.

    Headers are lowercased with quote characters removed. If the same
    header text appears twice, the first column keeps it. Blank rows are
    dropped.

    Args:
        table: Raw rows of string cells.
        header_index: Index of the header row in ``table``.

    Returns:
        Tuple of (headers, rows).
    """
    columns: dict[str, int] = {}
    for idx, cell in enumerate(table[header_index]):
        columns.setdefault(_clean_header(cell), idx)

    rows: list[RawRow] = []
    for values in table[header_index + 1:]:
        if not any(value.strip() for value in values):
            continue
        rows.append({
            header: values[idx].strip() if idx < len(values) else ""
            for header, idx in columns.items()
        })

    return list(columns), rows


def map_row(row: RawRow, numeric_columns: NumericColumns = ()) -> dict[str, str]:
    """Map a raw row onto canonical fields.

    The first column with a value for a field wins. Columns inferred as
    quantity or cost only fill qty/unit_cost when those are still empty.

    Args:
        row: Raw row keyed by header.
        numeric_columns: (header, role) pairs from ``infer_numeric_columns``.

    Returns:
        Dict of canonical field -> raw cell text.
    """
    mapped: dict[str, str] = {}
    for header, value in row.items():
        field = map_column(header)
        if field and not mapped.get(field):
            mapped[field] = value

    for header, role in numeric_columns:
        value = row.get(header)
        if not value:
            continue
        if role == "qty" and not mapped.get("qty"):
            mapped["qty"] = value
        elif role == "cost" and not mapped.get("unit_cost"):
            mapped["unit_cost"] = value

    return mapped


def derive_product_name(mapped: dict[str, str]) -> str:
    """Return the product name, falling back to "vendor sku - sku - variant"."""
    if mapped.get("product_name"):
        return mapped["product_name"]
    parts = [mapped.get(field) for field in ("vendor_sku", "sku", "variant_title")]
    return " - ".join(part for part in parts if part)


def build_line_item(mapped: dict[str, str], product_name: str, qty: float, item_id: str) -> LineItem:
    """Build a LineItem from a mapped row that passed validation.

    Args:
        mapped: Canonical field -> raw cell text.
        product_name: Resolved, non-empty product name.
        qty: Parsed, positive quantity.
        item_id: Identifier for the new item.

    Returns:
        The LineItem. A zero cost is estimated from retail when retail is known.
    """
    cost, retail = resolve_prices(mapped.get("unit_cost"), mapped.get("unit_retail"))
    if cost <= 0:
        cost = retail * RETAIL_COST_RATIO if retail else 0.0

    return LineItem(
        id=item_id,
        product_name=product_name,
        qty=qty,
        unit_cost=cost,
        unit_retail=retail,
        weight=parse_number(mapped["weight"]) if mapped.get("weight") else None,
        **{field: mapped.get(field) or None for field in _TEXT_FIELDS},
    )


def parse_line_items(
    rows: Sequence[RawRow],
    headers: Sequence[str] | None = None,
    id_factory: IdFactory | None = None,
) -> FileUploadResult:
    """Convert raw rows into validated line items.

    Rows without a product name or with a quantity of zero or less are
    skipped. Skipping a named row adds a warning.

    Args:
        rows: Raw rows keyed by header.
        headers: Header order; defaults to the keys of the first row.
        id_factory: Identifier source for the items (random UUIDs by default).

    Returns:
        FileUploadResult with items, warnings and summary totals.
    """
    next_id = id_factory or uuid_ids()
    if headers is None:
        headers = list(rows[0]) if rows else []

    numeric_columns = infer_numeric_columns(headers, rows)

    items: list[LineItem] = []
    warnings: list[str] = []
    skipped = 0

    for i, row in enumerate(rows):
        mapped = map_row(row, numeric_columns)
        product_name = derive_product_name(mapped)
        qty = parse_number(mapped.get("qty"))

        if not product_name or qty <= 0:
            skipped += 1
            if product_name:
                warnings.append(f'Row {i + 2}: Skipped "{product_name}" - invalid quantity')
            continue

        items.append(build_line_item(mapped, product_name, qty, next_id()))

    total_units = sum(item.qty for item in items)
    total_cost = sum(item.qty * item.unit_cost for item in items)

    logger.info(
        "Parsed %d line items from %d rows (%d skipped, %d warnings)",
        len(items), len(rows), skipped, len(warnings),
    )

    return FileUploadResult(
        success=bool(items),
        data=items or None,
        warnings=warnings or None,
        error=None if items else NoValidRowsError.default_message,
        summary=UploadSummary(
            total_rows=len(rows),
            valid_rows=len(items),
            skipped_rows=skipped,
            total_units=total_units,
            total_cost=total_cost,
        ),
    )


def normalize_table(table: Sequence[Sequence[str]], id_factory: IdFactory | None = None) -> FileUploadResult:
    """Locate the header row of a raw table and convert its rows to line items.

    Raises:
        EmptyTableError: If there is no data row below the header row.
    """
    if len(table) < 2:
        raise EmptyTableError()

    header_index = find_header_row(table)
    headers, rows = table_to_raw_rows(table, header_index)
    if not rows:
        raise EmptyTableError()

    return parse_line_items(rows, headers, id_factory)
