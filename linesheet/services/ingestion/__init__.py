"""Ingestion package for parsing vendor order sheets into line items."""

from .constants import (
    CANONICAL_FIELDS,
    COLUMN_ALIASES,
    FUZZY_MATCH_THRESHOLD,
    HEADER_SCAN_ROWS,
    RETAIL_COST_RATIO,
)
from .converters import (
    RawRow,
    derive_product_name,
    map_row,
    normalize_table,
    parse_line_items,
    sequential_ids,
    table_to_raw_rows,
    uuid_ids,
)
from .errors import (
    EmptyTableError,
    IngestionError,
    NotYetSupportedError,
    NoValidRowsError,
    ReadFailureError,
    UnsupportedFormatError,
)
from .header_row import find_header_row
from .mapping import (
    infer_column_type,
    infer_numeric_columns,
    map_column,
    normalize_header,
    similarity,
    suggest_column_mapping,
)
from .pricing import PriceResolution, parse_number, resolve_prices
from .processor import process_uploaded_file, read_table
from .readers import (
    RawTable,
    decode_text,
    detect_delimiter,
    get_file_extension,
    read_delimited_text,
    read_workbook,
    select_best_sheet,
    split_delimited_line,
)

__all__ = [
    # Constants
    "CANONICAL_FIELDS",
    "COLUMN_ALIASES",
    "FUZZY_MATCH_THRESHOLD",
    "HEADER_SCAN_ROWS",
    "RETAIL_COST_RATIO",
    # Errors
    "IngestionError",
    "UnsupportedFormatError",
    "NotYetSupportedError",
    "EmptyTableError",
    "NoValidRowsError",
    "ReadFailureError",
    # Readers
    "RawTable",
    "decode_text",
    "detect_delimiter",
    "get_file_extension",
    "read_delimited_text",
    "read_workbook",
    "select_best_sheet",
    "split_delimited_line",
    # Header detection
    "find_header_row",
    # Mapping
    "infer_column_type",
    "infer_numeric_columns",
    "map_column",
    "normalize_header",
    "similarity",
    "suggest_column_mapping",
    # Pricing
    "PriceResolution",
    "parse_number",
    "resolve_prices",
    # Converters
    "RawRow",
    "derive_product_name",
    "map_row",
    "normalize_table",
    "parse_line_items",
    "sequential_ids",
    "table_to_raw_rows",
    "uuid_ids",
    # Processor
    "process_uploaded_file",
    "read_table",
]
