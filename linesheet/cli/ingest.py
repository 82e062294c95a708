"""Ingest a vendor order sheet from the command line.

Usage:
    linesheet-ingest ORDER.xlsx
    linesheet-ingest ORDER.csv --json
    linesheet-ingest ORDER.csv --shopify products.csv --vendor "ENROUTE.RUN"
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from linesheet.config import settings
from linesheet.schemas.line_items import FileUploadResult
from linesheet.services.export_service import export_to_shopify_csv, format_file_size
from linesheet.services.ingestion import process_uploaded_file


def configure_logging(verbose: bool) -> None:
    """Configure root logging for command line use."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def print_result(result: FileUploadResult) -> None:
    """Print a human-readable summary of an ingestion result."""
    if result.summary:
        s = result.summary
        print(f"Rows: {s.total_rows}  valid: {s.valid_rows}  skipped: {s.skipped_rows}")
        print(f"Units: {s.total_units:g}  cost: {s.total_cost:,.2f}")

    if result.data:
        print()
        print(f"{'SKU':<16} {'Product':<32} {'Qty':>8} {'Cost':>10} {'Retail':>10}")
        print("-" * 80)
        for item in result.data:
            retail = f"{item.unit_retail:.2f}" if item.unit_retail is not None else ""
            print(
                f"{(item.sku or ''):<16.16} {item.product_name:<32.32} "
                f"{item.qty:>8g} {item.unit_cost:>10.2f} {retail:>10}"
            )

    for warning in result.warnings or []:
        print(f"Warning: {warning}")

    if result.error:
        print(f"Error: {result.error}")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Parse a vendor order sheet into line items",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("file", type=Path, help="CSV, TXT, XLSX or XLS order sheet")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON"
    )
    parser.add_argument(
        "--shopify",
        type=Path,
        metavar="OUT",
        help="Also write a Shopify product import CSV to OUT"
    )
    parser.add_argument(
        "--vendor",
        help="Vendor name for the Shopify export (default from config)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        content = args.file.read_bytes()
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 2

    result = process_uploaded_file(content, args.file.name)

    if args.json:
        print(json.dumps(result.to_payload(), indent=2))
    else:
        print(f"{args.file.name} ({format_file_size(len(content))})")
        print_result(result)

    if args.shopify and result.data:
        options = settings.shopify_export_options(vendor=args.vendor)
        args.shopify.write_text(export_to_shopify_csv(result.data, options), encoding="utf-8")
        if not args.json:
            print(f"Shopify CSV written to {args.shopify}")

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
